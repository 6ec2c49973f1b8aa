"""API routers."""

from . import query, records, results

__all__ = ["query", "records", "results"]
