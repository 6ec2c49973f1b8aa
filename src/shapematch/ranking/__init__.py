"""
Top-N ranking of dataset records against a query shape.
"""

from .engine import rank_top_n

__all__ = ["rank_top_n"]
