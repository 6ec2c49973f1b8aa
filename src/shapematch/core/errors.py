"""
Exceptions raised by shapematch.

Comparison and parsing problems never raise: they are represented as missing
slots or ``None`` scores. Only imperative entry points and dataset loading
raise, so that the host can report them.
"""

from typing import Any


class ShapeMatchError(Exception):
    """Base error for shapematch."""


class DatasetLoadError(ShapeMatchError):
    """Raised when a dataset source cannot be read."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load dataset from {source}: {reason}")


class InvalidQueryError(ShapeMatchError, ValueError):
    """Raised when a query vector or axis update is rejected."""


class RecordNotFoundError(ShapeMatchError, KeyError):
    """Raised when a record id is not present in the dataset."""

    def __init__(self, record_id: Any):
        self.record_id = record_id
        super().__init__(record_id)

    def __str__(self) -> str:
        return f"Record not found: {self.record_id}"
