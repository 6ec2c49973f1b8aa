"""
Feature vector model: raw cells -> fixed-length vectors of float | None.
"""

from .normalize import (
    clamp_unit,
    fill_missing,
    is_missing_token,
    normalize,
    parse_feature_value,
)

__all__ = [
    "clamp_unit",
    "fill_missing",
    "is_missing_token",
    "normalize",
    "parse_feature_value",
]
