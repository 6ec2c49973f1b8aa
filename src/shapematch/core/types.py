"""
Core types and constants for shapematch.

This module provides:
- FeatureValue / FeatureVector aliases (a slot is a float or None for missing)
- Spreadsheet sentinel tokens recognized as missing values
- Default axis configuration
"""

from enum import Enum
from typing import Optional

# A single slot: a number in [0, 1], or None when the value is missing.
FeatureValue = Optional[float]

# Ordered, fixed-length vector of slots (length == number of feature keys).
FeatureVector = tuple[FeatureValue, ...]


class SchedulerState(str, Enum):
    """Recompute scheduler states."""

    IDLE = "idle"
    PENDING = "pending"


# =============================================================================
# Missing-value sentinels
# =============================================================================
# Error cells exported by spreadsheet tools. Compared after strip() and upper().

MISSING_SENTINELS: frozenset[str] = frozenset(
    {
        "",
        "#VALUE!",
        "#N/A",
        "#DIV/0!",
        "#REF!",
        "#NAME?",
        "#NUM!",
        "#NULL!",
        "N/A",
    }
)


# =============================================================================
# Axis defaults
# =============================================================================

DEFAULT_FEATURE_KEYS: tuple[str, ...] = (
    "axis1",
    "axis2",
    "axis3",
    "axis4",
    "axis5",
    "axis6",
)

# Value every query axis takes on reset.
QUERY_MIDPOINT = 0.5

# Minimum number of axes both vectors must share for a score to be trusted.
DEFAULT_MIN_COMMON_DIMS = 2

# Trailing-edge throttle interval in milliseconds.
DEFAULT_THROTTLE_MS = 120

DEFAULT_TOP_N = 10
