"""
Core types, configuration, value objects and errors for shapematch.
"""

from .config import Settings, get_settings
from .errors import (
    DatasetLoadError,
    InvalidQueryError,
    RecordNotFoundError,
    ShapeMatchError,
)
from .models import RankedResult, Record, ScoredCandidate
from .types import (
    DEFAULT_FEATURE_KEYS,
    MISSING_SENTINELS,
    QUERY_MIDPOINT,
    FeatureValue,
    FeatureVector,
    SchedulerState,
)

__all__ = [
    "Settings",
    "get_settings",
    "DatasetLoadError",
    "InvalidQueryError",
    "RecordNotFoundError",
    "ShapeMatchError",
    "RankedResult",
    "Record",
    "ScoredCandidate",
    "DEFAULT_FEATURE_KEYS",
    "MISSING_SENTINELS",
    "QUERY_MIDPOINT",
    "FeatureValue",
    "FeatureVector",
    "SchedulerState",
]
