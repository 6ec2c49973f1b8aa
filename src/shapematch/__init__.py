"""
shapematch

Rank shaped entities against a user-sculpted query shape.

Key Features:
- Missing-value-aware cosine similarity over shared axes only
- Peak-axis pre-filter (different dominant axis = different shape)
- Top-N ranking with stable ordering of ties
- Trailing-edge throttled re-ranking for bursty slider input

Usage:
    from shapematch import QuerySession, load_dataset

    dataset = load_dataset("shapes.csv")
    session = QuerySession(dataset, top_n=5)
    session.subscribe(lambda result: print([r.name for r in result.records]))
    session.set_axis(0, 0.9)
    session.flush()
"""

from .core.config import Settings, get_settings
from .core.errors import (
    DatasetLoadError,
    InvalidQueryError,
    RecordNotFoundError,
    ShapeMatchError,
)
from .core.models import RankedResult, Record, ScoredCandidate
from .dataset import Dataset, load_dataset, parse_csv_text
from .features import normalize, parse_feature_value
from .ranking import rank_top_n
from .session import QuerySession, UpdateScheduler
from .similarity import cosine_similarity, peak_axis, peaks_conflict

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "DatasetLoadError",
    "InvalidQueryError",
    "RecordNotFoundError",
    "ShapeMatchError",
    # Models
    "RankedResult",
    "Record",
    "ScoredCandidate",
    # Dataset
    "Dataset",
    "load_dataset",
    "parse_csv_text",
    # Feature vectors
    "normalize",
    "parse_feature_value",
    # Ranking
    "rank_top_n",
    "cosine_similarity",
    "peak_axis",
    "peaks_conflict",
    # Session
    "QuerySession",
    "UpdateScheduler",
]
