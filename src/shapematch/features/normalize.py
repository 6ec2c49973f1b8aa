"""
Normalization of raw tabular fields into feature vectors.

Raw cells may be strings, numbers or None. Each one is resolved exactly once
into a float in [0, 1] or None (missing); downstream code never looks at the
raw type again.

Malformed cells degrade to missing instead of raising, so a single bad cell
never costs a whole record.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Sequence

from ..core.types import MISSING_SENTINELS, FeatureValue, FeatureVector

logger = logging.getLogger(__name__)


def is_missing_token(value: str) -> bool:
    """Whether a text cell is blank or a spreadsheet error token."""
    return value.strip().upper() in MISSING_SENTINELS


def clamp_unit(value: float) -> float:
    """Clamp a finite float into [0, 1]."""
    return max(0.0, min(1.0, value))


def parse_feature_value(value: Any) -> FeatureValue:
    """Resolve one raw cell into a unit-interval float or None.

    Handles None, numbers, numeric strings with whitespace or thousands
    separators, and spreadsheet error cells (#N/A, #VALUE!, ...).
    """
    if value is None:
        return None

    # bool is an int subclass but never a feature value
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        if is_missing_token(value):
            return None
        try:
            number = float(value.replace(",", "").strip())
        except ValueError:
            logger.debug("Unparseable feature cell %r treated as missing", value)
            return None
    else:
        logger.debug("Unsupported feature cell type %s treated as missing", type(value).__name__)
        return None

    if not math.isfinite(number):
        return None

    return clamp_unit(number)


def normalize(raw_fields: Mapping[str, Any], keys: Sequence[str]) -> FeatureVector:
    """
    Build a feature vector from one raw row.

    Args:
        raw_fields: Parsed row {column_name: cell}
        keys: Ordered feature column names

    Returns:
        Tuple of len(keys) slots in keys order; absent columns are missing
    """
    return tuple(parse_feature_value(raw_fields.get(key)) for key in keys)


def fill_missing(vector: FeatureVector, fill: float = 0.0) -> tuple[float, ...]:
    """Replace missing slots with a constant (used to turn a record into a query)."""
    return tuple(fill if v is None else v for v in vector)
