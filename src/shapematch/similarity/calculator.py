"""
Similarity calculator for shape comparison.

Computes cosine similarity between feature vectors that may have missing
slots, using only the axes both vectors observe. A peak-axis check runs
first as a cheap categorical filter: shapes whose dominant axis differs are
not compared at all.
"""

from __future__ import annotations

import math
from typing import Optional

from ..core.types import DEFAULT_MIN_COMMON_DIMS, FeatureVector


# =============================================================================
# Core Similarity Computation
# =============================================================================


def cosine_similarity(
    a: FeatureVector,
    b: FeatureVector,
    min_common_dims: int = DEFAULT_MIN_COMMON_DIMS,
) -> Optional[float]:
    """
    Compute cosine similarity between two feature vectors.

    Only uses axes that both vectors have (non-missing in both).
    Requires a minimum number of shared axes: with a single shared axis any
    two positive values score 1.0, which says nothing about shape.

    Args:
        a: First feature vector
        b: Second feature vector
        min_common_dims: Minimum shared axes required for a score

    Returns:
        Cosine similarity in [-1, 1], or None when the vectors are not
        comparable (too few shared axes, or zero magnitude on the overlap)

    Raises:
        ValueError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise ValueError(f"Vector length mismatch: {len(a)} != {len(b)}")

    dot_product = 0.0
    norm_a = 0.0
    norm_b = 0.0
    common = 0

    for va, vb in zip(a, b):
        if va is None or vb is None:
            continue
        dot_product += va * vb
        norm_a += va * va
        norm_b += vb * vb
        common += 1

    if common < min_common_dims:
        return None

    # A zero vector has no direction
    if norm_a == 0 or norm_b == 0:
        return None

    return dot_product / (math.sqrt(norm_a) * math.sqrt(norm_b))


def common_dims(a: FeatureVector, b: FeatureVector) -> int:
    """Number of axes observed in both vectors."""
    return sum(1 for va, vb in zip(a, b) if va is not None and vb is not None)


# =============================================================================
# Peak Filter
# =============================================================================


def peak_axis(vector: FeatureVector) -> Optional[int]:
    """
    Index of the strictly greatest observed value.

    Ties keep the first (lowest) index. Returns None if every slot is missing.
    """
    best_index: Optional[int] = None
    best_value = 0.0

    for index, value in enumerate(vector):
        if value is None:
            continue
        if best_index is None or value > best_value:
            best_index = index
            best_value = value

    return best_index


def peaks_conflict(query_peak: Optional[int], candidate_peak: Optional[int]) -> bool:
    """
    Whether the peak filter excludes a candidate.

    Only a defined peak on both sides can exclude; an undefined peak defers
    to the similarity score.
    """
    if query_peak is None or candidate_peak is None:
        return False
    return query_peak != candidate_peak
