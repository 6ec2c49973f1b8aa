"""
Human-readable explanations for a ranked match.

Given the query and a candidate vector, describe which axes both share
strongly and where they differ most. Only axes observed in both vectors
are considered.
"""

from __future__ import annotations

from typing import Sequence

from ..core.types import FeatureVector


def similarity_label(score: float) -> str:
    """Convert similarity score to human-readable label."""
    if score >= 0.95:
        return "Nearly Identical"
    elif score >= 0.90:
        return "Very Similar"
    elif score >= 0.85:
        return "Similar"
    elif score >= 0.80:
        return "Somewhat Similar"
    elif score >= 0.70:
        return "Moderately Similar"
    else:
        return "Different"


def shared_traits(
    query: FeatureVector,
    vector: FeatureVector,
    keys: Sequence[str],
    threshold: float = 0.1,
    min_value: float = 0.7,
    limit: int = 5,
) -> list[str]:
    """
    Find axes where both vectors are close AND high.

    A shared trait requires:
    - Both vectors observe the axis
    - The absolute difference is within threshold
    - Both values are at least min_value

    Args:
        query: Query vector
        vector: Candidate vector
        keys: Axis names, aligned with the vectors
        threshold: Max difference to count as "close"
        min_value: Minimum value on both sides to count as "high"
        limit: Maximum number of traits returned

    Returns:
        Axis names, strongest shared value first
    """
    traits: list[tuple[float, str]] = []

    for key, q, v in zip(keys, query, vector):
        if q is None or v is None:
            continue
        if abs(q - v) <= threshold and min(q, v) >= min_value:
            traits.append((min(q, v), key))

    traits.sort(key=lambda t: t[0], reverse=True)
    return [name for _, name in traits[:limit]]


def key_differences(
    query: FeatureVector,
    vector: FeatureVector,
    keys: Sequence[str],
    threshold: float = 0.2,
    limit: int = 3,
) -> list[str]:
    """
    Find axes with the largest gaps, from the candidate's point of view.

    Args:
        query: Query vector
        vector: Candidate vector
        keys: Axis names, aligned with the vectors
        threshold: Minimum gap to count as a difference
        limit: Maximum number of differences returned

    Returns:
        Descriptions like "higher axis3" / "lower axis1", largest gap first
    """
    differences: list[tuple[float, str]] = []

    for key, q, v in zip(keys, query, vector):
        if q is None or v is None:
            continue
        diff = v - q  # Positive means the candidate is higher
        if abs(diff) >= threshold:
            direction = "higher" if diff > 0 else "lower"
            differences.append((abs(diff), f"{direction} {key}"))

    differences.sort(key=lambda d: d[0], reverse=True)
    return [d[1] for d in differences[:limit]]
