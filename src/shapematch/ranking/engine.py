"""
Ranking engine: peak filter + similarity over the whole dataset.

Every call is a full recompute: O(len(records) * K) time, O(len(records))
extra space, no caching between calls. Inputs are never mutated.
"""

from __future__ import annotations

import logging
from typing import Iterable

from ..core.models import RankedResult, Record, ScoredCandidate
from ..core.types import DEFAULT_MIN_COMMON_DIMS, FeatureVector
from ..similarity.calculator import cosine_similarity, peak_axis, peaks_conflict

logger = logging.getLogger(__name__)


def rank_top_n(
    query: FeatureVector,
    records: Iterable[Record],
    n: int,
    min_common_dims: int = DEFAULT_MIN_COMMON_DIMS,
) -> RankedResult:
    """
    Rank records by similarity to the query and keep the best n.

    For each record, in dataset order:
    1. Skip it if its peak axis conflicts with the query's
    2. Score it with cosine similarity; skip it if not comparable
    Then stable-sort by descending score (dataset order breaks exact ties)
    and truncate to n.

    Args:
        query: Query vector
        records: Dataset records, in dataset order
        n: Maximum number of candidates returned
        min_common_dims: Minimum shared axes for a score

    Returns:
        RankedResult with at most n candidates

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")

    query = tuple(query)
    query_peak = peak_axis(query)

    considered = 0
    excluded_by_peak = 0
    incomparable = 0
    scored: list[tuple[Record, float]] = []

    for record in records:
        considered += 1

        if peaks_conflict(query_peak, peak_axis(record.vector)):
            excluded_by_peak += 1
            continue

        score = cosine_similarity(query, record.vector, min_common_dims)
        if score is None:
            incomparable += 1
            continue

        scored.append((record, score))

    # sorted() is stable, including with reverse=True
    scored = sorted(scored, key=lambda item: item[1], reverse=True)

    candidates = tuple(
        ScoredCandidate(record=record, score=score, rank=rank)
        for rank, (record, score) in enumerate(scored[:n], 1)
    )

    logger.debug(
        "Ranked %d candidates (considered=%d, excluded_by_peak=%d, incomparable=%d, n=%d)",
        len(candidates),
        considered,
        excluded_by_peak,
        incomparable,
        n,
    )

    return RankedResult(
        query=query,
        candidates=candidates,
        limit=n,
        considered=considered,
        excluded_by_peak=excluded_by_peak,
        incomparable=incomparable,
    )
