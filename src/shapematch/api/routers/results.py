"""
Results router - serves the most recently published ranking.

Each candidate carries its similarity label, the axes it shares strongly
with the query, and the axes where it differs most.
"""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from ...core.models import RankedResult, ScoredCandidate
from ...similarity.traits import key_differences, shared_traits, similarity_label
from ..dependencies import SessionDependency

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================


class CandidateResponse(BaseModel):
    """A ranked record with comparison details."""

    rank: int
    record_id: str
    name: str
    similarity_score: float
    similarity_label: str
    vector: list[float | None]
    shared_traits: list[str]
    key_differences: list[str]


class ResultStats(BaseModel):
    considered: int
    excluded_by_peak: int
    incomparable: int
    qualified: int


class ResultsResponse(BaseModel):
    generation: int
    computed_at: datetime
    limit: int
    query: list[float | None]
    has_data: bool
    stats: ResultStats
    candidates: list[CandidateResponse]


# =============================================================================
# Helper Functions
# =============================================================================


def _candidate_response(
    candidate: ScoredCandidate, result: RankedResult, keys: tuple[str, ...]
) -> CandidateResponse:
    record = candidate.record
    return CandidateResponse(
        rank=candidate.rank,
        record_id=record.record_id,
        name=record.name,
        similarity_score=round(candidate.score, 4),
        similarity_label=similarity_label(candidate.score),
        vector=list(record.vector),
        shared_traits=shared_traits(result.query, record.vector, keys),
        key_differences=key_differences(result.query, record.vector, keys),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=ResultsResponse)
async def get_results(session: SessionDependency) -> ResultsResponse:
    """
    Get the latest ranked result.

    If nothing has been published yet, ranks the current query once.
    A pending throttled recompute is not forced; call /query/flush for that.
    """
    result = session.latest_result
    if result is None:
        result = session.recompute()
    keys = session.dataset.feature_keys

    return ResultsResponse(
        generation=result.generation,
        computed_at=result.computed_at,
        limit=result.limit,
        query=list(result.query),
        has_data=session.has_data,
        stats=ResultStats(
            considered=result.considered,
            excluded_by_peak=result.excluded_by_peak,
            incomparable=result.incomparable,
            qualified=result.qualified,
        ),
        candidates=[_candidate_response(c, result, keys) for c in result.candidates],
    )
