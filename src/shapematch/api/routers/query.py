"""
Query router - reads and mutates the session's query vector.

Endpoints:
- GET   /                  - Current query vector
- PUT   /                  - Replace the whole vector
- PATCH /axis/{index}      - Move one axis (slider)
- POST  /reset             - Every axis back to the midpoint
- POST  /adopt/{record_id} - Copy a record's shape into the query
- POST  /flush             - Run a pending recompute now

Every mutation schedules a throttled recompute; bursts of mutations cost a
single ranking pass. Results are read from the results router.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...session.state import QuerySession
from ..dependencies import SessionDependency

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request / Response Models
# =============================================================================


class AxisValue(BaseModel):
    index: int
    key: str
    value: float


class QueryResponse(BaseModel):
    """Current query vector plus scheduler state."""

    values: list[float]
    axes: list[AxisValue]
    pending: bool


class QueryUpdate(BaseModel):
    values: list[float] = Field(min_length=1)


class AxisUpdate(BaseModel):
    value: float


class FlushResponse(BaseModel):
    flushed: bool
    generation: int | None = None


def _query_response(session: QuerySession) -> QueryResponse:
    query = session.query
    return QueryResponse(
        values=list(query),
        axes=[
            AxisValue(index=i, key=key, value=value)
            for i, (key, value) in enumerate(zip(session.dataset.feature_keys, query))
        ],
        pending=session.scheduler.pending,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=QueryResponse)
async def get_query(session: SessionDependency) -> QueryResponse:
    """Get the current query vector."""
    return _query_response(session)


@router.put("", response_model=QueryResponse)
async def put_query(body: QueryUpdate, session: SessionDependency) -> QueryResponse:
    """Replace the query vector. Values are clamped into [0, 1]."""
    session.set_query(body.values)
    return _query_response(session)


@router.patch("/axis/{index}", response_model=QueryResponse)
async def patch_axis(index: int, body: AxisUpdate, session: SessionDependency) -> QueryResponse:
    """Move a single axis, as a slider does."""
    session.set_axis(index, body.value)
    return _query_response(session)


@router.post("/reset", response_model=QueryResponse)
async def reset_query(session: SessionDependency) -> QueryResponse:
    """Set every axis to the midpoint."""
    session.reset_query()
    return _query_response(session)


@router.post("/adopt/{record_id}", response_model=QueryResponse)
async def adopt_shape(record_id: str, session: SessionDependency) -> QueryResponse:
    """Use a record's shape as the query (missing axes become 0)."""
    session.adopt_shape_of(record_id)
    return _query_response(session)


@router.post("/flush", response_model=FlushResponse)
async def flush_query(session: SessionDependency) -> FlushResponse:
    """Run a pending recompute immediately instead of waiting for the throttle."""
    flushed = session.flush()
    latest = session.latest_result
    return FlushResponse(
        flushed=flushed,
        generation=latest.generation if latest is not None else None,
    )
