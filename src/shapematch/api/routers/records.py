"""
Records router - read-only access to the loaded dataset.

Endpoints:
- GET /             - Page through records in dataset order
- GET /summary      - Per-axis coverage and peak distribution
- GET /{record_id}  - One record
"""

from typing import Annotated, Any

from fastapi import APIRouter, Query
from pydantic import BaseModel

from ...core.models import Record
from ..dependencies import SessionDependency

router = APIRouter()


class RecordResponse(BaseModel):
    record_id: str
    name: str
    vector: list[float | None]
    attributes: dict[str, Any]


class RecordPage(BaseModel):
    total: int
    limit: int
    offset: int
    records: list[RecordResponse]


def _record_response(record: Record) -> RecordResponse:
    return RecordResponse(
        record_id=record.record_id,
        name=record.name,
        vector=list(record.vector),
        attributes=dict(record.attributes),
    )


@router.get("", response_model=RecordPage)
async def list_records(
    session: SessionDependency,
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> RecordPage:
    records = session.dataset.records
    return RecordPage(
        total=len(records),
        limit=limit,
        offset=offset,
        records=[_record_response(r) for r in records[offset : offset + limit]],
    )


@router.get("/summary")
async def records_summary(session: SessionDependency) -> dict[str, Any]:
    return session.dataset.summary()


@router.get("/{record_id}", response_model=RecordResponse)
async def get_record(record_id: str, session: SessionDependency) -> RecordResponse:
    return _record_response(session.dataset.require(record_id))
