"""
Error envelope for the HTTP host.

Every error leaves the API as:
{
    "error": {
        "code": "ERROR_CODE",
        "message": "Human-readable message",
        "detail": "Optional additional context"
    }
}

Session and dataset exceptions are mapped here directly, so routers call the
session without translating its errors.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import InvalidQueryError, RecordNotFoundError


def error_response(
    status_code: int, code: str, message: str, detail: Optional[str] = None
) -> JSONResponse:
    error = {"code": code, "message": message}
    if detail:
        error["detail"] = detail
    return JSONResponse(status_code=status_code, content={"error": error})


class DatasetUnavailableError(Exception):
    """No dataset was loaded at startup (503)."""

    status_code = 503
    code = "SERVICE_UNAVAILABLE"

    def __init__(self, reason: str = "No dataset loaded"):
        self.reason = reason
        super().__init__(reason)


async def record_not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return error_response(
        404,
        "NOT_FOUND",
        "Record not found",
        f"No record with id '{exc.record_id}' in the loaded dataset",
    )


async def invalid_query_handler(request: Request, exc: InvalidQueryError) -> JSONResponse:
    return error_response(400, "VALIDATION_ERROR", "Invalid query", str(exc))


async def dataset_unavailable_handler(
    request: Request, exc: DatasetUnavailableError
) -> JSONResponse:
    return error_response(
        exc.status_code,
        exc.code,
        exc.reason,
        "Set SHAPEMATCH_DATASET_PATH to a CSV file and restart",
    )


def register_error_handlers(app: FastAPI) -> None:
    """Map shapematch exceptions to JSON error responses."""
    app.add_exception_handler(RecordNotFoundError, record_not_found_handler)
    app.add_exception_handler(InvalidQueryError, invalid_query_handler)
    app.add_exception_handler(DatasetUnavailableError, dataset_unavailable_handler)
