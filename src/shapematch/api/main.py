"""
FastAPI host application for shapematch.

Serves one interactive query session over HTTP. The ranking core knows
nothing about this layer: the app only calls the session's entry points
and reads its published results.

Run with:
    SHAPEMATCH_DATASET_PATH=shapes.csv uvicorn shapematch.api.main:app
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

import msgspec
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from ..core.config import Settings, get_settings
from ..dataset.loader import load_dataset
from ..session.state import QuerySession
from .errors import register_error_handlers
from .routers import query, records, results

logger = logging.getLogger(__name__)


class MSGSpecResponse(Response):
    """Response class using msgspec for JSON serialization."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        if content is None:
            return b""
        return msgspec.json.encode(content)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_session(settings: Settings) -> Optional[QuerySession]:
    """
    Load the configured dataset and open a session on it.

    Returns None when no dataset path is configured. Load failures propagate
    and abort startup.
    """
    if not settings.dataset_path:
        logger.warning("SHAPEMATCH_DATASET_PATH not set; serving without data")
        return None

    dataset = load_dataset(
        settings.dataset_path,
        feature_keys=settings.feature_keys,
        id_column=settings.id_column,
        name_column=settings.name_column,
        encoding=settings.dataset_encoding,
    )
    return QuerySession.from_settings(dataset, settings)


def create_app(
    session: Optional[QuerySession] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        session: Pre-built session; when omitted one is built at startup
            from settings.dataset_path
        settings: Settings override (defaults to get_settings())

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.session is None:
            configure_logging(settings.log_level)
            app.state.session = build_session(settings)
        current = app.state.session
        if current is not None:
            logger.info(
                "Session ready: %d records, %d dimensions, top_n=%d, throttle=%dms",
                len(current.dataset),
                current.dataset.dimensions,
                current.top_n,
                settings.throttle_ms,
            )
        yield
        if app.state.session is not None:
            app.state.session.scheduler.cancel()

    app = FastAPI(
        title=settings.app_name,
        description="Interactive shape similarity ranking",
        version=settings.app_version,
        default_response_class=MSGSpecResponse,
        lifespan=lifespan,
    )
    app.state.session = session

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def add_process_time(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        response.headers["X-Process-Time"] = f"{process_time:.2f}ms"
        return response

    register_error_handlers(app)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with consistent format."""
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        show_detail = settings.debug and settings.environment != "production"
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "detail": str(exc) if show_detail else None,
                }
            },
        )

    @app.get("/health", tags=["health"])
    async def health_check():
        current = app.state.session
        return {
            "status": "healthy",
            "has_data": bool(current and current.has_data),
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.get("/", tags=["root"])
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs",
        }

    prefix = settings.api_prefix
    app.include_router(query.router, prefix=f"{prefix}/query", tags=["query"])
    app.include_router(results.router, prefix=f"{prefix}/results", tags=["results"])
    app.include_router(records.router, prefix=f"{prefix}/records", tags=["records"])

    return app


app = create_app()
