"""
Dependency injection for API endpoints.

The application holds exactly one QuerySession on ``app.state.session``,
created at startup from settings or injected by ``create_app(session=...)``.
Handlers that mutate the query are ``async def`` so that the throttle timer
is scheduled on the application's event loop.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..session.state import QuerySession
from .errors import DatasetUnavailableError


def get_session(request: Request) -> QuerySession:
    """
    Dependency that provides the application's query session.

    Raises:
        DatasetUnavailableError: If no dataset was loaded at startup
    """
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise DatasetUnavailableError()
    return session


SessionDependency = Annotated[QuerySession, Depends(get_session)]
