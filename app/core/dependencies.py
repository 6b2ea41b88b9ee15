"""
FastAPI dependency injection functions.
Provides get_db, the session dependencies and shared listing parameters.
"""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import InvalidSessionException, UnauthorizedException
from app.core.security import SessionInfo, decode_session_token
from app.db.session import get_db
from app.schemas.dashboard import ListParams

# Re-export get_db so routes can import from one place
__all__ = [
    "get_db",
    "get_session",
    "require_session",
    "list_params",
    "DBSession",
    "CurrentSession",
    "Listing",
]

bearer_scheme = HTTPBearer(auto_error=False)


async def get_session(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> SessionInfo | None:
    """
    Resolve the bearer token into the signed-in user's session.
    Returns None when no token was sent; a token that fails to verify is rejected.
    """
    if credentials is None:
        return None
    try:
        return decode_session_token(credentials.credentials)
    except JWTError:
        raise InvalidSessionException()


async def require_session(
    session: Annotated[SessionInfo | None, Depends(get_session)],
) -> SessionInfo:
    """Dependency that rejects requests without a session."""
    if session is None:
        raise UnauthorizedException("Missing session token")
    return session


def list_params(
    page: int = Query(default=1, le=settings.MAX_PAGE),
    page_size: int = Query(
        default=settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        alias="pageSize",
    ),
    search: str = Query(default="", max_length=200),
) -> ListParams:
    # no lower bound on page; the repository clamps it to 1
    return ListParams(page=page, page_size=page_size, search=search.strip())


# Convenience type aliases for route signatures
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentSession = Annotated[SessionInfo, Depends(require_session)]
Listing = Annotated[ListParams, Depends(list_params)]
