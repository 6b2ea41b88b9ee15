"""
Security utilities: session tokens and password hashing.
Passwords are hashed with bcrypt via passlib. Session tokens use python-jose.
"""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from app.core.config import settings

# ── Password hashing ──────────────────────────────────────────────────────────
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """Return bcrypt hash of the given plain-text password."""
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches the stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


# ── Sessions ──────────────────────────────────────────────────────────────────

class SessionInfo(BaseModel):
    """The signed-in user as seen by the dashboard."""

    user_id: str
    email: str
    name: str
    email_verified: bool = False


def create_session_token(
    session: SessionInfo,
    expire_delta: timedelta | None = None,
) -> str:
    """Sign a session token carrying the user's id, email, name and verified flag."""
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": session.user_id,
        "type": "session",
        "email": session.email,
        "name": session.name,
        "email_verified": session.email_verified,
        "iat": now,
        "exp": now + (expire_delta or timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)),
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: str) -> SessionInfo:
    """
    Decode and validate a session token.
    Raises JWTError on failure.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "session":
        raise JWTError("Invalid token type")
    if not payload.get("sub"):
        raise JWTError("Malformed token: missing subject")
    return SessionInfo(
        user_id=payload["sub"],
        email=payload.get("email", ""),
        name=payload.get("name", ""),
        email_verified=bool(payload.get("email_verified", False)),
    )
