"""
Credentials and session tokens.

A login produces one signed session token that the client carries in the
``token`` cookie.  The token names the user (``sub`` is the user id as a
string, plus the email for readability) and expires together with the
cookie: both lifetimes come from ``session_lifetime()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

from app.config import get_settings

if TYPE_CHECKING:
    from app.models.user import User

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=get_settings().BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check *plain* against a stored hash; a corrupt hash never matches."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# ---------------------------------------------------------------------------
# Session tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SessionClaims:
    """Verified contents of a session token."""

    user_id: int
    email: str | None
    issued_at: datetime
    expires_at: datetime


def session_lifetime() -> timedelta:
    """How long a session lasts, for both the token and its cookie."""
    return timedelta(minutes=get_settings().JWT_EXPIRATION_MINUTES)


def session_max_age() -> int:
    """Cookie ``Max-Age`` in seconds matching the token expiry."""
    return int(session_lifetime().total_seconds())


def create_session_token(user: User) -> str:
    """Sign a session token for *user*, valid for ``session_lifetime()``."""
    settings = get_settings()
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "iat": issued_at,
        "exp": issued_at + session_lifetime(),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_session_token(token: str) -> SessionClaims:
    """Verify a session token and return who it belongs to.

    Raises:
        ValueError: Bad signature, expired, malformed, or ``sub`` is not a
                    user id.  Callers answer 401.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug("Session token rejected: %s", exc)
        raise ValueError("Invalid or expired session") from exc

    try:
        user_id = int(payload["sub"])
        issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError("Session token is missing required claims") from exc

    return SessionClaims(
        user_id=user_id,
        email=payload.get("email"),
        issued_at=issued_at,
        expires_at=expires_at,
    )
