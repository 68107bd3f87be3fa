"""
Authentication business logic for the shared ledger API.

Provides:
- ``register_user`` — create an account with a unique email.
- ``authenticate_user`` — credential verification against the DB.
- ``get_current_user`` — FastAPI dependency that reads the session cookie,
  validates the JWT inside it and loads the user.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.models.user import User
from app.schemas.auth import RegisterRequest
from app.utils.security import decode_session_token, hash_password, verify_password

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Cookie scheme — the session JWT travels in an HTTP-only cookie.
# ``auto_error=False`` so a missing cookie yields our own 401 body.
# ---------------------------------------------------------------------------

session_cookie = APIKeyCookie(
    name=get_settings().SESSION_COOKIE_NAME, auto_error=False
)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def register_user(db: Session, data: RegisterRequest) -> User:
    """Create a new user account.

    Args:
        db: Active SQLAlchemy session.
        data: Validated registration payload.

    Returns:
        The newly created ``User``.

    Raises:
        HTTPException 400: If a user with the same email already exists.
    """
    email = str(data.email)
    if get_user_by_email(db, email) is not None:
        logger.warning("register_user: email already registered '%s'", email)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    user = User(
        email=email,
        name=data.name,
        password_hash=hash_password(data.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Concurrent registration won the unique constraint
        db.rollback()
        logger.warning("register_user: unique violation for '%s'", email)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )
    db.refresh(user)

    logger.info("User registered id=%d email='%s'", user.id, user.email)
    return user


# ---------------------------------------------------------------------------
# Core authentication function
# ---------------------------------------------------------------------------


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Verify email/password credentials against the database.

    Returns ``None`` (instead of raising) so that callers can control the
    HTTP error response; unknown emails and wrong passwords look the same.

    Args:
        db: An active SQLAlchemy session.
        email: The email submitted by the client.
        password: The plain-text password submitted by the client.

    Returns:
        The ``User`` on success, or ``None`` on failure.
    """
    user = get_user_by_email(db, email)

    if user is None:
        logger.debug("authenticate_user: unknown email '%s'", email)
        return None

    if not verify_password(password, user.password_hash):
        logger.debug("authenticate_user: wrong password for '%s'", email)
        return None

    return user


# ---------------------------------------------------------------------------
# FastAPI dependency — current authenticated user
# ---------------------------------------------------------------------------


def get_current_user(
    token: Annotated[str | None, Depends(session_cookie)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """FastAPI dependency that resolves the caller's identity from the session cookie.

    Args:
        token: Raw JWT string from the session cookie, or ``None``.
        db: SQLAlchemy session supplied by ``get_db``.

    Returns:
        The authenticated ``User``.

    Raises:
        HTTPException 401: If the cookie is missing, the token is invalid or
                           expired, or the referenced user no longer exists.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )

    if not token:
        raise credentials_exception

    try:
        claims = decode_session_token(token)
    except ValueError:
        raise credentials_exception

    user: User | None = db.query(User).filter(User.id == claims.user_id).first()
    if user is None:
        raise credentials_exception

    return user
