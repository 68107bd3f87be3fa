"""
Authentication router for the shared ledger API.

Mounts under ``/auth`` (prefix set in ``main.py``).

Endpoints:
    POST /register — Create an account (email must be unique).
    POST /login    — Verify credentials and set the session cookie.
    POST /logout   — Clear the session cookie.
    GET  /me       — Return the currently authenticated user's profile.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.models.user import User
from app.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from app.schemas.common import ErrorResponse, MessageResponse
from app.services.auth_service import authenticate_user, get_current_user, register_user
from app.utils.security import create_session_token, session_max_age

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


# ---------------------------------------------------------------------------
# POST /register
# ---------------------------------------------------------------------------


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=201,
    summary="Register a new user",
    responses={
        201: {"description": "User created."},
        400: {"model": ErrorResponse, "description": "Invalid input or email already registered."},
    },
)
def register(
    data: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Create a user account.  Does not log the user in."""
    user = register_user(db, data)
    return UserResponse.model_validate(user)


# ---------------------------------------------------------------------------
# POST /login
# ---------------------------------------------------------------------------


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description=(
        "Verifies email and password and sets an HTTP-only session cookie "
        "holding a signed JWT valid for seven days."
    ),
    responses={
        200: {"description": "Authenticated; session cookie set."},
        400: {"model": ErrorResponse, "description": "Invalid input."},
        401: {"model": ErrorResponse, "description": "Invalid credentials."},
    },
)
def login(
    data: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> LoginResponse:
    """Authenticate a user and issue the session cookie.

    Raises:
        HTTPException 401: If the email is unknown or the password is wrong.
    """
    user = authenticate_user(db, str(data.email), data.password)

    if user is None:
        logger.warning("Failed login attempt for email='%s'", data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    settings = get_settings()
    token = create_session_token(user)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=session_max_age(),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )

    logger.info("Successful login for email='%s'", user.email)
    return LoginResponse(user=UserResponse.model_validate(user))


# ---------------------------------------------------------------------------
# POST /logout
# ---------------------------------------------------------------------------


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
)
def logout(response: Response) -> MessageResponse:
    """Clear the session cookie.  Succeeds even without an active session."""
    settings = get_settings()
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return MessageResponse(message="Logged out")


# ---------------------------------------------------------------------------
# GET /me
# ---------------------------------------------------------------------------


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Authenticated user's profile",
    responses={
        401: {"model": ErrorResponse, "description": "Missing, invalid or expired session."},
    },
)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    return UserResponse.model_validate(current_user)
