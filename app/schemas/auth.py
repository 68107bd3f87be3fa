"""
Pydantic v2 schemas for the authentication endpoints.

Covers the registration and login payloads and the public user
representation returned by ``/auth/register``, ``/auth/login`` and
``/auth/me``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.schemas.common import CamelModel


class RegisterRequest(BaseModel):
    """Payload accepted by ``POST /auth/register``.

    Attributes:
        email: Unique email address.
        name: Display name (at least 2 characters).
        password: Plain-text password, hashed before storage.
    """

    email: EmailStr = Field(..., description="Unique email address")
    name: str = Field(..., min_length=2, max_length=200, description="Display name")
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Plain-text password (HTTPS only); stored as a bcrypt hash",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ana@example.com",
                "name": "Ana",
                "password": "secret123",
            }
        }
    )


class LoginRequest(BaseModel):
    """Payload accepted by ``POST /auth/login``.

    Attributes:
        email: Email address on record.
        password: Plain-text password (transmitted over HTTPS only).
    """

    email: EmailStr = Field(..., description="Email address on record")
    password: str = Field(..., min_length=1, max_length=128, description="Password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ana@example.com",
                "password": "secret123",
            }
        }
    )


class UserResponse(CamelModel):
    """Public representation of a user.  ``password_hash`` is never exposed."""

    id: int
    email: str
    name: str


class LoginResponse(BaseModel):
    """Response body returned after a successful login.

    The session token itself travels only in the HTTP-only cookie.
    """

    user: UserResponse
