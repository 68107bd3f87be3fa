"""
Shared Pydantic v2 schemas reused across multiple modules.

Provides the camelCase base model used by every request/response body, the
generic message envelope, and the error envelope documented in OpenAPI.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.utils.dates import parse_date_input


# Accepts "YYYY-MM-DD" or a full ISO-8601 timestamp; see app.utils.dates.
DateInput = Annotated[datetime, BeforeValidator(parse_date_input)]


class CamelModel(BaseModel):
    """Base model serialising fields as camelCase (``month_id`` → ``monthId``).

    Input accepts both the camelCase alias and the Python field name, and
    ORM instances can be validated directly (``from_attributes``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Generic message envelope for operations that do not return a resource.

    Attributes:
        message: Short human-readable result summary.
        detail: Optional extended information.
    """

    message: str = Field(..., description="Summary of the operation result.")
    detail: str | None = Field(
        default=None,
        description="Additional information (context, hint, etc.).",
    )


class ErrorResponse(BaseModel):
    """Body of every error response (4xx and 5xx).

    Attributes:
        error: Human-readable error message.
    """

    error: str = Field(..., description="Error message.")
