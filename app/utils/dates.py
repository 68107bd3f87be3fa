"""
Date parsing for request payloads.

Clients send either a bare date (``2024-01-31``, e.g. from an
``<input type="date">``) or a full ISO-8601 timestamp
(``2024-01-31T18:30``, ``2024-01-31T18:30:00Z``, ``...+02:00``).  Bare dates
are completed with a midnight time component before parsing.  Aware values
are converted to UTC and stored naive, matching the ``DateTime`` columns.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def parse_date_input(value: Any) -> datetime:
    """Parse a client-supplied date or timestamp.

    Args:
        value: A ``str`` in one of the accepted forms, or an already parsed
               ``datetime`` (returned normalised).

    Returns:
        A naive ``datetime`` in UTC.

    Raises:
        ValueError: If *value* is not a string or cannot be parsed.
    """
    if isinstance(value, datetime):
        return _to_naive_utc(value)
    if not isinstance(value, str):
        raise ValueError("Invalid date")

    text = value.strip()
    if not text:
        raise ValueError("Invalid date")
    if "T" not in text:
        text = f"{text}T00:00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError("Invalid date") from exc
    return _to_naive_utc(parsed)


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
