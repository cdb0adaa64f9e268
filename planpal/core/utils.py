"""Small helpers shared by the service modules."""

from __future__ import annotations

import datetime
import uuid
from typing import Any

from planpal.errors import ValidationError


def new_id() -> str:
    """Return a fresh random identifier."""
    return str(uuid.uuid4())


def utcnow_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def clean_str(value: Any, field: str) -> str:
    """Strip a request string; None counts as blank and other types are rejected."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string.")
    return value.strip()
