"""Utility functions for the request handlers."""

from __future__ import annotations

from typing import Any

from flask import request

from .errors import ValidationError


def get_json_body() -> dict[str, Any]:
    """Return the request's JSON object body.

    Raises:
        ValidationError: If the body is missing or not a JSON object.
    """
    body = request.get_json(silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object.")
    return body
