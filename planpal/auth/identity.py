"""Bearer-token identity: issue signed tokens and resolve them per request."""

from __future__ import annotations

from typing import Any

from flask import current_app
from itsdangerous import BadSignature, URLSafeTimedSerializer

from planpal.extensions import login_manager
from planpal.user.models import UserSession

TOKEN_SALT = "planpal-auth"


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def issue_token(user_id: str, email: str) -> str:
    """Return a signed bearer token for the given identity."""
    return _serializer().dumps({"uid": user_id, "email": email})


def verify_token(token: str) -> dict[str, Any] | None:
    """Resolve a token to ``{"uid", "email"}``, or None if invalid or expired."""
    try:
        payload = _serializer().loads(
            token, max_age=current_app.config["AUTH_TOKEN_MAX_AGE"]
        )
    except BadSignature:
        return None
    if not isinstance(payload, dict) or not payload.get("uid"):
        return None
    return payload


def parse_bearer(header: str | None) -> str | None:
    """Extract the credential from an ``Authorization: Bearer ...`` header."""
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


@login_manager.request_loader
def load_user_from_request(request):
    """Resolve the Authorization header into the current user."""
    token = parse_bearer(request.headers.get("Authorization"))
    if token is None:
        return None
    payload = verify_token(token)
    if payload is None:
        current_app.logger.warning("Rejected invalid or expired bearer token")
        return None
    return UserSession({"uid": payload["uid"], "email": payload.get("email", "")})
