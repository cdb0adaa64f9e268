"""The auth blueprint."""

from flask import Blueprint

bp = Blueprint("auth", __name__, url_prefix="/auth")

from . import identity, routes  # noqa: E402

__all__ = ["identity", "routes"]
