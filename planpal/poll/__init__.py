"""The poll blueprint."""

from flask import Blueprint

bp = Blueprint("poll", __name__, url_prefix="/polls")

from . import routes  # noqa: E402

__all__ = ["routes"]
