"""The chat blueprint: group assistant and canned planning tips."""

from flask import Blueprint

bp = Blueprint("chat", __name__)

from . import routes  # noqa: E402

__all__ = ["routes"]
