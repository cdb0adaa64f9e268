"""The suggestions blueprint: movie and place lookups."""

from flask import Blueprint

bp = Blueprint("suggestions", __name__)

from . import routes  # noqa: E402

__all__ = ["routes"]
