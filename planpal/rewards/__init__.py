"""The rewards blueprint."""

from flask import Blueprint

bp = Blueprint("rewards", __name__, url_prefix="/rewards")

from . import routes  # noqa: E402

__all__ = ["routes"]
