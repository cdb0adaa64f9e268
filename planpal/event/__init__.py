"""The event blueprint (events and RSVPs)."""

from flask import Blueprint

bp = Blueprint("event", __name__)

from . import routes  # noqa: E402

__all__ = ["routes"]
