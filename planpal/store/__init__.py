"""Key-value store adapter used by every service."""

from flask import current_app

from planpal.constants import DEFAULT_TRANSACTION_ATTEMPTS
from planpal.extensions import db

from .kv import KVStore
from .models import KVEntry


def client():
    """Return a store bound to the current application's database session."""
    attempts = current_app.config.get(
        "STORE_TRANSACTION_ATTEMPTS", DEFAULT_TRANSACTION_ATTEMPTS
    )
    return KVStore(db.session, attempts)


__all__ = ["KVEntry", "KVStore", "client"]
