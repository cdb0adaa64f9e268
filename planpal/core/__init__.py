"""Core module for the planpal application."""

from .types import StoredDocument
from .utils import clean_str, new_id, utcnow_iso

__all__ = ["StoredDocument", "clean_str", "new_id", "utcnow_iso"]
