"""Core data types for the planpal application."""

from typing import TypedDict


class _StoredDocumentBase(TypedDict):
    id: str
    createdAt: str


class StoredDocument(_StoredDocumentBase, total=False):
    """Generic JSON document kept in the key-value store."""

    updatedAt: str
