"""Data models for the group blueprint."""

from __future__ import annotations

from planpal.core.types import StoredDocument


class Group(StoredDocument, total=False):
    """A group document in the store."""

    name: str
    description: str | None
    passwordHash: str | None
    members: list[str]
    polls: list[str]
    createdBy: str
