"""Data models for the poll blueprint."""

from __future__ import annotations

from typing import Any, TypedDict

from planpal.core.types import StoredDocument


class PollOption(TypedDict):
    """One selectable choice; votes and reactions hold user ids."""

    id: str
    text: str
    payload: dict[str, Any] | None
    votes: list[str]
    reactions: dict[str, list[str]]


class Poll(StoredDocument, total=False):
    """A poll scoped to a group and optionally to one of its events."""

    groupId: str
    eventId: str | None
    question: str
    type: str
    createdBy: str
    options: list[PollOption]
