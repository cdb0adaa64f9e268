"""Data models for the event blueprint."""

from __future__ import annotations

from typing import TypedDict

from planpal.core.types import StoredDocument


class Event(StoredDocument, total=False):
    """An event proposed inside a group."""

    groupId: str
    title: str
    date: str | None
    location: str | None
    type: str
    mood: str | None
    createdBy: str


class Rsvp(TypedDict):
    """A user's attendance answer for an event; one per (event, user)."""

    eventId: str
    userId: str
    status: str
    timestamp: str
