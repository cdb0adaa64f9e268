"""Data models for the chat blueprint."""

from __future__ import annotations

from typing import TypedDict


class ChatRecord(TypedDict):
    """One user message and the assistant's reply."""

    id: str
    groupId: str
    userId: str
    message: str
    reply: str
    createdAt: str


class Suggestion(TypedDict):
    type: str
    text: str
    timestamp: str
