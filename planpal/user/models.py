"""Data models for the user blueprint."""

from __future__ import annotations

from collections import UserDict
from typing import TypedDict

from flask_login import UserMixin

from planpal.core.types import StoredDocument


class AwardedBadge(TypedDict):
    """A badge entry stored on a profile."""

    badgeId: str
    name: str
    icon: str
    awardedAt: str


class Profile(StoredDocument, total=False):
    """A user profile document in the store."""

    email: str
    name: str
    profileImage: str | None
    points: int
    lifetimePoints: int
    level: int
    badges: list[AwardedBadge]
    groups: list[str]


class Credential(TypedDict):
    """Login credential for a user; never returned to clients."""

    userId: str
    email: str
    passwordHash: str
    createdAt: str


class UserSession(UserDict, UserMixin):
    """A wrapper class for the resolved identity that Flask-Login understands."""

    def get_id(self) -> str:
        """Return the user ID."""
        return str(self.get("uid", ""))

    @property
    def email(self) -> str:
        """Return the email the credential was issued for."""
        return str(self.get("email", ""))
