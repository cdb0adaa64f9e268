"""Service layer for group registry operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from planpal.constants import GROUPS, PROFILES
from planpal.core import clean_str, new_id, utcnow_iso
from planpal.errors import ForbiddenError, NotFoundError, ValidationError
from planpal.rewards.services import RewardsService

if TYPE_CHECKING:
    from planpal.store import KVStore

    from .models import Group


class GroupService:
    """Service class for group-related operations."""

    @staticmethod
    def serialize(group: dict[str, Any]) -> dict[str, Any]:
        """Return the client view of a group; the password hash never leaves."""
        data = {k: v for k, v in group.items() if k != "passwordHash"}
        data["hasPassword"] = bool(group.get("passwordHash"))
        return data

    @staticmethod
    def get_group_doc(store: KVStore, group_id: str) -> dict[str, Any]:
        """Fetch the stored group document."""
        group = store.get(store.key(GROUPS, group_id))
        if group is None:
            raise NotFoundError("Group not found")
        return group

    @staticmethod
    def get_group(store: KVStore, group_id: str) -> dict[str, Any]:
        """Fetch a group for display."""
        return GroupService.serialize(GroupService.get_group_doc(store, group_id))

    @staticmethod
    def list_groups(store: KVStore) -> list[dict[str, Any]]:
        """Return every group, oldest first."""
        groups = store.get_by_prefix(store.key(GROUPS, ""))
        return [GroupService.serialize(g) for g in groups]

    @staticmethod
    def list_user_groups(store: KVStore, user_id: str) -> list[dict[str, Any]]:
        """Return the groups a user belongs to."""
        groups = store.get_by_prefix(store.key(GROUPS, ""))
        return [
            GroupService.serialize(g) for g in groups if user_id in g.get("members", [])
        ]

    @staticmethod
    def require_member(group: dict[str, Any], user_id: str) -> None:
        """Raise ForbiddenError unless user_id is a member of group."""
        if user_id not in group.get("members", []):
            raise ForbiddenError("You are not a member of this group.")

    @staticmethod
    def create_group(
        store: KVStore,
        name: Any,
        creator_id: str,
        description: Any = None,
        password: Any = None,
    ) -> dict[str, Any]:
        """Create a group with the creator as its only member."""
        name = clean_str(name, "Name")
        if not name:
            raise ValidationError("Group name is required")
        password = clean_str(password, "Password")

        group_id = new_id()
        group_key = store.key(GROUPS, group_id)
        profile_key = store.key(PROFILES, creator_id)
        group: Group = {
            "id": group_id,
            "name": name,
            "description": clean_str(description, "Description") or None,
            "passwordHash": (
                generate_password_hash(password, method="pbkdf2:sha256")
                if password
                else None
            ),
            "members": [creator_id],
            "polls": [],
            "createdBy": creator_id,
            "createdAt": utcnow_iso(),
        }

        def create(values: dict[str, Any]) -> dict[str, Any]:
            profile = values[profile_key]
            if profile is None:
                raise NotFoundError("Profile not found")
            groups = profile.setdefault("groups", [])
            if group_id not in groups:
                groups.append(group_id)
            return {group_key: group, profile_key: profile}

        store.transaction([group_key, profile_key], create)
        current_app.logger.info(f"Created group: {group_id}")

        RewardsService.award_action(store, creator_id, "create_group")
        return GroupService.serialize(group)

    @staticmethod
    def join_group(
        store: KVStore, group_id: str, user_id: str, password: Any = None
    ) -> tuple[dict[str, Any], bool]:
        """Add a user to a group, checking the group password if it has one.

        Returns the group and whether the user was newly added.
        """
        group_key = store.key(GROUPS, group_id)
        profile_key = store.key(PROFILES, user_id)
        password = password if isinstance(password, str) else ""
        outcome: dict[str, Any] = {}

        def join(values: dict[str, Any]) -> dict[str, Any]:
            group = values[group_key]
            if group is None:
                raise NotFoundError("Group not found")
            password_hash = group.get("passwordHash")
            if password_hash and not check_password_hash(password_hash, password):
                raise ForbiddenError("Incorrect password")
            outcome["group"] = group
            outcome["joined"] = False
            if user_id in group.get("members", []):
                return {}

            profile = values[profile_key]
            if profile is None:
                raise NotFoundError("Profile not found")
            group.setdefault("members", []).append(user_id)
            groups = profile.setdefault("groups", [])
            if group_id not in groups:
                groups.append(group_id)
            outcome["joined"] = True
            return {group_key: group, profile_key: profile}

        store.transaction([group_key, profile_key], join)

        if outcome["joined"]:
            current_app.logger.info(f"User {user_id} joined group {group_id}")
            RewardsService.award_action(store, user_id, "join_group")
        return GroupService.serialize(outcome["group"]), outcome["joined"]
