"""Service layer for user profiles: lookup, updates and avatar uploads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import current_app

from planpal.constants import PROFILES
from planpal.core import clean_str, utcnow_iso
from planpal.errors import NotFoundError, ValidationError
from planpal.storage import decode_image_data, upload_bytes

if TYPE_CHECKING:
    from planpal.store import KVStore

    from .models import Profile


class ProfileService:
    """Service class for profile documents."""

    @staticmethod
    def new_profile(user_id: str, email: str, name: str) -> Profile:
        """Build an empty profile for a freshly registered user."""
        return {
            "id": user_id,
            "email": email,
            "name": name,
            "profileImage": None,
            "points": 0,
            "lifetimePoints": 0,
            "level": 1,
            "badges": [],
            "groups": [],
            "createdAt": utcnow_iso(),
        }

    @staticmethod
    def get_profile(store: KVStore, user_id: str) -> dict[str, Any]:
        """Fetch a profile by user id."""
        profile = store.get(store.key(PROFILES, user_id))
        if profile is None:
            raise NotFoundError("Profile not found.")
        return profile

    @staticmethod
    def update_profile(
        store: KVStore, user_id: str, update_data: dict[str, Any]
    ) -> dict[str, Any]:
        """Update the editable fields of a profile (name, profileImage)."""
        changes: dict[str, Any] = {}
        if "name" in update_data and update_data["name"] is not None:
            name = clean_str(update_data["name"], "Name")
            if not name:
                raise ValidationError("Name cannot be blank.")
            changes["name"] = name
        if "profileImage" in update_data:
            image = update_data["profileImage"]
            if image is not None and not isinstance(image, str):
                raise ValidationError("profileImage must be a URL or null.")
            changes["profileImage"] = image

        def apply(profile: dict[str, Any]) -> None:
            profile.update(changes)
            profile["updatedAt"] = utcnow_iso()

        profile = store.update(
            store.key(PROFILES, user_id), apply, missing_message="Profile not found."
        )
        current_app.logger.info(f"Updated profile: {user_id}")
        return profile

    @staticmethod
    def upload_profile_image(
        store: KVStore, user_id: str, image_data: Any, file_name: Any = None
    ) -> str:
        """Store an uploaded avatar and point the profile at it."""
        if not image_data or not isinstance(image_data, str):
            raise ValidationError("Image data is required.")
        ProfileService.get_profile(store, user_id)

        data, content_type = decode_image_data(image_data)
        file_name = clean_str(file_name, "fileName") or None
        url = upload_bytes(user_id, data, content_type, file_name)

        ProfileService.update_profile(store, user_id, {"profileImage": url})
        return url
