"""Service layer for registration and login."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from planpal.constants import CREDENTIALS, PROFILES
from planpal.core import clean_str, new_id, utcnow_iso
from planpal.errors import DuplicateResourceError, UnauthorizedError, ValidationError
from planpal.rewards.services import RewardsService
from planpal.user.services import ProfileService

from .identity import issue_token

if TYPE_CHECKING:
    from planpal.store import KVStore
    from planpal.user.models import Credential

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """Service class for credentials and token issuing."""

    @staticmethod
    def signup(store: KVStore, email: Any, password: Any, name: Any) -> dict[str, Any]:
        """Register a user, create their profile and credit the signup bonus."""
        email = clean_str(email, "Email").lower()
        name = clean_str(name, "Name")
        password = password if isinstance(password, str) else ""
        if not email or not password or not name:
            raise ValidationError("Email, password, and name are required")
        if "@" not in email:
            raise ValidationError("Email address is not valid.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )

        user_id = new_id()
        credential_key = store.key(CREDENTIALS, email)
        profile_key = store.key(PROFILES, user_id)
        credential: Credential = {
            "userId": user_id,
            "email": email,
            "passwordHash": generate_password_hash(password, method="pbkdf2:sha256"),
            "createdAt": utcnow_iso(),
        }
        profile = ProfileService.new_profile(user_id, email, name)

        def register(values: dict[str, Any]) -> dict[str, Any]:
            if values[credential_key] is not None:
                raise DuplicateResourceError("Email address is already registered.")
            return {credential_key: credential, profile_key: profile}

        store.transaction([credential_key, profile_key], register)
        current_app.logger.info(f"Created user profile: {user_id}")

        profile = RewardsService.award_action(store, user_id, "signup") or profile
        return {"token": issue_token(user_id, email), "profile": profile}

    @staticmethod
    def login(store: KVStore, email: Any, password: Any) -> dict[str, Any]:
        """Exchange email and password for a bearer token."""
        email = clean_str(email, "Email").lower()
        credential = store.get(store.key(CREDENTIALS, email)) if email else None
        if (
            credential is None
            or not isinstance(password, str)
            or not check_password_hash(credential["passwordHash"], password)
        ):
            raise UnauthorizedError("Invalid email or password.")

        user_id = credential["userId"]
        profile = ProfileService.get_profile(store, user_id)
        return {"token": issue_token(user_id, email), "profile": profile}
