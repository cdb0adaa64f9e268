"""Service for the points ledger, badges and reward redemption."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import current_app

from planpal.constants import CASHBACK_RATE, LEDGER, POINTS_PER_LEVEL, PROFILES, REDEMPTIONS
from planpal.core import new_id, utcnow_iso
from planpal.errors import (
    ConcurrentUpdateError,
    InsufficientPoints,
    NotFoundError,
    ValidationError,
)
from planpal.store import KVStore

from .models import BADGES, CATALOG_BY_ID, POINTS_TABLE, REWARDS_CATALOG

if TYPE_CHECKING:
    from .models import LedgerEntry, Redemption


SOCIAL_BUTTERFLY_THRESHOLD = 50
PARTY_PLANNER_PRO_THRESHOLD = 100
GROUP_MASTER_THRESHOLD = 5


def level_for(points: int) -> int:
    """Return the level reached with the given balance."""
    return max(points, 0) // POINTS_PER_LEVEL + 1


def cashback_value(points: int) -> float:
    """Return the display-only cashback worth of a balance."""
    return round(points * CASHBACK_RATE, 2)


class RewardsService:
    """Service class for point grants, badges and redemptions."""

    @staticmethod
    def earned_badge_ids(profile: dict[str, Any]) -> list[str]:
        """Return the badges a profile qualifies for from its accumulated totals."""
        lifetime = profile.get("lifetimePoints", profile.get("points", 0))
        earned = []
        if lifetime >= SOCIAL_BUTTERFLY_THRESHOLD:
            earned.append("SOCIAL_BUTTERFLY")
        if lifetime >= PARTY_PLANNER_PRO_THRESHOLD:
            earned.append("PARTY_PLANNER_PRO")
        if len(profile.get("groups", [])) >= GROUP_MASTER_THRESHOLD:
            earned.append("GROUP_MASTER")
        return earned

    @staticmethod
    def award_badges(profile: dict[str, Any]) -> list[str]:
        """Add newly earned badges to the profile; return their ids."""
        badges = profile.setdefault("badges", [])
        owned = {b.get("badgeId") for b in badges}
        awarded = []
        for badge_id in RewardsService.earned_badge_ids(profile):
            if badge_id in owned:
                continue
            badges.append(
                {
                    "badgeId": badge_id,
                    "name": BADGES[badge_id]["name"],
                    "icon": BADGES[badge_id]["icon"],
                    "awardedAt": utcnow_iso(),
                }
            )
            awarded.append(badge_id)
        return awarded

    @staticmethod
    def _adjust_balance(profile: dict[str, Any], delta: int) -> None:
        """Apply a signed delta and keep the derived fields in step."""
        profile["points"] = profile.get("points", 0) + delta
        if delta > 0:
            profile["lifetimePoints"] = profile.get("lifetimePoints", 0) + delta
        profile["level"] = level_for(profile["points"])
        RewardsService.award_badges(profile)

    @staticmethod
    def _ledger_entry(user_id: str, reason: str, amount: int, balance: int) -> LedgerEntry:
        return {
            "id": new_id(),
            "userId": user_id,
            "reason": reason,
            "amount": amount,
            "balance": balance,
            "createdAt": utcnow_iso(),
        }

    @staticmethod
    def grant_points(
        store: KVStore, user_id: str | None, amount: int, reason: str
    ) -> dict[str, Any] | None:
        """Credit points to a user and record the grant in their ledger.

        Returns the updated profile, or None when there is no one to credit
        (anonymous actor or unknown profile).
        """
        if not user_id:
            return None
        if amount <= 0:
            raise ValueError("Point grants must be positive.")

        profile_key = store.key(PROFILES, user_id)

        def apply(values: dict[str, Any]) -> dict[str, Any]:
            profile = values[profile_key]
            if profile is None:
                return {}
            RewardsService._adjust_balance(profile, amount)
            entry = RewardsService._ledger_entry(
                user_id, reason, amount, profile["points"]
            )
            return {
                profile_key: profile,
                store.key(LEDGER, user_id, entry["id"]): entry,
            }

        writes = store.transaction([profile_key], apply)
        if not writes:
            current_app.logger.warning(
                f"Skipped {amount} points for {user_id}: profile not found"
            )
            return None

        profile = writes[profile_key]
        current_app.logger.info(f"Added {amount} points to {user_id}: {reason}")
        return profile

    @staticmethod
    def award_action(
        store: KVStore, user_id: str | None, action: str
    ) -> dict[str, Any] | None:
        """Grant the fixed amount the policy table assigns to an action.

        The action itself has already committed, so a grant that cannot get
        through the store is logged and dropped.
        """
        try:
            return RewardsService.grant_points(
                store, user_id, POINTS_TABLE[action], action
            )
        except ConcurrentUpdateError as e:
            current_app.logger.error(
                f"Failed to grant {action} points to {user_id}: {e}"
            )
            return None

    @staticmethod
    def get_catalog() -> list[dict[str, Any]]:
        """Return the reward catalog."""
        return [dict(reward) for reward in REWARDS_CATALOG]

    @staticmethod
    def _get_profile(store: KVStore, user_id: str) -> dict[str, Any]:
        profile = store.get(store.key(PROFILES, user_id))
        if profile is None:
            raise NotFoundError("Profile not found.")
        return profile

    @staticmethod
    def get_rewards(store: KVStore, user_id: str) -> dict[str, Any]:
        """Return balance, level, badges and redemptions for a user."""
        profile = RewardsService._get_profile(store, user_id)
        points = profile.get("points", 0)
        level = level_for(points)
        redemptions = store.get_by_prefix(store.key(REDEMPTIONS, user_id, ""))
        return {
            "points": points,
            "lifetimePoints": profile.get("lifetimePoints", points),
            "level": level,
            "pointsToNextLevel": level * POINTS_PER_LEVEL - points,
            "badges": profile.get("badges", []),
            "cashbackValue": cashback_value(points),
            "redemptions": redemptions,
        }

    @staticmethod
    def get_history(store: KVStore, user_id: str) -> list[LedgerEntry]:
        """Return every balance change for a user, oldest first."""
        RewardsService._get_profile(store, user_id)
        return store.get_by_prefix(store.key(LEDGER, user_id, ""))  # type: ignore[return-value]

    @staticmethod
    def _parse_cost(points_cost: Any) -> int | None:
        if points_cost is None:
            return None
        if isinstance(points_cost, bool):
            raise ValidationError("pointsCost must be a whole number.")
        try:
            return int(points_cost)
        except (TypeError, ValueError) as e:
            raise ValidationError("pointsCost must be a whole number.") from e

    @staticmethod
    def redeem(
        store: KVStore, user_id: str, reward_id: str, points_cost: Any = None
    ) -> dict[str, Any]:
        """Spend points on a catalog reward.

        The balance check, the debit and the redemption record commit
        together or not at all.
        """
        reward = CATALOG_BY_ID.get(reward_id)
        if reward is None:
            raise NotFoundError("Reward not found.")
        cost = reward["points"]
        claimed = RewardsService._parse_cost(points_cost)
        if claimed is not None and claimed != cost:
            raise ValidationError(f"{reward['name']} costs {cost} points.")

        profile_key = store.key(PROFILES, user_id)
        redemption: Redemption = {
            "id": new_id(),
            "rewardId": reward["id"],
            "type": reward["name"],
            "points": cost,
            "redeemedAt": utcnow_iso(),
        }

        def apply(values: dict[str, Any]) -> dict[str, Any]:
            profile = values[profile_key]
            if profile is None:
                raise NotFoundError("Profile not found.")
            if profile.get("points", 0) < cost:
                raise InsufficientPoints("Insufficient points.")
            RewardsService._adjust_balance(profile, -cost)
            entry = RewardsService._ledger_entry(
                user_id, f"redeem:{reward['id']}", -cost, profile["points"]
            )
            return {
                profile_key: profile,
                store.key(REDEMPTIONS, user_id, redemption["id"]): redemption,
                store.key(LEDGER, user_id, entry["id"]): entry,
            }

        writes = store.transaction([profile_key], apply)
        remaining = writes[profile_key]["points"]
        current_app.logger.info(f"Reward redeemed: {user_id} - {reward['name']}")
        return {"redemption": redemption, "remainingPoints": remaining}
