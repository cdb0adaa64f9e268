"""Service layer for polls: creation, exclusive voting and emoji reactions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import current_app

from planpal.constants import (
    EVENTS,
    GROUPS,
    MAX_EMOJI_LENGTH,
    MIN_POLL_OPTIONS,
    POLL_TYPES,
    POLLS,
)
from planpal.core import clean_str, new_id, utcnow_iso
from planpal.errors import NotFoundError, ValidationError
from planpal.group.services import GroupService
from planpal.rewards.services import RewardsService

if TYPE_CHECKING:
    from planpal.store import KVStore

    from .models import Poll, PollOption


class PollService:
    """Service class for poll-related operations."""

    @staticmethod
    def serialize(poll: dict[str, Any]) -> dict[str, Any]:
        """Return a poll with derived vote counts attached."""
        options = []
        for option in poll.get("options", []):
            options.append({**option, "voteCount": len(option.get("votes", []))})
        return {
            **poll,
            "options": options,
            "totalVotes": sum(o["voteCount"] for o in options),
        }

    @staticmethod
    def build_options(raw_options: Any) -> list[PollOption]:
        """Turn request options (strings or {text, payload}) into option records.

        Blank entries are discarded.
        """
        if not isinstance(raw_options, list):
            raise ValidationError("Options must be a list.")

        options: list[PollOption] = []
        for raw in raw_options:
            payload = None
            if isinstance(raw, dict):
                text = clean_str(raw.get("text"), "Option text")
                payload = raw.get("payload")
                if payload is not None and not isinstance(payload, dict):
                    raise ValidationError("Option payload must be an object.")
            elif isinstance(raw, str):
                text = raw.strip()
            else:
                raise ValidationError(
                    "Options must be strings or {text, payload} objects."
                )
            if not text:
                continue
            options.append(
                {
                    "id": new_id(),
                    "text": text,
                    "payload": payload,
                    "votes": [],
                    "reactions": {},
                }
            )

        if len(options) < MIN_POLL_OPTIONS:
            raise ValidationError(
                f"A poll needs at least {MIN_POLL_OPTIONS} non-blank options."
            )
        return options

    @staticmethod
    def get_poll_doc(store: KVStore, poll_id: str) -> dict[str, Any]:
        """Fetch the stored poll document."""
        poll = store.get(store.key(POLLS, poll_id))
        if poll is None:
            raise NotFoundError("Poll not found")
        return poll

    @staticmethod
    def get_poll(store: KVStore, poll_id: str) -> dict[str, Any]:
        """Fetch a poll for display."""
        return PollService.serialize(PollService.get_poll_doc(store, poll_id))

    @staticmethod
    def list_group_polls(store: KVStore, group_id: str) -> list[dict[str, Any]]:
        """Return a group's polls in the order they were created."""
        group = GroupService.get_group_doc(store, group_id)
        keys = [store.key(POLLS, pid) for pid in group.get("polls", [])]
        polls = store.get_many(keys)
        return [PollService.serialize(polls[k]) for k in keys if polls[k] is not None]

    @staticmethod
    def list_event_polls(store: KVStore, event_id: str) -> list[dict[str, Any]]:
        """Return the polls attached to an event in the order they were created."""
        if store.get(store.key(EVENTS, event_id)) is None:
            raise NotFoundError("Event not found")
        polls = store.get_by_prefix(store.key(POLLS, ""))
        return [PollService.serialize(p) for p in polls if p.get("eventId") == event_id]

    @staticmethod
    def resolve_parent(
        store: KVStore, group_id: str, event_id: str, parent_id: str
    ) -> tuple[str, str | None]:
        """Work out the owning group and optional event of a new poll.

        ``parentId`` may name a group or an event. A poll created for an
        event alone belongs to that event's group.
        """
        if not group_id and parent_id:
            if store.get(store.key(GROUPS, parent_id)) is not None:
                group_id = parent_id
            elif not event_id:
                event_id = parent_id
            else:
                raise NotFoundError("Group not found")

        if event_id:
            event = store.get(store.key(EVENTS, event_id))
            if event is None:
                raise NotFoundError("Event not found")
            if not group_id:
                group_id = event["groupId"]
            elif event.get("groupId") != group_id:
                raise NotFoundError("Event not found in this group")

        if not group_id:
            raise ValidationError("A group or event id is required.")
        return group_id, event_id or None

    @staticmethod
    def create_poll(  # noqa: PLR0913
        store: KVStore,
        group_id: Any,
        question: Any,
        options: Any,
        creator_id: str,
        poll_type: Any = None,
        event_id: Any = None,
        parent_id: Any = None,
    ) -> dict[str, Any]:
        """Create a poll in a group the creator belongs to."""
        group_id = clean_str(group_id, "groupId")
        event_id = clean_str(event_id, "eventId")
        parent_id = clean_str(parent_id, "parentId")
        if not (group_id or event_id or parent_id):
            raise ValidationError("A group or event id is required.")
        question = clean_str(question, "Question")
        if not question:
            raise ValidationError("A question is required.")
        poll_type = clean_str(poll_type, "Poll type") or "general"
        if poll_type not in POLL_TYPES:
            raise ValidationError(f"Poll type must be one of: {', '.join(POLL_TYPES)}")
        option_records = PollService.build_options(options)

        group_id, event_id = PollService.resolve_parent(
            store, group_id, event_id, parent_id
        )

        poll_id = new_id()
        poll_key = store.key(POLLS, poll_id)
        group_key = store.key(GROUPS, group_id)
        poll: Poll = {
            "id": poll_id,
            "groupId": group_id,
            "eventId": event_id,
            "question": question,
            "type": poll_type,
            "createdBy": creator_id,
            "createdAt": utcnow_iso(),
            "options": option_records,
        }

        def create(values: dict[str, Any]) -> dict[str, Any]:
            group = values[group_key]
            if group is None:
                raise NotFoundError("Group not found")
            GroupService.require_member(group, creator_id)
            group.setdefault("polls", []).append(poll_id)
            return {group_key: group, poll_key: poll}

        store.transaction([group_key], create)
        current_app.logger.info(f"Created poll: {poll_id}")

        RewardsService.award_action(store, creator_id, "create_poll")
        return PollService.serialize(poll)

    @staticmethod
    def _locate(
        values: dict[str, Any],
        poll_key: str,
        group_key: str,
        option_id: str,
        user_id: str,
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """Resolve poll and option from transaction values and check membership."""
        poll = values[poll_key]
        if poll is None:
            raise NotFoundError("Poll not found")
        option = next(
            (o for o in poll.get("options", []) if o.get("id") == option_id), None
        )
        if option is None:
            raise NotFoundError("Option not found")
        group = values[group_key]
        if group is None:
            raise NotFoundError("Group not found")
        GroupService.require_member(group, user_id)
        return poll, option

    @staticmethod
    def _group_key_for(store: KVStore, poll_id: str) -> str:
        poll = PollService.get_poll_doc(store, poll_id)
        return store.key(GROUPS, poll["groupId"])

    @staticmethod
    def cast_vote(
        store: KVStore, poll_id: str, option_id: Any, user_id: str
    ) -> dict[str, Any]:
        """Vote for one option, moving any earlier vote in the same poll.

        A user is in at most one option's votes afterwards. Every vote that
        changes the poll earns the flat vote reward; repeating the same vote
        changes nothing and earns nothing.
        """
        option_id = clean_str(option_id, "optionId")
        if not option_id:
            raise ValidationError("An option id is required.")
        poll_key = store.key(POLLS, poll_id)
        group_key = PollService._group_key_for(store, poll_id)
        outcome: dict[str, Any] = {}

        def vote(values: dict[str, Any]) -> dict[str, Any]:
            poll, target = PollService._locate(
                values, poll_key, group_key, option_id, user_id
            )
            changed = False
            for option in poll["options"]:
                votes = option.setdefault("votes", [])
                if user_id in votes and option is not target:
                    option["votes"] = [v for v in votes if v != user_id]
                    changed = True
            if user_id not in target["votes"]:
                target["votes"].append(user_id)
                changed = True
            outcome["changed"] = changed
            outcome["poll"] = poll
            return {poll_key: poll} if changed else {}

        store.transaction([poll_key, group_key], vote)
        current_app.logger.info(f"Vote by {user_id} on poll {poll_id}: {option_id}")

        if outcome["changed"]:
            RewardsService.award_action(store, user_id, "vote")
        return PollService.serialize(outcome["poll"])

    @staticmethod
    def toggle_reaction(
        store: KVStore, poll_id: str, option_id: Any, user_id: str, emoji: Any
    ) -> dict[str, Any]:
        """Add the user's emoji reaction to an option, or remove it if present."""
        option_id = clean_str(option_id, "optionId")
        emoji = clean_str(emoji, "Emoji")
        if not option_id:
            raise ValidationError("An option id is required.")
        if not emoji:
            raise ValidationError("An emoji is required.")
        if len(emoji) > MAX_EMOJI_LENGTH:
            raise ValidationError("Emoji is too long.")
        poll_key = store.key(POLLS, poll_id)
        group_key = PollService._group_key_for(store, poll_id)
        outcome: dict[str, Any] = {}

        def react(values: dict[str, Any]) -> dict[str, Any]:
            poll, option = PollService._locate(
                values, poll_key, group_key, option_id, user_id
            )
            reactions = option.setdefault("reactions", {})
            reacted = reactions.setdefault(emoji, [])
            if user_id in reacted:
                reactions[emoji] = [u for u in reacted if u != user_id]
            else:
                reacted.append(user_id)
            outcome["poll"] = poll
            return {poll_key: poll}

        store.transaction([poll_key, group_key], react)
        current_app.logger.info(f"Reaction {emoji} toggled by {user_id} on poll {poll_id}")
        return PollService.serialize(outcome["poll"])
