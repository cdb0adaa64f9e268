"""Service layer for events and RSVPs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import current_app

from planpal.constants import EVENT_TYPES, EVENTS, MOODS, RSVP_STATUSES, RSVPS
from planpal.core import clean_str, new_id, utcnow_iso
from planpal.errors import NotFoundError, ValidationError
from planpal.group.services import GroupService
from planpal.rewards.services import RewardsService

if TYPE_CHECKING:
    from planpal.store import KVStore

    from .models import Event, Rsvp

DEFAULT_EVENT_TYPE = "hangout"


class EventService:
    """Service class for events and attendance."""

    @staticmethod
    def get_event(store: KVStore, event_id: str) -> dict[str, Any]:
        """Fetch an event by id."""
        event = store.get(store.key(EVENTS, event_id))
        if event is None:
            raise NotFoundError("Event not found")
        return event

    @staticmethod
    def list_group_events(store: KVStore, group_id: str) -> list[dict[str, Any]]:
        """Return a group's events in creation order."""
        GroupService.get_group_doc(store, group_id)
        events = store.get_by_prefix(store.key(EVENTS, ""))
        return [e for e in events if e.get("groupId") == group_id]

    @staticmethod
    def create_event(  # noqa: PLR0913
        store: KVStore,
        group_id: Any,
        title: Any,
        creator_id: str,
        date: Any = None,
        location: Any = None,
        event_type: Any = None,
        mood: Any = None,
    ) -> Event:
        """Propose an event in a group the creator belongs to."""
        group_id = clean_str(group_id, "groupId")
        title = clean_str(title, "Title")
        if not group_id or not title:
            raise ValidationError("GroupId and title are required")
        event_type = clean_str(event_type, "Event type") or DEFAULT_EVENT_TYPE
        if event_type not in EVENT_TYPES:
            raise ValidationError(f"Event type must be one of: {', '.join(EVENT_TYPES)}")
        mood = clean_str(mood, "Mood") or None
        if mood is not None and mood not in MOODS:
            raise ValidationError(f"Mood must be one of: {', '.join(MOODS)}")

        group = GroupService.get_group_doc(store, group_id)
        GroupService.require_member(group, creator_id)

        event: Event = {
            "id": new_id(),
            "groupId": group_id,
            "title": title,
            "date": clean_str(date, "Date") or None,
            "location": clean_str(location, "Location") or None,
            "type": event_type,
            "mood": mood,
            "createdBy": creator_id,
            "createdAt": utcnow_iso(),
        }
        store.create(store.key(EVENTS, event["id"]), event)
        current_app.logger.info(f"Created event: {event['id']}")

        RewardsService.award_action(store, creator_id, "create_event")
        return event

    @staticmethod
    def submit_rsvp(store: KVStore, event_id: Any, user_id: str, status: Any) -> Rsvp:
        """Record a user's attendance, replacing any earlier answer.

        Every accepted answer earns the RSVP reward.
        """
        event_id = clean_str(event_id, "eventId")
        status = clean_str(status, "Status")
        if not event_id or not status:
            raise ValidationError("EventId and status are required")
        if status not in RSVP_STATUSES:
            raise ValidationError(f"Status must be one of: {', '.join(RSVP_STATUSES)}")

        event = EventService.get_event(store, event_id)
        group = GroupService.get_group_doc(store, event["groupId"])
        GroupService.require_member(group, user_id)

        rsvp_key = store.key(RSVPS, event_id, user_id)
        rsvp: Rsvp = {
            "eventId": event_id,
            "userId": user_id,
            "status": status,
            "timestamp": utcnow_iso(),
        }
        store.set(rsvp_key, rsvp)
        current_app.logger.info(f"RSVP {status} for event {event_id} by user {user_id}")

        RewardsService.award_action(store, user_id, "rsvp")
        return rsvp

    @staticmethod
    def list_rsvps(store: KVStore, event_id: str) -> list[Rsvp]:
        """Return the current RSVP of every user who answered."""
        EventService.get_event(store, event_id)
        return store.get_by_prefix(store.key(RSVPS, event_id, ""))  # type: ignore[return-value]
