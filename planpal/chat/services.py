"""Service layer for the group planning assistant."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import requests
from flask import current_app

from planpal.constants import CHATS, DEFAULT_LLM_TIMEOUT
from planpal.core import clean_str, new_id, utcnow_iso
from planpal.errors import UpstreamUnavailable, ValidationError
from planpal.event.services import EventService
from planpal.group.services import GroupService

if TYPE_CHECKING:
    from planpal.store import KVStore

    from .models import ChatRecord, Suggestion

MAX_MESSAGE_LENGTH = 2000
MAX_PROMPT_EVENTS = 5

EVENT_TYPE_MESSAGES = {
    "movie": "🎬 Hey! Based on your group's vibe, I've got some movie suggestions!",
    "food": "🍽️ Looking for the perfect spot to eat? Let me help!",
    "hangout": "🎉 Time to plan an awesome hangout! Here's what I recommend:",
}
MOOD_MESSAGES = {
    "chill": "For a chill vibe, how about a cozy café or a casual movie night? ☕",
    "adventurous": (
        "Adventure time! 🏔️ Check out nearby hiking spots, escape rooms, "
        "or action movies!"
    ),
    "foodie": (
        "Foodie mode activated! 🍕 I'll find the best-rated restaurants "
        "near all of you."
    ),
}


class ChatService:
    """Service class for the PlanPal assistant."""

    @staticmethod
    def build_system_prompt(group: dict[str, Any], events: list[dict[str, Any]]) -> str:
        """Describe the group to the model."""
        lines = [
            "You are PlanPal, a friendly assistant that helps friend groups "
            "plan movies, meals and hangouts.",
            f"Group: {group.get('name')}",
            f"Members: {len(group.get('members', []))}",
        ]
        upcoming = [e for e in events if e.get("date")]
        upcoming.sort(key=lambda e: e["date"])
        if upcoming:
            lines.append("Upcoming events:")
            for event in upcoming[:MAX_PROMPT_EVENTS]:
                where = f" at {event['location']}" if event.get("location") else ""
                lines.append(f"- {event['title']} ({event['type']}) on {event['date']}{where}")
        else:
            lines.append("The group has no upcoming events yet.")
        lines.append("Keep answers short and practical.")
        return "\n".join(lines)

    @staticmethod
    def complete(system_prompt: str, message: str) -> str:
        """Ask the configured chat-completions endpoint for a reply."""
        url = current_app.config.get("LLM_API_URL")
        api_key = current_app.config.get("LLM_API_KEY")
        if not url or not api_key:
            current_app.logger.error("LLM_API_URL or LLM_API_KEY is not configured")
            raise UpstreamUnavailable("Chat assistant is not configured")

        payload = {
            "model": current_app.config.get("LLM_MODEL"),
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": message},
            ],
        }
        try:
            response = requests.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {api_key}"},
                timeout=current_app.config.get("LLM_TIMEOUT", DEFAULT_LLM_TIMEOUT),
            )
            response.raise_for_status()
            data = response.json()
            reply = data["choices"][0]["message"]["content"]
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as e:
            current_app.logger.error(f"Chat completion failed: {e}")
            raise UpstreamUnavailable("Chat assistant is unavailable.") from e
        return str(reply).strip()

    @staticmethod
    def send_message(
        store: KVStore, group_id: str, user_id: str, message: Any
    ) -> ChatRecord:
        """Relay a member's message to the assistant and keep the exchange."""
        message = clean_str(message, "Message")
        group = GroupService.get_group_doc(store, group_id)
        GroupService.require_member(group, user_id)
        if not message:
            raise ValidationError("A message is required.")
        if len(message) > MAX_MESSAGE_LENGTH:
            raise ValidationError("Message is too long.")

        events = EventService.list_group_events(store, group_id)
        reply = ChatService.complete(
            ChatService.build_system_prompt(group, events), message
        )

        record: ChatRecord = {
            "id": new_id(),
            "groupId": group_id,
            "userId": user_id,
            "message": message,
            "reply": reply,
            "createdAt": utcnow_iso(),
        }
        store.create(store.key(CHATS, group_id, record["id"]), record)
        current_app.logger.info(f"Chat message stored for group {group_id}")
        return record

    @staticmethod
    def history(store: KVStore, group_id: str, user_id: str) -> list[ChatRecord]:
        """Return a group's chat exchanges in the order they happened."""
        group = GroupService.get_group_doc(store, group_id)
        GroupService.require_member(group, user_id)
        return store.get_by_prefix(store.key(CHATS, group_id, ""))  # type: ignore[return-value]

    @staticmethod
    def planpal_suggest(event_type: Any, mood: Any) -> list[Suggestion]:
        """Return canned planning tips for an event type and mood."""
        timestamp = utcnow_iso()
        texts = [
            EVENT_TYPE_MESSAGES.get(clean_str(event_type, "eventType")),
            MOOD_MESSAGES.get(clean_str(mood, "Mood")),
        ]
        return [
            {"type": "message", "text": text, "timestamp": timestamp}
            for text in texts
            if text
        ]
