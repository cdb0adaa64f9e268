"""Routes for events and RSVPs."""

from flask import jsonify

from planpal import store
from planpal.auth.decorators import acting_user_id, login_required
from planpal.utils import get_json_body

from . import bp
from .services import EventService


@bp.route("/events", methods=["POST"])
@login_required
def create_event():
    """Create an event in one of the caller's groups."""
    body = get_json_body()
    creator_id = acting_user_id(body.get("creatorId") or body.get("createdBy"))
    event = EventService.create_event(
        store.client(),
        body.get("groupId"),
        body.get("title"),
        creator_id,
        date=body.get("date"),
        location=body.get("location"),
        event_type=body.get("type"),
        mood=body.get("mood"),
    )
    return jsonify(event)


@bp.route("/events/group/<string:group_id>", methods=["GET"])
def group_events(group_id):
    """List the events of a group."""
    return jsonify(EventService.list_group_events(store.client(), group_id))


@bp.route("/events/<string:event_id>", methods=["GET"])
def view_event(event_id):
    """Display a single event."""
    return jsonify(EventService.get_event(store.client(), event_id))


@bp.route("/rsvps", methods=["POST"])
@login_required
def submit_rsvp():
    """Create or replace the caller's RSVP for an event."""
    body = get_json_body()
    user_id = acting_user_id(body.get("userId"))
    rsvp = EventService.submit_rsvp(
        store.client(), body.get("eventId"), user_id, body.get("status")
    )
    return jsonify(rsvp)


@bp.route("/rsvps/event/<string:event_id>", methods=["GET"])
def event_rsvps(event_id):
    """List RSVPs for an event."""
    return jsonify(EventService.list_rsvps(store.client(), event_id))
