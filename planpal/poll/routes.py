"""Routes for the poll blueprint."""

from flask import jsonify

from planpal import store
from planpal.auth.decorators import acting_user_id, login_required
from planpal.utils import get_json_body

from . import bp
from .services import PollService


@bp.route("", methods=["POST"])
@login_required
def create_poll():
    """Create a poll in one of the caller's groups.

    The owner may be given as ``groupId``, ``eventId`` or a ``parentId``
    naming either. An event-only poll belongs to the event's group.
    """
    body = get_json_body()
    creator_id = acting_user_id(body.get("creatorId") or body.get("createdBy"))
    poll = PollService.create_poll(
        store.client(),
        body.get("groupId"),
        body.get("question"),
        body.get("options"),
        creator_id,
        poll_type=body.get("type"),
        event_id=body.get("eventId"),
        parent_id=body.get("parentId"),
    )
    return jsonify(poll)


@bp.route("/<string:poll_id>", methods=["GET"])
def view_poll(poll_id):
    """Display a single poll."""
    return jsonify(PollService.get_poll(store.client(), poll_id))


@bp.route("/group/<string:group_id>", methods=["GET"])
def group_polls(group_id):
    """List a group's polls."""
    return jsonify(PollService.list_group_polls(store.client(), group_id))


@bp.route("/event/<string:event_id>", methods=["GET"])
def event_polls(event_id):
    """List an event's polls."""
    return jsonify(PollService.list_event_polls(store.client(), event_id))


@bp.route("/<string:poll_id>/vote", methods=["POST"])
@login_required
def vote(poll_id):
    """Cast or move the caller's vote."""
    body = get_json_body()
    user_id = acting_user_id(body.get("userId"))
    poll = PollService.cast_vote(store.client(), poll_id, body.get("optionId"), user_id)
    return jsonify(poll)


@bp.route("/<string:poll_id>/react", methods=["POST"])
@login_required
def react(poll_id):
    """Toggle the caller's emoji reaction on an option."""
    body = get_json_body()
    user_id = acting_user_id(body.get("userId"))
    poll = PollService.toggle_reaction(
        store.client(), poll_id, body.get("optionId"), user_id, body.get("emoji")
    )
    return jsonify(poll)
