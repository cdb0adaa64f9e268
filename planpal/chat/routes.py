"""Routes for the chat blueprint."""

from flask import jsonify
from flask_login import current_user

from planpal import store
from planpal.auth.decorators import login_required
from planpal.utils import get_json_body

from . import bp
from .services import ChatService


@bp.route("/chat/<string:group_id>", methods=["POST"])
@login_required
def send_message(group_id):
    """Ask the assistant something on behalf of a group member."""
    body = get_json_body()
    record = ChatService.send_message(
        store.client(), group_id, current_user.get_id(), body.get("message")
    )
    return jsonify(record)


@bp.route("/chat/<string:group_id>", methods=["GET"])
@login_required
def chat_history(group_id):
    """List a group's chat exchanges."""
    return jsonify(ChatService.history(store.client(), group_id, current_user.get_id()))


@bp.route("/planpal/suggest", methods=["POST"])
def planpal_suggest():
    """Canned tips for the quick-action buttons."""
    body = get_json_body()
    suggestions = ChatService.planpal_suggest(body.get("eventType"), body.get("mood"))
    return jsonify({"suggestions": suggestions})
