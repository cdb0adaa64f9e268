"""Routes for the group blueprint."""

from flask import jsonify
from flask_login import current_user

from planpal import store
from planpal.auth.decorators import acting_user_id, login_required
from planpal.utils import get_json_body

from . import bp
from .services import GroupService


@bp.route("", methods=["GET"])
def view_groups():
    """List every group."""
    return jsonify(GroupService.list_groups(store.client()))


@bp.route("/mine", methods=["GET"])
@login_required
def view_my_groups():
    """List the groups the caller belongs to."""
    return jsonify(GroupService.list_user_groups(store.client(), current_user.get_id()))


@bp.route("/<string:group_id>", methods=["GET"])
def view_group(group_id):
    """Display a single group."""
    return jsonify(GroupService.get_group(store.client(), group_id))


@bp.route("", methods=["POST"])
@login_required
def create_group():
    """Create a new group owned by the caller."""
    body = get_json_body()
    creator_id = acting_user_id(body.get("creatorId") or body.get("createdBy"))
    group = GroupService.create_group(
        store.client(),
        body.get("name"),
        creator_id,
        description=body.get("description"),
        password=body.get("password"),
    )
    return jsonify(group)


@bp.route("/<string:group_id>/join", methods=["POST"])
@login_required
def join_group(group_id):
    """Join a group, supplying its password when it has one."""
    body = get_json_body()
    user_id = acting_user_id(body.get("userId"))
    group, joined = GroupService.join_group(
        store.client(), group_id, user_id, body.get("password")
    )
    return jsonify({**group, "joined": joined})
