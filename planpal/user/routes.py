"""Routes for the user blueprint."""

from flask import jsonify

from planpal import store
from planpal.auth.decorators import login_required
from planpal.utils import get_json_body

from . import bp
from .services import ProfileService


@bp.route("/<string:user_id>", methods=["GET"])
def get_profile(user_id):
    """Return a user's profile."""
    return jsonify(ProfileService.get_profile(store.client(), user_id))


@bp.route("/<string:user_id>", methods=["PUT"])
@login_required(self_arg="user_id")
def update_profile(user_id):
    """Update the caller's name or avatar URL."""
    profile = ProfileService.update_profile(store.client(), user_id, get_json_body())
    return jsonify(profile)


@bp.route("/<string:user_id>/upload", methods=["POST"])
@login_required(self_arg="user_id")
def upload_profile_image(user_id):
    """Upload a base64 avatar image for the caller."""
    body = get_json_body()
    url = ProfileService.upload_profile_image(
        store.client(), user_id, body.get("imageData"), body.get("fileName")
    )
    return jsonify({"url": url})
