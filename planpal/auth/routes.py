"""Routes for the auth blueprint."""

from flask import jsonify
from flask_login import current_user

from planpal import store
from planpal.user.services import ProfileService
from planpal.utils import get_json_body

from . import bp
from .decorators import login_required
from .services import AuthService


@bp.route("/signup", methods=["POST"])
def signup():
    """Register a new account and return a bearer token."""
    body = get_json_body()
    result = AuthService.signup(
        store.client(), body.get("email"), body.get("password"), body.get("name")
    )
    return jsonify(result)


@bp.route("/login", methods=["POST"])
def login():
    """Exchange credentials for a bearer token."""
    body = get_json_body()
    result = AuthService.login(store.client(), body.get("email"), body.get("password"))
    return jsonify(result)


@bp.route("/me", methods=["GET"])
@login_required
def me():
    """Return the identity behind the bearer token along with its profile."""
    profile = ProfileService.get_profile(store.client(), current_user.get_id())
    return jsonify({"id": current_user.get_id(), "email": current_user.email, "profile": profile})
