"""Routes for the rewards blueprint."""

from flask import jsonify

from planpal import store
from planpal.auth.decorators import login_required
from planpal.utils import get_json_body

from . import bp
from .services import RewardsService


@bp.route("/catalog", methods=["GET"])
def catalog():
    """List the rewards points can be spent on."""
    return jsonify(RewardsService.get_catalog())


@bp.route("/<string:user_id>", methods=["GET"])
def view_rewards(user_id):
    """Show balance, level, badges and redemptions."""
    return jsonify(RewardsService.get_rewards(store.client(), user_id))


@bp.route("/<string:user_id>/history", methods=["GET"])
@login_required(self_arg="user_id")
def history(user_id):
    """Show every change to the caller's balance."""
    return jsonify(RewardsService.get_history(store.client(), user_id))


@bp.route("/<string:user_id>/redeem", methods=["POST"])
@login_required(self_arg="user_id")
def redeem(user_id):
    """Spend the caller's points on a catalog reward."""
    body = get_json_body()
    result = RewardsService.redeem(
        store.client(), user_id, body.get("rewardId"), body.get("pointsCost")
    )
    return jsonify(result)
