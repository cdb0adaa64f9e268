"""Routes for movie and place suggestions."""

from flask import jsonify, request

from planpal.utils import get_json_body

from . import bp
from .services import MovieService, PlacesService


@bp.route("/movies/search", methods=["GET"])
def search_movies():
    """Search movies by title."""
    return jsonify(MovieService.search(request.args.get("query")))


@bp.route("/movies/popular", methods=["GET"])
def popular_movies():
    """Return the current top popular movies."""
    return jsonify(MovieService.popular())


@bp.route("/movies/mood/<string:mood>", methods=["GET"])
def movies_by_mood(mood):
    """Suggest movies for a group mood."""
    return jsonify(MovieService.by_mood(mood))


@bp.route("/places/search", methods=["POST"])
def search_places():
    """Search places near a location, optionally steered by mood."""
    body = get_json_body()
    places = PlacesService.search(
        body.get("location"), place_type=body.get("type"), mood=body.get("mood")
    )
    return jsonify(places)


@bp.route("/places/<string:place_id>", methods=["GET"])
def place_details(place_id):
    """Return the details of a single place."""
    return jsonify(PlacesService.details(place_id))
