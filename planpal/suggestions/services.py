"""Thin proxies over the TMDB and Google Places APIs."""

from __future__ import annotations

from typing import Any

import requests
from flask import current_app

from planpal.constants import DEFAULT_SUGGESTION_TIMEOUT, SUGGESTION_LIMIT
from planpal.errors import UpstreamUnavailable, ValidationError

TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_POSTER_URL = "https://image.tmdb.org/t/p/w500"
TMDB_BACKDROP_URL = "https://image.tmdb.org/t/p/w1280"
PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"
PLACES_SEARCH_RADIUS = 5000

MOOD_TO_GENRE = {
    "chill": 35,  # comedy
    "adventurous": 12,  # adventure
    "romantic": 10749,
    "scary": 27,  # horror
    "dramatic": 18,
}
DEFAULT_GENRE = 28  # action

MOOD_TO_PLACE_TYPE = {
    "chill": "cafe",
    "adventurous": "tourist_attraction",
    "foodie": "restaurant",
}
DEFAULT_PLACE_TYPE = "restaurant"


def _fetch_json(provider: str, url: str, params: dict[str, Any]) -> dict[str, Any]:
    """GET a provider endpoint and return the decoded body."""
    timeout = current_app.config.get("SUGGESTION_TIMEOUT", DEFAULT_SUGGESTION_TIMEOUT)
    try:
        response = requests.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        current_app.logger.error(f"{provider} request failed: {e}")
        raise UpstreamUnavailable(f"{provider} is unavailable.") from e
    if not isinstance(data, dict):
        raise UpstreamUnavailable(f"{provider} returned an unexpected response.")
    return data


def _api_key(config_key: str, provider: str) -> str:
    """Return a provider key from config, or fail as unavailable when unset."""
    api_key = current_app.config.get(config_key)
    if not api_key:
        current_app.logger.error(f"{config_key} is not configured")
        raise UpstreamUnavailable(f"{provider} API key not configured")
    return api_key


class MovieService:
    """Movie lookups backed by TMDB."""

    @staticmethod
    def normalize(movie: dict[str, Any]) -> dict[str, Any]:
        """Reduce a TMDB movie to the fields the app shows."""
        poster = movie.get("poster_path")
        backdrop = movie.get("backdrop_path")
        return {
            "id": movie.get("id"),
            "title": movie.get("title"),
            "overview": movie.get("overview"),
            "releaseDate": movie.get("release_date"),
            "rating": movie.get("vote_average"),
            "posterPath": f"{TMDB_POSTER_URL}{poster}" if poster else None,
            "backdropPath": f"{TMDB_BACKDROP_URL}{backdrop}" if backdrop else None,
        }

    @staticmethod
    def _list(path: str, **params: Any) -> list[dict[str, Any]]:
        params["api_key"] = _api_key("TMDB_API_KEY", "TMDB")
        data = _fetch_json("TMDB", f"{TMDB_BASE_URL}{path}", params)
        results = data.get("results") or []
        return [MovieService.normalize(m) for m in results[:SUGGESTION_LIMIT]]

    @staticmethod
    def search(query: str | None) -> list[dict[str, Any]]:
        """Search movies by title."""
        return MovieService._list("/search/movie", query=query or "")

    @staticmethod
    def popular() -> list[dict[str, Any]]:
        """Return currently popular movies."""
        return MovieService._list("/movie/popular")

    @staticmethod
    def genre_for(mood: str) -> int:
        """Map a mood to a TMDB genre id, falling back to the default genre."""
        return MOOD_TO_GENRE.get(mood, DEFAULT_GENRE)

    @staticmethod
    def by_mood(mood: str) -> list[dict[str, Any]]:
        """Return well-rated movies in the genre matching a mood."""
        return MovieService._list(
            "/discover/movie",
            with_genres=MovieService.genre_for(mood),
            sort_by="vote_average.desc",
            **{"vote_count.gte": 100},
        )


class PlacesService:
    """Nearby place lookups backed by Google Places."""

    @staticmethod
    def place_type_for(mood: str | None, place_type: str | None) -> str:
        """Pick the search type, letting the mood override an explicit type."""
        if mood in MOOD_TO_PLACE_TYPE:
            return MOOD_TO_PLACE_TYPE[mood]
        return place_type or DEFAULT_PLACE_TYPE

    @staticmethod
    def normalize(place: dict[str, Any]) -> dict[str, Any]:
        """Reduce a Places result to the fields the app shows."""
        photos = place.get("photos") or [{}]
        return {
            "id": place.get("place_id"),
            "name": place.get("name"),
            "address": place.get("vicinity"),
            "rating": place.get("rating"),
            "userRatingsTotal": place.get("user_ratings_total"),
            "priceLevel": place.get("price_level"),
            "types": place.get("types"),
            "location": (place.get("geometry") or {}).get("location"),
            "photo": photos[0].get("photo_reference"),
        }

    @staticmethod
    def _check_status(data: dict[str, Any], allowed: tuple[str, ...]) -> None:
        status = data.get("status")
        if status not in allowed:
            current_app.logger.error(
                f"Google Places API error: {status} - {data.get('error_message')}"
            )
            raise UpstreamUnavailable(f"Places API error: {status}")

    @staticmethod
    def search(
        location: Any, place_type: Any = None, mood: Any = None
    ) -> list[dict[str, Any]]:
        """Search places near a "lat,lng" location."""
        if not location or not isinstance(location, str):
            raise ValidationError("A location is required.")
        api_key = _api_key("GOOGLE_PLACES_API_KEY", "Google Places")
        params = {
            "location": location,
            "radius": PLACES_SEARCH_RADIUS,
            "type": PlacesService.place_type_for(mood, place_type),
            "key": api_key,
        }
        data = _fetch_json("Google Places", f"{PLACES_BASE_URL}/nearbysearch/json", params)
        PlacesService._check_status(data, ("OK", "ZERO_RESULTS"))
        results = data.get("results") or []
        return [PlacesService.normalize(p) for p in results[:SUGGESTION_LIMIT]]

    @staticmethod
    def details(place_id: str) -> dict[str, Any]:
        """Return the provider's detail record for a place."""
        api_key = _api_key("GOOGLE_PLACES_API_KEY", "Google Places")
        params = {"place_id": place_id, "key": api_key}
        data = _fetch_json("Google Places", f"{PLACES_BASE_URL}/details/json", params)
        PlacesService._check_status(data, ("OK",))
        return data.get("result") or {}
