"""Tests for the movie and place suggestion proxies."""

from unittest.mock import MagicMock, patch

import requests

from tests.helpers import PlanPalTestCase


def _response(payload, status_code=200):
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload
    if status_code >= 400:
        mock_response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} error"
        )
    return mock_response


def _movie(i, poster="/p.jpg"):
    return {
        "id": i,
        "title": f"Movie {i}",
        "overview": "Plot",
        "release_date": "2024-01-01",
        "vote_average": 7.5,
        "poster_path": poster,
        "backdrop_path": None,
    }


class MovieRoutesTestCase(PlanPalTestCase):
    """Test case for the TMDB proxy."""

    @patch("planpal.suggestions.services.requests.get")
    def test_search_movies(self, mock_get):
        mock_get.return_value = _response({"results": [_movie(i) for i in range(15)]})

        response = self.client.get("/movies/search?query=dune")

        self.assertEqual(response.status_code, 200)
        movies = response.get_json()
        self.assertEqual(len(movies), 10)
        self.assertEqual(
            movies[0],
            {
                "id": 0,
                "title": "Movie 0",
                "overview": "Plot",
                "releaseDate": "2024-01-01",
                "rating": 7.5,
                "posterPath": "https://image.tmdb.org/t/p/w500/p.jpg",
                "backdropPath": None,
            },
        )
        args, kwargs = mock_get.call_args
        self.assertTrue(args[0].endswith("/search/movie"))
        self.assertEqual(kwargs["params"]["query"], "dune")
        self.assertEqual(kwargs["params"]["api_key"], "tmdb-key")
        self.assertEqual(kwargs["timeout"], self.app.config["SUGGESTION_TIMEOUT"])

    @patch("planpal.suggestions.services.requests.get")
    def test_popular_movies(self, mock_get):
        mock_get.return_value = _response({"results": [_movie(1, poster=None)]})
        movies = self.client.get("/movies/popular").get_json()
        self.assertIsNone(movies[0]["posterPath"])
        self.assertTrue(mock_get.call_args[0][0].endswith("/movie/popular"))

    @patch("planpal.suggestions.services.requests.get")
    def test_movies_by_mood(self, mock_get):
        mock_get.return_value = _response({"results": []})

        self.client.get("/movies/mood/scary")
        self.assertEqual(mock_get.call_args.kwargs["params"]["with_genres"], 27)

        self.client.get("/movies/mood/unknown")
        self.assertEqual(mock_get.call_args.kwargs["params"]["with_genres"], 28)

    @patch("planpal.suggestions.services.requests.get")
    def test_provider_error_status(self, mock_get):
        mock_get.return_value = _response({}, status_code=401)
        response = self.client.get("/movies/popular")
        self.assertEqual(response.status_code, 502)
        self.assertIn("error", response.get_json())

    @patch("planpal.suggestions.services.requests.get")
    def test_provider_timeout(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        self.assertEqual(self.client.get("/movies/popular").status_code, 502)

    @patch("planpal.suggestions.services.requests.get")
    def test_missing_api_key(self, mock_get):
        self.app.config["TMDB_API_KEY"] = None
        response = self.client.get("/movies/popular")
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.get_json()["error"], "TMDB API key not configured")
        mock_get.assert_not_called()


class PlacesRoutesTestCase(PlanPalTestCase):
    """Test case for the Google Places proxy."""

    place = {
        "place_id": "abc",
        "name": "Blue Cafe",
        "vicinity": "1 Main St",
        "rating": 4.6,
        "user_ratings_total": 120,
        "price_level": 2,
        "types": ["cafe"],
        "geometry": {"location": {"lat": 1.0, "lng": 2.0}},
        "photos": [{"photo_reference": "ref-1"}],
    }

    @patch("planpal.suggestions.services.requests.get")
    def test_search_places_with_mood(self, mock_get):
        mock_get.return_value = _response({"status": "OK", "results": [self.place]})

        response = self.client.post(
            "/places/search",
            json={"location": "1.0,2.0", "type": "bar", "mood": "chill"},
        )

        self.assertEqual(response.status_code, 200)
        place = response.get_json()[0]
        self.assertEqual(place["id"], "abc")
        self.assertEqual(place["address"], "1 Main St")
        self.assertEqual(place["userRatingsTotal"], 120)
        self.assertEqual(place["location"], {"lat": 1.0, "lng": 2.0})
        self.assertEqual(place["photo"], "ref-1")
        params = mock_get.call_args.kwargs["params"]
        self.assertEqual(params["type"], "cafe")
        self.assertEqual(params["key"], "places-key")

    @patch("planpal.suggestions.services.requests.get")
    def test_search_places_type_fallbacks(self, mock_get):
        mock_get.return_value = _response({"status": "ZERO_RESULTS", "results": []})

        self.client.post("/places/search", json={"location": "1,2", "type": "bar"})
        self.assertEqual(mock_get.call_args.kwargs["params"]["type"], "bar")

        response = self.client.post("/places/search", json={"location": "1,2"})
        self.assertEqual(mock_get.call_args.kwargs["params"]["type"], "restaurant")
        self.assertEqual(response.get_json(), [])

    def test_search_places_requires_location(self):
        response = self.client.post("/places/search", json={"mood": "chill"})
        self.assertEqual(response.status_code, 400)

    @patch("planpal.suggestions.services.requests.get")
    def test_search_places_provider_status(self, mock_get):
        mock_get.return_value = _response(
            {"status": "REQUEST_DENIED", "error_message": "bad key"}
        )
        response = self.client.post("/places/search", json={"location": "1,2"})
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.get_json()["error"], "Places API error: REQUEST_DENIED")

    @patch("planpal.suggestions.services.requests.get")
    def test_place_details(self, mock_get):
        mock_get.return_value = _response(
            {"status": "OK", "result": {"place_id": "abc", "name": "Blue Cafe"}}
        )
        response = self.client.get("/places/abc")
        self.assertEqual(response.get_json()["name"], "Blue Cafe")
        self.assertEqual(mock_get.call_args.kwargs["params"]["place_id"], "abc")

    @patch("planpal.suggestions.services.requests.get")
    def test_place_details_not_ok(self, mock_get):
        mock_get.return_value = _response({"status": "NOT_FOUND"})
        self.assertEqual(self.client.get("/places/abc").status_code, 502)
