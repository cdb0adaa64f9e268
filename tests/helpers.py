"""Common utilities for tests."""

from __future__ import annotations

import shutil
import tempfile
import unittest
from typing import Any

from planpal import create_app

TEST_PASSWORD = "secret123"
TEST_CONFIG = {
    "TESTING": True,
    "SECRET_KEY": "test-secret",
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "TMDB_API_KEY": "tmdb-key",
    "GOOGLE_PLACES_API_KEY": "places-key",
    "LLM_API_URL": "https://llm.example.com/v1/chat/completions",
    "LLM_API_KEY": "llm-key",
    "LLM_MODEL": "test-model",
}


class PlanPalTestCase(unittest.TestCase):
    """Base test case that drives the API through the test client.

    No app context is pushed here, so each request resolves its own
    bearer token.
    """

    def setUp(self):
        """Set up a test client backed by an in-memory database."""
        upload_folder = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, upload_folder, ignore_errors=True)
        self.app = create_app({**TEST_CONFIG, "UPLOAD_FOLDER": upload_folder})
        self.client = self.app.test_client()

    def signup(self, email: str, name: str = "Test User") -> tuple[str, dict[str, Any]]:
        """Register a user and return their token and profile."""
        response = self.client.post(
            "/auth/signup",
            json={"email": email, "password": TEST_PASSWORD, "name": name},
        )
        self.assertEqual(response.status_code, 200, response.get_json())
        data = response.get_json()
        return data["token"], data["profile"]

    @staticmethod
    def auth(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def create_group(self, token: str, name: str = "Movie Buffs", **extra: Any) -> dict:
        response = self.client.post(
            "/groups", json={"name": name, **extra}, headers=self.auth(token)
        )
        self.assertEqual(response.status_code, 200, response.get_json())
        return response.get_json()

    def join_group(self, token: str, group_id: str, **extra: Any) -> dict:
        response = self.client.post(
            f"/groups/{group_id}/join", json=extra, headers=self.auth(token)
        )
        self.assertEqual(response.status_code, 200, response.get_json())
        return response.get_json()

    def points(self, user_id: str) -> int:
        return self.client.get(f"/rewards/{user_id}").get_json()["points"]
