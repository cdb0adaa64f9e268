"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from planpal import create_app, store
from planpal.auth.services import AuthService

from tests.helpers import TEST_CONFIG, TEST_PASSWORD


@pytest.fixture
def app(tmp_path):
    """A fresh app backed by its own in-memory database."""
    return create_app({**TEST_CONFIG, "UPLOAD_FOLDER": str(tmp_path / "uploads")})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def kv(app):
    """A store bound to a pushed request context, for calling services directly."""
    with app.test_request_context():
        yield store.client()


@pytest.fixture
def make_user(kv):
    """Register a user through the service layer and return their id."""

    def _make_user(email, name="Test User"):
        result = AuthService.signup(kv, email, TEST_PASSWORD, name)
        return result["profile"]["id"]

    return _make_user
