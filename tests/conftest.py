# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Builds a fresh application on an in-memory SQLite database per test
# - Helpers to register users and create articles through the API
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds a module-level app from the environment on import

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-conduit")
os.environ.setdefault("SEED_DATABASE", "false")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.auth.security import TokenCodec
from app.config import Settings
from app.main import create_app

TEST_SECRET = "test-secret-key-for-conduit"


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Settings for an isolated in-memory database."""
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        SECRET_KEY=TEST_SECRET,
        SEED_DATABASE=False,
        ENVIRONMENT="development",
    )


@pytest.fixture
def app(settings):
    """A fresh application; every test starts with empty tables."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """
    TestClient with the lifespan running (tables are created on enter).

    One client per test keeps the app, its engine and the event loop
    together for the whole test.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token_codec():
    """Codec sharing the test secret, for crafting tokens by hand."""
    return TokenCodec(secret=TEST_SECRET)


# =============================================================================
# API Helpers
# =============================================================================

def auth_header(token: str) -> dict:
    """Authorization header in the Conduit scheme."""
    return {"Authorization": f"Token {token}"}


def register_user(client, username: str, email: str = None, password: str = "password123") -> dict:
    """Register through the API and return the user payload (with token)."""
    response = client.post(
        "/api/users",
        json={
            "user": {
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            }
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]


def create_article(client, token: str, title: str = "How to train your dragon", **fields) -> dict:
    """Create an article through the API and return the article payload."""
    article = {
        "title": title,
        "description": fields.pop("description", "Ever wonder how?"),
        "body": fields.pop("body", "You have to believe"),
    }
    article.update(fields)
    response = client.post("/api/articles", json={"article": article}, headers=auth_header(token))
    assert response.status_code == 201, response.text
    return response.json()["article"]


@pytest.fixture
def jake(client):
    """A registered user named jake."""
    return register_user(client, "jake", "jake@jake.jake")


@pytest.fixture
def jane(client):
    """A registered user named jane."""
    return register_user(client, "jane", "jane@jane.jane")
