"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Settings for an in-memory application
- A controllable clock and a recording email sender
- Test client setup with admin and bearer helpers
"""

import re
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from bloggers.api.main import create_app
from bloggers.config.settings import Settings

ADMIN = ("admin", "qwerty")
START = datetime(2024, 1, 1, tzinfo=timezone.utc)

_CODE_RE = re.compile(r"code=([0-9a-f]+)")


class TickingClock:
    """Clock advancing one millisecond per reading, so creation order is total."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(milliseconds=1)
        return current

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


class RecordingEmailSender:
    """EmailSender that keeps every message it is asked to send."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.messages: list[dict[str, Any]] = []

    def send(self, to: str, subject: str, text: str, html: str | None = None) -> bool:
        self.messages.append({"to": to, "subject": subject, "text": text, "html": html})
        return self.succeed

    def codes_for(self, email: str) -> list[str]:
        """Confirmation codes sent to an address, oldest first."""
        return [
            _CODE_RE.search(message["html"]).group(1)
            for message in self.messages
            if message["to"] == email
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        storage_backend="memory",
        email_backend="console",
        bcrypt_cost=4,
        jwt_secret="test-secret",
    )


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def app(settings: Settings, clock: TickingClock, email_sender: RecordingEmailSender) -> FastAPI:
    """Application on in-memory storage with test doubles in app state."""
    test_app = create_app(settings)
    test_app.state.clock = clock
    test_app.state.email_sender = email_sender
    return test_app


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client with the lifespan running (storage opened and closed)."""
    with TestClient(app) as test_client:
        yield test_client


def blog_payload(**overrides: Any) -> dict[str, Any]:
    return {
        "name": "Arthas",
        "description": "Lich King fan blog",
        "websiteUrl": "https://www.youtube.com/x",
        **overrides,
    }


def post_payload(blog_id: str, **overrides: Any) -> dict[str, Any]:
    return {
        "title": "Frostmourne",
        "shortDescription": "Hungers",
        "content": "A runeblade of great power.",
        "blogId": blog_id,
        **overrides,
    }


def user_payload(**overrides: Any) -> dict[str, Any]:
    return {"login": "arthas", "email": "arthas@lordaeron.com", "password": "frostmourne", **overrides}


def create_blog(client: TestClient, **overrides: Any) -> dict[str, Any]:
    response = client.post("/blogs", json=blog_payload(**overrides), auth=ADMIN)
    assert response.status_code == 201
    return response.json()


def create_post(client: TestClient, blog_id: str, **overrides: Any) -> dict[str, Any]:
    response = client.post("/posts", json=post_payload(blog_id, **overrides), auth=ADMIN)
    assert response.status_code == 201
    return response.json()


def create_user(client: TestClient, **overrides: Any) -> dict[str, Any]:
    response = client.post("/users", json=user_payload(**overrides), auth=ADMIN)
    assert response.status_code == 201
    return response.json()


def login(client: TestClient, login_or_email: str, password: str) -> dict[str, str]:
    """Log in and return the bearer Authorization header."""
    response = client.post(
        "/auth/login", json={"loginOrEmail": login_or_email, "password": password}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
