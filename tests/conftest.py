from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import app` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.api.dependencies import get_provider_client  # noqa: E402
from app.core.config import Settings, get_settings  # noqa: E402
from app.main import app  # noqa: E402
from app.services.provider_client import ProviderClient  # noqa: E402

PROVIDER_URL = "https://provider.test"
CLIENT_ID = "rp.example.test"
REDIRECT_URI = "https://rp.example.test/callback"

TEST_TOKEN = "tok-abc123"
TEST_USER = {
    "username": "pg",
    "karma": 157236,
    "id": "pg",
    "created": 1160418092,
    "about": "Bug fixer.",
}

Handler = Callable[[httpx.Request], httpx.Response]


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "app_env": "test",
        "log_level": "info",
        "log_json": False,
        "port": 8000,
        "oauth_provider_url": PROVIDER_URL,
        "oauth_client_id": CLIENT_ID,
        "oauth_redirect_uri": REDIRECT_URI,
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


class FakeProvider:
    """Stands in for the OAuth provider behind an httpx.MockTransport.

    Replace token_handler / user_handler per test to change the replies.
    Every outbound request is recorded in `requests`.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.token_handler: Handler = lambda _req: httpx.Response(
            200, json={"access_token": TEST_TOKEN, "token_type": "bearer"}
        )
        self.user_handler: Handler = lambda _req: httpx.Response(
            200, json={"user": dict(TEST_USER)}
        )

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST" and request.url.path == "/token":
            return self.token_handler(request)
        if request.method == "GET" and request.url.path == "/api/user":
            return self.user_handler(request)
        return httpx.Response(404, json={"error": "not_found"})

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(settings: Settings, fake_provider: FakeProvider) -> Iterator[TestClient]:
    http = fake_provider.http_client()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_provider_client] = lambda: ProviderClient(
        settings, http
    )
    try:
        yield TestClient(app, follow_redirects=False)
    finally:
        app.dependency_overrides.clear()
