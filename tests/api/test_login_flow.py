"""Authorization code flow, end to end, with the browser played by the test.

Flow:
  0. Anonymous : GET / renders the login page with an /authorize link
  1. Provider  : (simulated) user consents, provider redirects to /callback
  2. Callback  : GET /callback?code=…&state=… → 302 / + session cookie
  3. Profile   : GET / with the cookie → provider /api/user → profile page
  4. Logout    : GET /logout → 302 / + cleared cookie
  5. Anonymous : GET / without the cookie → login page again
"""

from __future__ import annotations

import html
import logging
import re
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from app.services.cookie_service import parse_cookies
from tests.conftest import REDIRECT_URI, TEST_TOKEN, FakeProvider

logger = logging.getLogger(__name__)


def _cookie_from(set_cookie: str) -> str:
    # "access_token=T; HttpOnly; ..." → "access_token=T"
    return set_cookie.split(";", 1)[0]


def test_login_flow_happy_path(
    client: TestClient,
    fake_provider: FakeProvider,
    caplog: pytest.LogCaptureFixture,
) -> None:
    # ── Phase 0: Anonymous ─────────────────────────────────────────
    page = client.get("/")
    assert page.status_code == 200
    href = re.search(r'id="login" href="([^"]+)"', page.text)
    assert href
    authorize = urlparse(html.unescape(href.group(1)))
    query = parse_qs(authorize.query)
    state = query["state"][0]
    logger.info("BROWSER: following authorize link  state=%s", state)

    # ── Phase 1: Provider ──────────────────────────────────────────
    # The provider would redirect to the registered redirect_uri.
    assert query["redirect_uri"] == [REDIRECT_URI]
    callback_path = urlparse(REDIRECT_URI).path

    # ── Phase 2: Callback ──────────────────────────────────────────
    with caplog.at_level(logging.INFO, logger="app.services.provider_client"):
        resp = client.get(callback_path, params={"code": "one-time", "state": state})
    assert resp.status_code == 302
    assert resp.headers["location"] == "/"
    session = _cookie_from(resp.headers["set-cookie"])
    assert parse_cookies(session) == {"access_token": TEST_TOKEN}
    assert any("Token exchange succeeded" in m for m in caplog.messages)

    # ── Phase 3: Profile ───────────────────────────────────────────
    profile = client.get("/", headers={"Cookie": session})
    assert profile.status_code == 200
    assert "User Info" in profile.text
    assert len(fake_provider.calls_to("/token")) == 1
    assert len(fake_provider.calls_to("/api/user")) == 1

    # ── Phase 4: Logout ────────────────────────────────────────────
    out = client.get("/logout", headers={"Cookie": session})
    assert out.status_code == 302
    assert parse_cookies(_cookie_from(out.headers["set-cookie"])) == {}

    # ── Phase 5: Anonymous again ───────────────────────────────────
    again = client.get("/")
    assert "Login Required" in again.text
    assert len(fake_provider.calls_to("/api/user")) == 1
