"""Catch-all page route: profile view for signed-in visitors, login otherwise.

Registered last in app.main so /callback, /logout, /health and /metrics win.
The session is whatever the raw Cookie header says; there is no server-side
session object.

TRADE-OFF: Inline HTML keeps the two pages next to the route that serves
them (no Jinja, no static files).  Every provider-supplied value is escaped.
"""

from __future__ import annotations

import html
import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.api.dependencies import ProviderDep, SettingsDep
from app.core.config import Settings
from app.models.authorization_request import AuthorizationRequest
from app.models.user_profile import UserProfile
from app.services.cookie_service import SESSION_COOKIE, parse_cookies
from app.services.provider_client import ProviderClient
from app.services.state_service import generate_state

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

_PAGE_TITLE = "HackerNews OAuth Demo"

_BASE_CSS = """\
    body {{
      font-family: Arial, sans-serif; max-width: 600px;
      margin: 50px auto; padding: 20px;{extra}
    }}
    .panel {{ background: #f6f6ef; border-radius: 5px; margin: 20px 0; }}
    .button {{
      display: inline-block; background: #ff6600; color: white;
      border: none; border-radius: 3px; cursor: pointer; text-decoration: none;
    }}
    .button:hover {{ background: #e55a00; }}"""

_LOGIN_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
{css}
    .login-box {{ padding: 40px; }}
    .login-box .button {{ padding: 15px 30px; font-size: 16px; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  <div class="panel login-box">
    <h2>Login Required</h2>
    <p>Please authenticate with your HackerNews account to continue.</p>
    <a class="button" id="login" href="{authorize_url}">Login with HackerNews</a>
  </div>
</body>
</html>
"""

_PROFILE_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
{css}
    .user-info {{ padding: 20px; }}
    .button {{ padding: 10px 20px; }}
  </style>
</head>
<body>
  <h1>Welcome to {title}</h1>
  <div class="panel user-info">
    <h2>User Info</h2>
    <p><strong>Username:</strong> <span id="username">{username}</span></p>
    <p><strong>Karma:</strong> <span id="karma">{karma}</span></p>
    <p><strong>User ID:</strong> <span id="user-id">{user_id}</span></p>
{optional_rows}
  </div>
  <a class="button" id="logout" href="/logout">Logout</a>
</body>
</html>
"""


def render_login_page(settings: Settings) -> HTMLResponse:
    """Login view: one button pointing at the provider's /authorize URL."""
    auth_request = AuthorizationRequest(
        client_id=settings.oauth_client_id,
        redirect_uri=settings.oauth_redirect_uri,
        state=generate_state(),
    )
    authorize_url = auth_request.to_url(settings.oauth_provider_url)
    page = _LOGIN_HTML.format(
        title=_PAGE_TITLE,
        css=_BASE_CSS.format(extra=" text-align: center;"),
        authorize_url=html.escape(authorize_url, quote=True),
    )
    return HTMLResponse(page)


def _optional_rows(user: UserProfile) -> str:
    rows = []
    created = user.created_date()
    if created:
        rows.append(
            f'    <p><strong>Created:</strong> <span id="created">{created}</span></p>'
        )
    if user.about:
        rows.append(
            "    <p><strong>About:</strong> "
            f'<span id="about">{html.escape(user.about)}</span></p>'
        )
    return "\n".join(rows)


async def render_profile_page(provider: ProviderClient, access_token: str) -> HTMLResponse:
    """Profile view.  ProfileFetchFailed propagates to the 500 handler."""
    user = await provider.fetch_user(access_token)
    page = _PROFILE_HTML.format(
        title=_PAGE_TITLE,
        css=_BASE_CSS.format(extra=""),
        username=html.escape(user.username),
        karma=user.karma_display,
        user_id=html.escape(str(user.id)),
        optional_rows=_optional_rows(user),
    )
    return HTMLResponse(page)


@router.get("/{full_path:path}", response_model=None)
async def home(
    request: Request,
    full_path: str,
    settings: SettingsDep,
    provider: ProviderDep,
) -> HTMLResponse:
    cookies = parse_cookies(request.headers.get("cookie", ""))
    access_token = cookies.get(SESSION_COOKIE)

    if access_token:
        logger.debug("Session cookie present  path=/%s", full_path)
        return await render_profile_page(provider, access_token)

    logger.debug("Anonymous visitor  path=/%s", full_path)
    return render_login_page(settings)
