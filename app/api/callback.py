"""OAuth redirect target: GET /callback.

The provider sends the browser here with ?code=…&state=…  after the user
consents.  We trade the code for an access token, store the token in the
session cookie and bounce the browser to the home page.

TRADE-OFF: `state` is accepted and logged but never compared with the value
the login page issued.  There is no CSRF-state verification in this flow.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, status
from fastapi.responses import RedirectResponse

from app.api.dependencies import ProviderDep
from app.core.errors import MissingCode
from app.services.cookie_service import session_cookie

logger = logging.getLogger(__name__)

router = APIRouter(tags=["oauth"])


@router.get("/callback")
async def oauth_callback(
    provider: ProviderDep,
    code: str | None = Query(None),
    state: str | None = Query(None),
) -> RedirectResponse:
    logger.info("Callback received  has_code=%s state=%s", bool(code), state)

    # FAIL POINT: no code → 400 before any outbound call.
    if not code:
        raise MissingCode()

    # FAIL POINT: exchange errors propagate as OAuthExchangeFailed → 500.
    access_token = await provider.exchange_code(code)

    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    response.headers.append("set-cookie", session_cookie(access_token))
    logger.info("Session started, redirecting to /")
    return response
