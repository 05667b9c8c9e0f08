"""Logout: drop the session cookie and go home.

There is nothing to revoke server-side; the access token lives only in the
browser's cookie jar, so expiring the cookie is the whole operation.  The
response is the same whether or not a session existed.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

from app.services.cookie_service import cleared_session_cookie

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/logout")
async def logout() -> RedirectResponse:
    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    response.headers.append("set-cookie", cleared_session_cookie())
    logger.info("Session cookie cleared")
    return response
