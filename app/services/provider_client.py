"""Outbound calls to the OAuth provider.

Two calls exist in the whole service, each made at most once per request:

  POST {provider}/token:    authorization code → access token
  GET  {provider}/api/user: bearer token → user profile

Neither is retried.  Timeouts are httpx's defaults.  Every failure is
re-raised as the matching RelyingPartyError so the route layer only ever
sees the error taxonomy in app.core.errors.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from app.core.config import Settings
from app.core.errors import OAuthExchangeFailed, ProfileFetchFailed
from app.core.metrics import PROFILE_FETCHES, TOKEN_EXCHANGES
from app.models.user_profile import UserProfile

logger = logging.getLogger(__name__)


def _describe(exc: Exception) -> str:
    # Some httpx transport errors stringify to "".
    return str(exc) or type(exc).__name__


class ProviderClient:
    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    @property
    def token_url(self) -> str:
        return f"{self._settings.oauth_provider_url}/token"

    @property
    def user_url(self) -> str:
        return f"{self._settings.oauth_provider_url}/api/user"

    async def exchange_code(self, code: str) -> str:
        """Trade an authorization code for an access token.

        The response status is not consulted; only the JSON body matters.
        Raises OAuthExchangeFailed when the body carries no access_token or
        the call itself fails.
        """
        form = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": self._settings.oauth_client_id,
            "redirect_uri": self._settings.oauth_redirect_uri,
        }
        try:
            resp = await self._http.post(self.token_url, data=form)
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            TOKEN_EXCHANGES.labels(result="failure").inc()
            logger.warning("Token exchange failed: %s", _describe(exc))
            raise OAuthExchangeFailed(_describe(exc)) from exc

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        # Numeric tokens are kept as text; booleans and objects are not tokens.
        if access_token and isinstance(access_token, (int, float)) and not isinstance(
            access_token, bool
        ):
            access_token = str(access_token)
        if not access_token or not isinstance(access_token, str):
            TOKEN_EXCHANGES.labels(result="failure").inc()
            logger.warning(
                "Token exchange returned no access_token  status=%d", resp.status_code
            )
            raise OAuthExchangeFailed("No access token received")

        TOKEN_EXCHANGES.labels(result="success").inc()
        logger.info("Token exchange succeeded  token_len=%d", len(access_token))
        return access_token

    async def fetch_user(self, access_token: str) -> UserProfile:
        """Look up the user behind *access_token*.

        The provider is the only judge of token validity: any non-2xx
        answer raises ProfileFetchFailed.
        """
        try:
            resp = await self._http.get(
                self.user_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as exc:
            PROFILE_FETCHES.labels(result="failure").inc()
            logger.warning("User-info request failed: %s", _describe(exc))
            raise ProfileFetchFailed(_describe(exc)) from exc

        if not resp.is_success:
            PROFILE_FETCHES.labels(result="failure").inc()
            logger.warning("User-info rejected  status=%d", resp.status_code)
            raise ProfileFetchFailed("Failed to fetch user info")

        try:
            payload = resp.json()
            user = UserProfile.model_validate(payload["user"])
        except (ValueError, KeyError, TypeError) as exc:
            # pydantic's ValidationError is a ValueError
            PROFILE_FETCHES.labels(result="failure").inc()
            logger.warning("User-info payload unusable: %s", _describe(exc))
            message = (
                "Malformed user payload"
                if isinstance(exc, ValidationError)
                else _describe(exc)
            )
            raise ProfileFetchFailed(message) from exc

        PROFILE_FETCHES.labels(result="success").inc()
        logger.info("User-info fetched  username=%s", user.username)
        return user
