"""Error taxonomy for the login flow.

Each error knows the HTTP status it maps to and the prose prefix shown to
the browser.  app.main installs one exception handler that turns any
RelyingPartyError into a plain-text response; nothing is retried.
"""

from __future__ import annotations


class RelyingPartyError(Exception):
    status_code: int = 500
    prefix: str = ""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_text(self) -> str:
        return f"{self.prefix}{self.message}"


class MissingCode(RelyingPartyError):
    """The provider redirected to /callback without an authorization code."""

    status_code = 400

    def __init__(self, message: str = "Authorization code not found") -> None:
        super().__init__(message)


class OAuthExchangeFailed(RelyingPartyError):
    """The token endpoint did not yield an access token."""

    status_code = 500
    prefix = "OAuth error: "


class ProfileFetchFailed(RelyingPartyError):
    """The user-info endpoint rejected the token or returned garbage."""

    status_code = 500
    prefix = "Error loading user info: "
