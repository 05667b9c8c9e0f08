from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode


@dataclass(frozen=True, slots=True)
class AuthorizationRequest:
    """One login attempt, rendered into the provider's /authorize URL.

    Built fresh for every login page view and never stored; the state
    value is not checked when the provider calls back.
    """

    client_id: str
    redirect_uri: str
    state: str
    response_type: str = "code"

    def to_url(self, provider_url: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": self.response_type,
            "state": self.state,
        }
        return f"{provider_url}/authorize?{urlencode(params)}"
