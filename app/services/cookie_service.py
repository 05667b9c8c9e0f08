from __future__ import annotations

from urllib.parse import unquote

# The session cookie carries the provider's bearer token and nothing else.
SESSION_COOKIE = "access_token"

# Fixed 24h session, independent of whatever lifetime the provider gives the token.
SESSION_MAX_AGE_SEC = 86400

_COOKIE_FLAGS = "HttpOnly; Secure; SameSite=Lax"


# parse a raw Cookie header into {name: percent-decoded value}
def parse_cookies(cookie_header: str) -> dict[str, str]:
    cookies: dict[str, str] = {}
    for segment in cookie_header.split(";"):
        name, sep, value = segment.strip().partition("=")
        # malformed ("flag"), nameless ("=x") and empty ("a=") segments are dropped
        if not sep or not name or not value:
            continue
        cookies[name] = unquote(value)
    return cookies


def session_cookie(access_token: str) -> str:
    """Set-Cookie value that starts an authenticated session."""
    return (
        f"{SESSION_COOKIE}={access_token}; {_COOKIE_FLAGS}; "
        f"Max-Age={SESSION_MAX_AGE_SEC}; Path=/"
    )


def cleared_session_cookie() -> str:
    """Set-Cookie value that ends the session immediately."""
    return f"{SESSION_COOKIE}=; {_COOKIE_FLAGS}; Max-Age=0; Path=/"
