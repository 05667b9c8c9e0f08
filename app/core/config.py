from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]

_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


def _getenv(name: str, default: str) -> str:
    # Centralize env access so it’s easy to extend later (type casting, required vars)
    return os.environ.get(name, default).strip()


def _require_http_url(name: str, value: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"{name} must be an http(s) URL (got {value!r})")
    return value


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    oauth_provider_url: str
    oauth_client_id: str
    oauth_redirect_uri: str

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()
    port_raw = _getenv("PORT", "8000")

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if log_json_raw not in _TRUE_WORDS + _FALSE_WORDS:
        raise ValueError(f"LOG_JSON must be true|false (got {log_json_raw!r})")

    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer (got {port_raw!r})") from None

    # The provider is fixed for the lifetime of the process.
    provider_url = _require_http_url(
        "OAUTH_PROVIDER_URL",
        _getenv("OAUTH_PROVIDER_URL", "https://hn.simplerauth.com").rstrip("/"),
    )
    client_id = _getenv("OAUTH_CLIENT_ID", "news.gcombinator.com")
    if not client_id:
        raise ValueError("OAUTH_CLIENT_ID must not be empty")
    redirect_uri = _require_http_url(
        "OAUTH_REDIRECT_URI",
        _getenv("OAUTH_REDIRECT_URI", "https://news.gcombinator.com/callback"),
    )

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=log_json_raw in _TRUE_WORDS,
        port=port,
        oauth_provider_url=provider_url,
        oauth_client_id=client_id,
        oauth_redirect_uri=redirect_uri,
    )


# Optional: module-level singleton so imports are cheap
SETTINGS = load_settings()


def get_settings() -> Settings:
    """FastAPI dependency: the process-wide settings value."""
    return SETTINGS
