from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app.api.callback import router as callback_router
from app.api.health import router as health_router
from app.api.home import router as home_router
from app.api.logout import router as logout_router
from app.api.metrics_endpoint import router as metrics_router
from app.core.config import SETTINGS
from app.core.errors import RelyingPartyError
from app.core.logging import setup_logging
from app.middleware.metrics import MetricsMiddleware
from app.middleware.request_context import (
    RequestContextMiddleware,
    install_request_context_filter,
)

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
install_request_context_filter()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # One pooled client for both provider calls; closed on shutdown.
    async with httpx.AsyncClient() as http_client:
        app.state.http_client = http_client
        logger.info("Provider HTTP client ready  provider=%s", SETTINGS.oauth_provider_url)
        yield


# Every path not claimed by another router renders a page, so the
# OpenAPI/docs routes stay off.
app = FastAPI(
    title="oauth-relying-party",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


@app.exception_handler(RelyingPartyError)
async def relying_party_error_handler(
    request: Request, exc: RelyingPartyError
) -> PlainTextResponse:
    logger.warning(
        "%s on %s → %d: %s",
        type(exc).__name__,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return PlainTextResponse(exc.to_text(), status_code=exc.status_code)


# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(callback_router)
app.include_router(logout_router)
# Catch-all page route: must stay last.
app.include_router(home_router)

logger.info(
    "oauth-relying-party started  env=%s log_level=%s port=%d client_id=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    SETTINGS.oauth_client_id,
)
