from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.core.config import Settings, get_settings
from app.services.provider_client import ProviderClient


def get_provider_client(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ProviderClient:
    """Bind the shared httpx client (opened in the app lifespan) to settings.

    Tests override this dependency to point at an httpx.MockTransport.
    """
    return ProviderClient(settings, request.app.state.http_client)


SettingsDep = Annotated[Settings, Depends(get_settings)]
ProviderDep = Annotated[ProviderClient, Depends(get_provider_client)]
