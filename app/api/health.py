"""Liveness check.

The service holds no state of its own and does not ping the
provider here: a provider outage shows up as 500s on page views, not as a
restart loop.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}
