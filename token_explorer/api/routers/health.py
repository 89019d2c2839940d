"""Health check."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from token_explorer.api.app import API_VERSION
from token_explorer.api.dependencies import get_forwarder
from token_explorer.proxy.forwarder import ProxyForwarder

router = APIRouter(prefix="/api/v1", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    upstream_url: str
    authenticated: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(forwarder: ProxyForwarder = Depends(get_forwarder)) -> HealthResponse:
    """Report the upstream target and whether credentials are configured. No upstream call."""
    return HealthResponse(
        status="ok" if forwarder.authenticated else "degraded",
        version=API_VERSION,
        upstream_url=forwarder.base_url,
        authenticated=forwarder.authenticated,
    )
