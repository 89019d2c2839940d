"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from token_explorer.proxy.forwarder import ProxyForwarder


def get_forwarder(request: Request) -> ProxyForwarder:
    """Return the app's forwarder (set by the lifespan or by create_app)."""
    forwarder = getattr(request.app.state, "forwarder", None)
    if forwarder is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Proxy not ready")
    return forwarder
