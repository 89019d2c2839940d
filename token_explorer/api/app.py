"""FastAPI application factory for the explorer's proxy service."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.cors import CORSMiddleware

from config.settings import settings
from token_explorer.api.middleware import NoCacheMiddleware
from token_explorer.proxy.forwarder import ProxyForwarder

API_VERSION = "0.1.0"

# Rate limiter (shared instance)
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def create_app(forwarder: ProxyForwarder | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    A ``forwarder`` passed in is used as-is and left open on shutdown;
    otherwise one is created from settings for the app's lifetime.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = getattr(app.state, "forwarder", None) is None
        if owned:
            app.state.forwarder = ProxyForwarder()
        logger.info(f"[API] Proxying {settings.proxy_route} -> {app.state.forwarder.base_url}")
        try:
            yield
        finally:
            if owned:
                await app.state.forwarder.close()
                app.state.forwarder = None

    app = FastAPI(
        title="Token Explorer API",
        version=API_VERSION,
        docs_url="/api/docs" if settings.api_debug else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
    )
    app.state.forwarder = forwarder

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(NoCacheMiddleware)

    # CORS, only needed when the frontend dev server runs on another port
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    from token_explorer.api.routers.health import router as health_router
    from token_explorer.api.routers.proxy import router as proxy_router

    app.include_router(health_router)
    app.include_router(proxy_router)

    return app
