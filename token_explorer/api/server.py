"""Proxy API server, runs uvicorn inside the existing asyncio event loop."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from loguru import logger

from config.settings import settings


async def run_server(app: FastAPI | None = None) -> None:
    """Serve the explorer API until cancelled.

    ``uvicorn.Server.serve()`` is fully async, so main() runs this as a task
    next to its signal handling. Lifespan events own the upstream forwarder.
    """
    if app is None:
        from token_explorer.api.app import create_app

        app = create_app()

    config = uvicorn.Config(
        app=app,
        host=settings.api_host,
        port=settings.dashboard_port,
        log_level="warning",
        loop="none",  # use the existing event loop
        lifespan="on",
    )
    server = uvicorn.Server(config)
    logger.info(f"[API] Explorer proxy listening on http://{settings.api_host}:{settings.dashboard_port}{settings.proxy_route}")
    await server.serve()
