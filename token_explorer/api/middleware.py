"""Response headers for the explorer API."""

from __future__ import annotations

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from config.settings import settings

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Mark proxy responses non-cacheable; nosniff on everything."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        response: Response = await call_next(request)

        if request.url.path == settings.proxy_route:
            response.headers.update(NO_STORE_HEADERS)
        response.headers["X-Content-Type-Options"] = "nosniff"
        return response
