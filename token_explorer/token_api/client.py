"""Async client for the same-origin Token API proxy.

Adapters never talk to the upstream directly: every call goes to the proxy
route with the upstream path in ``?path=`` and the filters alongside it.
No retries; a failed call needs a new explicit fetch.
"""

from enum import Enum
from typing import Any

import httpx
from loguru import logger

from config.settings import settings
from token_explorer.token_api.exceptions import InvalidRequest, TransportError, UpstreamHttpError

NO_CACHE_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}


def build_query(path: str, params: dict[str, Any] | None = None) -> dict[str, str]:
    """Proxy query string: ``path`` plus filters, dropping None and stringifying bools."""
    query: dict[str, str] = {"path": path}
    for key, value in (params or {}).items():
        if value is None or key == "path":
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value.value if isinstance(value, Enum) else value)
    return query


class TokenApiClient:
    """Async HTTP client for the explorer's proxy endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        proxy_route: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._proxy_route = proxy_route or settings.proxy_route
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.explorer_url,
            timeout=timeout or settings.client_timeout_sec,
            headers=NO_CACHE_HEADERS,
            transport=transport,
        )

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET an upstream path through the proxy and return the decoded JSON.

        Raises UpstreamHttpError on non-2xx, TransportError when the proxy is
        unreachable. A 2xx body that is not JSON decodes to None.
        """
        if not path:
            raise InvalidRequest("Missing 'path' parameter")

        query = build_query(path, params)
        logger.debug(f"[TOKEN_API] GET {path} {query}")
        try:
            resp = await self._client.get(self._proxy_route, params=query)
        except httpx.RequestError as e:
            logger.warning(f"[TOKEN_API] {type(e).__name__} for {path}: {e}")
            raise TransportError(f"Request failed: {path}: {e}") from e

        if not 200 <= resp.status_code < 300:
            logger.debug(f"[TOKEN_API] HTTP {resp.status_code} for {path}")
            raise UpstreamHttpError(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError:
            logger.warning(f"[TOKEN_API] Non-JSON body for {path}")
            return None

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "TokenApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
