"""Same-origin relay to the upstream Token API.

Resolves a logical path against the configured base URL, forwards every
other query parameter, attaches credentials and relays the upstream status
and JSON body unchanged. No knowledge of resource semantics.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger

from config.settings import settings
from token_explorer.token_api.exceptions import InvalidRequest

PATH_PARAM = "path"
MISSING_PATH = "Missing 'path' parameter"
PARSE_FAILED = "Failed to parse API response"

# Every call must see current upstream state
UPSTREAM_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "Cache-Control": "no-cache, no-store",
    "Pragma": "no-cache",
}


@dataclass(frozen=True)
class ProxyResponse:
    status_code: int
    body: Any


def split_params(params: Iterable[tuple[str, str]]) -> tuple[str | None, list[tuple[str, str]]]:
    """Separate the ``path`` key from the passthrough parameters, keeping repeats and order."""
    path: str | None = None
    passthrough: list[tuple[str, str]] = []
    for key, value in params:
        if key == PATH_PARAM:
            if path is None:
                path = value
            continue
        passthrough.append((key, value))
    return path, passthrough


class ProxyForwarder:
    """One outbound GET per ``forward`` call; owns its httpx client."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.token_api_url
        self._api_key = settings.graph_api_key if api_key is None else api_key
        self._token = settings.graph_token if token is None else token
        self._client = httpx.AsyncClient(
            timeout=timeout or settings.upstream_timeout_sec,
            transport=transport,
        )
        if not self.authenticated:
            logger.warning("[PROXY] No API key or token configured, upstream calls may be rejected")

    @property
    def authenticated(self) -> bool:
        return bool(self._api_key or self._token)

    @property
    def auth_scheme(self) -> str | None:
        if self._api_key:
            return "api_key"
        if self._token:
            return "bearer"
        return None

    def build_url(self, path: str) -> httpx.URL:
        """Resolve ``path`` against the base URL; it may not leave the upstream origin."""
        base = httpx.URL(self.base_url)
        url = base.join(path)
        if (url.scheme, url.host, url.port) != (base.scheme, base.host, base.port):
            raise InvalidRequest(f"Path must stay on the upstream host: {path}")
        return url

    def build_headers(self) -> dict[str, str]:
        headers = dict(UPSTREAM_HEADERS)
        # The API key wins over the bearer token when both are set
        if self._api_key:
            headers["X-Api-Key"] = self._api_key
        elif self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def forward(self, path: str | None, params: Iterable[tuple[str, str]] = ()) -> ProxyResponse:
        """Relay one upstream call.

        Raises InvalidRequest when ``path`` is empty or points off the upstream host. Transport failures and
        non-JSON bodies come back as 500 responses with an ``error`` field.
        """
        if not path:
            raise InvalidRequest(MISSING_PATH)

        query = [(k, v) for k, v in params if k != PATH_PARAM]
        try:
            url = self.build_url(path)
            logger.info(f"[PROXY] GET {url} ({len(query)} params, auth={self.auth_scheme or 'none'})")
            resp = await self._client.get(url, params=query, headers=self.build_headers())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"[PROXY] {type(e).__name__} for {path}: {e}")
            return ProxyResponse(500, {"error": str(e) or type(e).__name__})

        logger.debug(f"[PROXY] Upstream status {resp.status_code} for {path}")
        try:
            body = resp.json()
        except ValueError:
            logger.error(f"[PROXY] Non-JSON upstream body for {path}: {resp.text[:200]}")
            return ProxyResponse(500, {"error": PARSE_FAILED})

        return ProxyResponse(resp.status_code, body)

    async def close(self) -> None:
        await self._client.aclose()
