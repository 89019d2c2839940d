"""Tests for the proxy and health endpoints."""

import httpx
import pytest

from token_explorer.api.app import create_app
from token_explorer.proxy.forwarder import ProxyForwarder

BASE = "https://token-api.example"


def make_client(handler, api_key: str = "key-123") -> httpx.AsyncClient:
    forwarder = ProxyForwarder(base_url=BASE, api_key=api_key, token="", transport=httpx.MockTransport(handler))
    app = create_app(forwarder=forwarder)
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://explorer.test")


def ok_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"data": [{"path": request.url.path, "query": str(request.url.query, "ascii")}]})


class TestProxyEndpoint:
    @pytest.mark.asyncio
    async def test_missing_path_is_400(self) -> None:
        async with make_client(ok_handler) as client:
            resp = await client.get("/api/token-proxy", params={"network_id": "mainnet"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing 'path' parameter"}

    @pytest.mark.asyncio
    async def test_relays_upstream(self) -> None:
        """Path and passthrough params reach the upstream; body comes back unchanged."""
        async with make_client(ok_handler) as client:
            resp = await client.get(
                "/api/token-proxy",
                params=[("path", "holders/evm/0xabc"), ("network_id", "base"), ("page", "2")],
            )

        assert resp.status_code == 200
        assert resp.json() == {"data": [{"path": "/holders/evm/0xabc", "query": "network_id=base&page=2"}]}

    @pytest.mark.asyncio
    async def test_upstream_status_kept(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Not Found"})

        async with make_client(handler) as client:
            resp = await client.get("/api/token-proxy", params={"path": "tokens/evm/0xabc"})

        assert resp.status_code == 404
        assert resp.json() == {"message": "Not Found"}

    @pytest.mark.asyncio
    async def test_transport_error_is_500(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        async with make_client(handler) as client:
            resp = await client.get("/api/token-proxy", params={"path": "pools/evm"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "timed out"}

    @pytest.mark.asyncio
    async def test_responses_not_cacheable(self) -> None:
        async with make_client(ok_handler) as client:
            ok = await client.get("/api/token-proxy", params={"path": "pools/evm"})
            bad = await client.get("/api/token-proxy")

        for resp in (ok, bad):
            assert resp.headers["cache-control"] == "no-store, no-cache, must-revalidate, max-age=0"
            assert resp.headers["pragma"] == "no-cache"
            assert resp.headers["expires"] == "0"
            assert resp.headers["x-content-type-options"] == "nosniff"

    @pytest.mark.asyncio
    async def test_off_host_path_is_400(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with make_client(handler) as client:
            resp = await client.get("/api/token-proxy", params={"path": "https://attacker.example/steal"})

        assert resp.status_code == 400
        assert "upstream host" in resp.json()["error"]
        assert seen == []


class TestHealth:
    @pytest.mark.asyncio
    async def test_authenticated(self) -> None:
        async with make_client(ok_handler) as client:
            resp = await client.get("/api/v1/health")

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["upstream_url"] == BASE
        assert body["authenticated"] is True
        assert "cache-control" not in resp.headers

    @pytest.mark.asyncio
    async def test_degraded_without_credentials(self) -> None:
        async with make_client(ok_handler, api_key="") as client:
            resp = await client.get("/api/v1/health")

        assert resp.json()["status"] == "degraded"
        assert resp.json()["authenticated"] is False
