"""Tests for the upstream forwarder."""

import httpx
import pytest

from token_explorer.proxy.forwarder import PARSE_FAILED, ProxyForwarder, split_params
from token_explorer.token_api.exceptions import InvalidRequest

BASE = "https://token-api.example"


def recording_transport(seen: list[httpx.Request], response: httpx.Response | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response if response is not None else httpx.Response(200, json={"data": []})

    return httpx.MockTransport(handler)


class TestSplitParams:
    def test_path_removed_and_repeats_kept(self) -> None:
        path, rest = split_params([("path", "swaps/evm"), ("pool", "0x1"), ("pool", "0x2"), ("path", "x")])
        assert path == "swaps/evm"
        assert rest == [("pool", "0x1"), ("pool", "0x2")]

    def test_missing_path(self) -> None:
        assert split_params([("page", "1")]) == (None, [("page", "1")])


class TestForward:
    @pytest.mark.asyncio
    async def test_url_and_passthrough_params(self) -> None:
        """Path resolves against the base URL; every other param is forwarded."""
        seen: list[httpx.Request] = []
        forwarder = ProxyForwarder(base_url=BASE, api_key="", token="", transport=recording_transport(seen))

        result = await forwarder.forward("holders/evm/0xabc", [("network_id", "base"), ("page", "2")])

        assert result.status_code == 200
        assert result.body == {"data": []}
        request = seen[0]
        assert str(request.url) == f"{BASE}/holders/evm/0xabc?network_id=base&page=2"
        assert request.headers["cache-control"] == "no-cache, no-store"
        await forwarder.close()

    @pytest.mark.asyncio
    async def test_api_key_preferred(self) -> None:
        seen: list[httpx.Request] = []
        forwarder = ProxyForwarder(base_url=BASE, api_key="key-123", token="jwt", transport=recording_transport(seen))

        await forwarder.forward("pools/evm")

        assert seen[0].headers["x-api-key"] == "key-123"
        assert "authorization" not in seen[0].headers
        assert forwarder.auth_scheme == "api_key"

    @pytest.mark.asyncio
    async def test_bearer_fallback(self) -> None:
        seen: list[httpx.Request] = []
        forwarder = ProxyForwarder(base_url=BASE, api_key="", token="jwt", transport=recording_transport(seen))

        await forwarder.forward("pools/evm")

        assert seen[0].headers["authorization"] == "Bearer jwt"
        assert "x-api-key" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_unauthenticated(self) -> None:
        seen: list[httpx.Request] = []
        forwarder = ProxyForwarder(base_url=BASE, api_key="", token="", transport=recording_transport(seen))

        await forwarder.forward("pools/evm")

        assert forwarder.authenticated is False
        assert "authorization" not in seen[0].headers
        assert "x-api-key" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_upstream_status_relayed(self) -> None:
        """Non-2xx with a JSON body is relayed unchanged."""
        response = httpx.Response(404, json={"message": "Token not found"})
        forwarder = ProxyForwarder(base_url=BASE, api_key="", token="", transport=recording_transport([], response))

        result = await forwarder.forward("tokens/evm/0xabc")

        assert result.status_code == 404
        assert result.body == {"message": "Token not found"}

    @pytest.mark.asyncio
    async def test_non_json_is_500(self) -> None:
        response = httpx.Response(502, text="<html>Bad Gateway</html>")
        forwarder = ProxyForwarder(base_url=BASE, api_key="", token="", transport=recording_transport([], response))

        result = await forwarder.forward("tokens/evm/0xabc")

        assert result.status_code == 500
        assert result.body == {"error": PARSE_FAILED}

    @pytest.mark.asyncio
    async def test_transport_failure_is_500(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        forwarder = ProxyForwarder(base_url=BASE, api_key="", token="", transport=httpx.MockTransport(handler))

        result = await forwarder.forward("pools/evm")

        assert result.status_code == 500
        assert result.body == {"error": "Name or service not known"}

    @pytest.mark.asyncio
    async def test_missing_path(self) -> None:
        seen: list[httpx.Request] = []
        forwarder = ProxyForwarder(base_url=BASE, api_key="", token="", transport=recording_transport(seen))

        with pytest.raises(InvalidRequest, match="Missing 'path' parameter"):
            await forwarder.forward("", [("page", "1")])
        assert seen == []


class TestUpstreamOrigin:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["https://attacker.example/steal", "//attacker.example/steal", "http://token-api.example/x"])
    async def test_off_host_path_rejected(self, path: str) -> None:
        """Absolute or protocol-relative paths never carry credentials elsewhere."""
        seen: list[httpx.Request] = []
        forwarder = ProxyForwarder(base_url=BASE, api_key="secret-key", token="", transport=recording_transport(seen))

        with pytest.raises(InvalidRequest, match="upstream host"):
            await forwarder.forward(path)
        assert seen == []

    def test_same_host_absolute_path_allowed(self) -> None:
        forwarder = ProxyForwarder(base_url=BASE, api_key="", token="")
        assert str(forwarder.build_url("/tokens/evm/0xabc")) == f"{BASE}/tokens/evm/0xabc"
