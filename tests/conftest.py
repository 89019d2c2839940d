"""Shared test fixtures."""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from token_explorer.token_api.client import TokenApiClient


def _make_response(payload: Any = None, status_code: int = 200, text: str | None = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    if payload is None and text is not None:
        resp.json.side_effect = ValueError("Expecting value")
        resp.text = text
    else:
        resp.json.return_value = payload
        resp.text = text if text is not None else json.dumps(payload)
    return resp


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory for fake httpx responses; ``text`` without a payload is a non-JSON body."""
    return _make_response


@pytest.fixture
def api_client() -> TokenApiClient:
    """Proxy client whose inner httpx client is an AsyncMock returning ``[]``."""
    client = TokenApiClient(base_url="http://explorer.test")
    client._client = AsyncMock()
    client._client.get = AsyncMock(return_value=_make_response([]))
    return client
