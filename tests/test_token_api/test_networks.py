"""Tests for networks, addresses, block dating and time spans."""

from datetime import UTC, datetime, timedelta

import pytest

from token_explorer.token_api.aliases import HOLDER_FIELDS, reconcile
from token_explorer.token_api.blocks import estimate_date_from_block
from token_explorer.token_api.exceptions import InvalidRequest
from token_explorer.token_api.models import Holder
from token_explorer.token_api.networks import (
    NetworkId,
    example_token,
    explorer_token_url,
    explorer_tx_url,
    is_known_network,
    network_name,
    network_value,
    normalize_address,
    protocol_name,
    require_address,
)
from token_explorer.token_api.timeframes import get_time_range

BARE = "c944e90c64b2c07662a292be6244bdf05cda44a7"


class TestAddresses:
    def test_prefix_added(self) -> None:
        assert normalize_address(BARE) == f"0x{BARE}"
        assert normalize_address(f"  0x{BARE} ") == f"0x{BARE}"

    def test_empty(self) -> None:
        assert normalize_address("") is None
        assert normalize_address(None) is None

    def test_require_valid(self) -> None:
        assert require_address(BARE) == f"0x{BARE}"

    def test_require_rejects_malformed(self) -> None:
        with pytest.raises(InvalidRequest, match="valid wallet address"):
            require_address("0x1234", "wallet address")
        with pytest.raises(InvalidRequest, match="Please enter a"):
            require_address("   ")


class TestNetworks:
    def test_value(self) -> None:
        assert network_value(None) == "mainnet"
        assert network_value(NetworkId.BASE) == "base"

    def test_unknown_passes_through(self) -> None:
        """Unrecognized networks are forwarded verbatim."""
        assert network_value("zksync-era") == "zksync-era"
        assert is_known_network("zksync-era") is False
        assert network_name("zksync-era") == "zksync-era"

    def test_display_names(self) -> None:
        assert network_name("arbitrum-one") == "Arbitrum"
        assert network_name(NetworkId.MATIC) == "Polygon"

    def test_example_token(self) -> None:
        assert example_token("base") == ("cbETH", "0x2Ae3F1Ec7F1F5012CFEab0185bfc7aa3cf0DEc22")
        assert example_token("matic")[0] == "GRT"  # falls back to mainnet

    def test_explorer_links(self) -> None:
        assert explorer_token_url("mainnet", "0xabc") == "https://etherscan.io/token/0xabc"
        assert explorer_tx_url("bsc", "0xdef") == "https://bscscan.com/tx/0xdef"
        assert explorer_token_url("zksync-era", "0xabc") is None

    def test_protocols(self) -> None:
        assert protocol_name("uniswap_v3") == "Uniswap V3"
        assert protocol_name("sushi_swap") == "Sushi Swap"
        assert protocol_name(None) == "Unknown"


class TestBlocks:
    def test_estimate(self) -> None:
        now = datetime(2024, 5, 1, tzinfo=UTC)
        assert estimate_date_from_block(19_199_900, "mainnet", now) == now - timedelta(seconds=1200)

    def test_future_block_is_now(self) -> None:
        now = datetime(2024, 5, 1, tzinfo=UTC)
        assert estimate_date_from_block(99_999_999, "mainnet", now) == now

    def test_unknown_network_uses_mainnet(self) -> None:
        now = datetime(2024, 5, 1, tzinfo=UTC)
        assert estimate_date_from_block(19_199_999, "zksync-era", now) == now - timedelta(seconds=12)

    def test_negative_block_is_none(self) -> None:
        assert estimate_date_from_block(-10**18, "mainnet") is None

    def test_unrepresentable_age_is_none(self) -> None:
        now = datetime(2024, 5, 1, tzinfo=UTC)
        assert estimate_date_from_block(0, "arbitrum-one", now) is not None
        assert estimate_date_from_block(0, "mainnet", datetime(1, 1, 2, tzinfo=UTC)) is None

    def test_holder_with_hostile_block(self) -> None:
        """A negative upstream block height leaves the record without a date."""
        fields = reconcile({"address": "0x1", "amount": "1", "block_num": -10**18}, HOLDER_FIELDS, {"network_id": "mainnet"})
        assert Holder.model_validate(fields).observed_at is None


class TestTimeSpans:
    def test_named_span(self) -> None:
        assert get_time_range("7d", now=1_000_000) == (1_000_000 - 604_800, 1_000_000)

    def test_unknown_span_is_30_days(self) -> None:
        assert get_time_range("2w", now=3_000_000) == (3_000_000 - 2_592_000, 3_000_000)
