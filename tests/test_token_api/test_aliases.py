"""Tests for alias tables and record reconciliation."""

from token_explorer.token_api.aliases import (
    _MISSING,
    HOLDER_FIELDS,
    METADATA_FIELDS,
    OHLC_FIELDS,
    POOL_FIELDS,
    SERIES_FIELDS,
    TRANSFER_FIELDS,
    lookup,
    reconcile,
    to_raw_amount,
    to_timestamp,
)

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


class TestCoercers:
    def test_timestamp_variants(self) -> None:
        assert to_timestamp(1714521600) == 1714521600
        assert to_timestamp(1714521600000) == 1714521600  # milliseconds
        assert to_timestamp("1714521600") == 1714521600
        assert to_timestamp("2024-05-01 00:00:00") == 1714521600
        assert to_timestamp("2024-05-01T00:00:00Z") == 1714521600

    def test_raw_amount(self) -> None:
        assert to_raw_amount(" 42 ") == "42"
        assert to_raw_amount(1e18) == "1000000000000000000"
        assert to_raw_amount(7) == "7"

    def test_lookup_dotted(self) -> None:
        record = {"market_data": {"price_usd": 0.15}}
        assert lookup(record, "market_data.price_usd") == 0.15
        assert lookup(record, "market_data.missing") is _MISSING


class TestReconcile:
    def test_holder_quantity_aliases(self) -> None:
        """amount and balance are the same canonical field."""
        a = reconcile({"address": "0x1", "amount": "100"}, HOLDER_FIELDS)
        b = reconcile({"address": "0x1", "balance": "100"}, HOLDER_FIELDS)
        assert a["amount"] == b["amount"] == "100"

    def test_transfer_counterparty_aliases(self) -> None:
        a = reconcile({"to": "0xabc", "from": "0xdef"}, TRANSFER_FIELDS)
        b = reconcile({"to_address": "0xabc", "from_address": "0xdef"}, TRANSFER_FIELDS)
        assert a["to_address"] == b["to_address"] == "0xabc"
        assert a["from_address"] == b["from_address"] == "0xdef"

    def test_defaults(self) -> None:
        """Missing fields fall back to documented defaults."""
        fields = reconcile({}, HOLDER_FIELDS)
        assert fields["decimals"] == 18
        assert fields["symbol"] == "TOKEN"
        assert fields["amount"] == "0"
        assert fields["block_num"] is None

    def test_null_and_empty_are_absent(self) -> None:
        fields = reconcile({"amount": None, "balance": "", "value": "9"}, HOLDER_FIELDS)
        assert fields["amount"] == "9"

    def test_zero_is_a_value(self) -> None:
        fields = reconcile({"decimals": 0}, HOLDER_FIELDS)
        assert fields["decimals"] == 0

    def test_bad_value_tries_next_alias(self) -> None:
        """An uncoercible alias is skipped, not fatal."""
        fields = reconcile({"timestamp": "not-a-date", "time": 1714521600}, OHLC_FIELDS)
        assert fields["timestamp"] == 1714521600

    def test_bad_value_without_alias_uses_default(self) -> None:
        fields = reconcile({"decimals": "eighteen"}, HOLDER_FIELDS)
        assert fields["decimals"] == 18

    def test_bool_is_not_a_number(self) -> None:
        fields = reconcile({"decimals": True}, HOLDER_FIELDS)
        assert fields["decimals"] == 18

    def test_call_defaults_override(self) -> None:
        fields = reconcile({}, HOLDER_FIELDS, {"network_id": "base"})
        assert fields["network_id"] == "base"

    def test_nested_market_data(self) -> None:
        fields = reconcile(
            {"name": "The Graph", "market_data": {"price_usd": "0.15", "market_cap": 1.5e9}},
            METADATA_FIELDS,
        )
        assert fields["price_usd"] == 0.15
        assert fields["market_cap"] == 1.5e9
        assert fields["symbol"] == "Unknown"


class TestPoolTokens:
    def test_nested_token_objects(self) -> None:
        fields = reconcile(
            {
                "pool": "0xpool",
                "token0": {"address": WETH, "symbol": "WETH", "decimals": 18},
                "token1": {"address": USDC, "symbol": "USDC", "decimals": 6},
            },
            POOL_FIELDS,
        )
        assert fields["token0_symbol"] == "WETH"
        assert fields["token1_decimals"] == 6
        assert fields["token1_address"] == USDC

    def test_bare_address_is_not_a_symbol(self) -> None:
        """token0 as a plain address fills the address, not the symbol."""
        fields = reconcile({"token0": WETH, "token1": "USDC"}, POOL_FIELDS)
        assert fields["token0_address"] == WETH
        assert fields["token0_symbol"] == "Unknown"
        assert fields["token1_address"] is None
        assert fields["token1_symbol"] == "USDC"


class TestSeriesFields:
    def test_statistics_fallback(self) -> None:
        fields = reconcile(
            {"pool_address": "0xpool", "statistics": {"token0_symbol": "WETH", "protocol": "uniswap_v3"}},
            SERIES_FIELDS,
        )
        assert fields["contract_address"] == "0xpool"
        assert fields["token0_symbol"] == "WETH"
        assert fields["token1_symbol"] == "Token1"
        assert fields["protocol"] == "uniswap_v3"
