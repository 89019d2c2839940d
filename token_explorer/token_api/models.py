"""Canonical records handed to consumers, independent of the upstream wire shape."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel

from token_explorer.token_api.amounts import TokenAmount, format_amount, format_fee
from token_explorer.token_api.blocks import estimate_date_from_block
from token_explorer.token_api.networks import NetworkId, protocol_name


def _as_datetime(timestamp: int | None) -> datetime | None:
    if timestamp is None:
        return None
    try:
        return datetime.fromtimestamp(timestamp, UTC)
    except (OverflowError, OSError, ValueError):
        return None


class Balance(BaseModel):
    contract_address: str = ""
    amount: str = "0"
    symbol: str = "Unknown"
    decimals: int = 18
    name: str = "Unknown Token"
    amount_usd: float = 0.0
    logo_url: str | None = None
    block_num: int | None = None
    network_id: str = NetworkId.MAINNET.value

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def token_amount(self) -> TokenAmount:
        return TokenAmount.of(self.amount, self.decimals)

    @property
    def display_amount(self) -> str:
        return self.token_amount.display


class Holder(BaseModel):
    address: str = ""
    amount: str = "0"
    decimals: int = 18
    symbol: str = "TOKEN"
    block_num: int | None = None
    timestamp: int | None = None
    value_usd: float | None = None
    price_usd: float | None = None
    token_share: float | None = None
    network_id: str = NetworkId.MAINNET.value

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def token_amount(self) -> TokenAmount:
        return TokenAmount.of(self.amount, self.decimals)

    @property
    def observed_at(self) -> datetime | None:
        """Record time, estimated from the block height when no timestamp came back."""
        if self.timestamp is not None:
            return _as_datetime(self.timestamp)
        if self.block_num is not None:
            return estimate_date_from_block(self.block_num, self.network_id)
        return None


class TokenMetadata(BaseModel):
    contract_address: str = ""
    name: str = "Unknown Token"
    symbol: str = "Unknown"
    decimals: int = 18
    total_supply: str | None = None
    circulating_supply: str | None = None
    holders: int | None = None
    block_num: int | None = None
    timestamp: int | None = None
    logo_url: str | None = None
    price_usd: float | None = None
    price_change_24h: float | None = None
    market_cap: float | None = None
    volume_24h: float | None = None
    network_id: str = NetworkId.MAINNET.value

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def display_supply(self) -> str | None:
        if self.total_supply is None:
            return None
        return format_amount(self.total_supply, self.decimals, min_places=2, max_places=2)

    @property
    def has_market_data(self) -> bool:
        return self.price_usd is not None


class Transfer(BaseModel):
    contract: str = ""
    from_address: str = ""
    to_address: str = ""
    amount: str = "0"
    tx_hash: str = ""
    block_num: int | None = None
    timestamp: int | None = None
    log_index: int | None = None
    decimals: int = 18
    symbol: str = "TOKEN"
    value_usd: float | None = None
    price_usd: float | None = None
    network_id: str = NetworkId.MAINNET.value

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def token_amount(self) -> TokenAmount:
        return TokenAmount.of(self.amount, self.decimals)

    @property
    def observed_at(self) -> datetime | None:
        if self.timestamp is not None:
            return _as_datetime(self.timestamp)
        if self.block_num is not None:
            return estimate_date_from_block(self.block_num, self.network_id)
        return None


class OHLCBar(BaseModel):
    timestamp: int | None = None
    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: float = 0.0
    volume_token1: float = 0.0
    volume_usd: float | None = None
    transactions: int | None = None
    uaw: int | None = None
    ticker: str | None = None

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def observed_at(self) -> datetime | None:
        return _as_datetime(self.timestamp)

    @property
    def change_pct(self) -> float:
        if self.open == 0:
            return 0.0
        return (self.close - self.open) / self.open * 100


class SeriesInfo(BaseModel):
    """Envelope-level context that accompanies an OHLC series."""

    contract_address: str | None = None
    token_name: str | None = None
    token_symbol: str | None = None
    token0_symbol: str = "Token0"
    token1_symbol: str = "Token1"
    protocol: str = "Unknown"
    resolution: str | None = None

    model_config = {"extra": "ignore", "frozen": True}


class Pool(BaseModel):
    pool: str = ""
    factory: str | None = None
    protocol: str = "Unknown"
    fee: int | None = None
    token0_address: str | None = None
    token0_symbol: str = "Unknown"
    token0_decimals: int = 18
    token1_address: str | None = None
    token1_symbol: str = "Unknown"
    token1_decimals: int = 18
    block_num: int | None = None
    timestamp: int | None = None
    tx_hash: str | None = None
    network_id: str = NetworkId.MAINNET.value

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def fee_percent(self) -> str:
        return format_fee(self.fee)

    @property
    def pair_label(self) -> str:
        return f"{self.token0_symbol}/{self.token1_symbol}"

    @property
    def protocol_label(self) -> str:
        return protocol_name(self.protocol)


class Swap(BaseModel):
    tx_hash: str = ""
    block_num: int | None = None
    timestamp: int | None = None
    caller: str | None = None
    sender: str | None = None
    recipient: str | None = None
    pool: str | None = None
    factory: str | None = None
    protocol: str | None = None
    amount0: str = "0"
    amount1: str = "0"
    token0_address: str | None = None
    token0_symbol: str = "Unknown"
    token0_decimals: int = 18
    token1_address: str | None = None
    token1_symbol: str = "Unknown"
    token1_decimals: int = 18
    amount0_usd: float | None = None
    amount1_usd: float | None = None
    value0: float | None = None
    value1: float | None = None
    price0: float | None = None
    price1: float | None = None
    network_id: str = NetworkId.MAINNET.value

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def display_amount0(self) -> str:
        return format_amount(self.amount0, self.token0_decimals)

    @property
    def display_amount1(self) -> str:
        return format_amount(self.amount1, self.token1_decimals)

    @property
    def observed_at(self) -> datetime | None:
        return _as_datetime(self.timestamp)


class HistoricalBalancePoint(BaseModel):
    timestamp: int | None = None
    contract: str = ""
    name: str = "Unknown Token"
    symbol: str = "Unknown"
    decimals: int = 18
    open: float | None = None
    high: float | None = None
    low: float | None = None
    close: float | None = None
    balance: str | None = None
    balance_usd: float | None = None
    block_num: int | None = None

    model_config = {"extra": "ignore", "frozen": True}

    @property
    def observed_at(self) -> datetime | None:
        return _as_datetime(self.timestamp)

    @property
    def display_balance(self) -> str | None:
        if self.balance is None:
            return None
        return format_amount(self.balance, self.decimals)
