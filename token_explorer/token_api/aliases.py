"""Declarative field-alias tables, one per resource kind.

Each canonical field lists the upstream names it may arrive under, in priority
order, with a coercer and a default. ``reconcile`` is the only place that walks
these tables; adapters never probe upstream keys themselves.

Dotted names reach into nested objects (``market_data.price_usd``). ``None``
and ``""`` count as absent, ``0`` is a real value. An alias whose value fails
coercion is skipped and the next one is tried.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from token_explorer.token_api.amounts import DEFAULT_DECIMALS
from token_explorer.token_api.envelope import ResourceKind
from token_explorer.token_api.networks import ADDRESS_RE

_MISSING = object()


@dataclass(frozen=True)
class FieldSpec:
    name: str
    aliases: tuple[str, ...]
    coerce: Callable[[Any], Any]
    default: Any = None


# ---------------------------------------------------------------- coercers


def to_str(value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise ValueError("not a scalar")
    return str(value)


def to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("bool is not an int")
    if isinstance(value, float):
        return int(value)
    return int(str(value).strip())


def to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("bool is not a number")
    result = float(value)
    if result != result or result in (float("inf"), float("-inf")):
        raise ValueError("non-finite")
    return result


def to_raw_amount(value: Any) -> str:
    """Base-unit amount kept as a string; ints stay exact, floats lose the fraction."""
    if isinstance(value, bool) or isinstance(value, (dict, list)):
        raise ValueError("not an amount")
    if isinstance(value, float):
        return str(int(value))
    return str(value).strip()


def to_timestamp(value: Any) -> int:
    """Unix seconds from an int, a millisecond int, or an ISO/"YYYY-MM-DD HH:MM:SS" string."""
    if isinstance(value, bool):
        raise ValueError("bool is not a timestamp")
    if isinstance(value, (int, float)):
        seconds = int(value)
    else:
        text = str(value).strip()
        if text.lstrip("-").isdigit():
            seconds = int(text)
        else:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00").replace(" ", "T", 1))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=UTC)
            return int(parsed.timestamp())
    return seconds // 1000 if seconds > 10**12 else seconds


def to_address(value: Any) -> str:
    if not isinstance(value, str) or not ADDRESS_RE.match(value.strip()):
        raise ValueError("not an address")
    return value.strip()


def to_symbol(value: Any) -> str:
    """A token symbol; bare addresses are rejected so the next alias is tried."""
    if not isinstance(value, str) or ADDRESS_RE.match(value.strip()):
        raise ValueError("not a symbol")
    return value.strip()


# ---------------------------------------------------------------- reconcile


def lookup(record: Mapping[str, Any], path: str) -> Any:
    """Fetch a possibly dotted key; missing segments give the sentinel."""
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _present(value: Any) -> bool:
    return value is not _MISSING and value is not None and value != ""


def reconcile(
    record: Mapping[str, Any],
    table: Sequence[FieldSpec],
    defaults: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Map one upstream record onto canonical field names.

    ``defaults`` overrides per-field defaults for this call (e.g. the requested
    network when a record carries none).
    """
    defaults = defaults or {}
    out: dict[str, Any] = {}
    for spec in table:
        value = _MISSING
        for alias in spec.aliases:
            candidate = lookup(record, alias)
            if not _present(candidate):
                continue
            try:
                value = spec.coerce(candidate)
            except (TypeError, ValueError, ArithmeticError):
                continue
            break
        if value is _MISSING:
            value = defaults.get(spec.name, spec.default)
        out[spec.name] = value
    return out


def _token_side(n: int) -> tuple[FieldSpec, ...]:
    """token0/token1 arrive as nested objects, flat fields or a bare string."""
    return (
        FieldSpec(f"token{n}_address", (f"token{n}.address", f"token{n}_address", f"token{n}"), to_address),
        FieldSpec(f"token{n}_symbol", (f"token{n}.symbol", f"token{n}_symbol", f"token{n}"), to_symbol, "Unknown"),
        FieldSpec(f"token{n}_decimals", (f"token{n}.decimals", f"token{n}_decimals"), to_int, DEFAULT_DECIMALS),
    )


# ---------------------------------------------------------------- tables

BALANCE_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("contract_address", ("contract_address", "contract", "address"), to_str, ""),
    FieldSpec("amount", ("amount", "balance"), to_raw_amount, "0"),
    FieldSpec("symbol", ("symbol",), to_str, "Unknown"),
    FieldSpec("decimals", ("decimals",), to_int, DEFAULT_DECIMALS),
    FieldSpec("name", ("name", "token_name", "symbol"), to_str, "Unknown Token"),
    FieldSpec("amount_usd", ("amount_usd", "value_usd", "value"), to_float, 0.0),
    FieldSpec("logo_url", ("logo_url", "icon.web3icon"), to_str),
    FieldSpec("block_num", ("block_num", "block_number"), to_int),
    FieldSpec("network_id", ("network_id",), to_str),
)

HOLDER_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("address", ("address", "holder", "owner", "wallet"), to_str, ""),
    FieldSpec("amount", ("amount", "balance", "value"), to_raw_amount, "0"),
    FieldSpec("decimals", ("decimals",), to_int, DEFAULT_DECIMALS),
    FieldSpec("symbol", ("symbol",), to_str, "TOKEN"),
    FieldSpec("block_num", ("block_num", "last_updated_block", "block_number"), to_int),
    FieldSpec("timestamp", ("timestamp", "datetime", "date"), to_timestamp),
    FieldSpec("value_usd", ("value_usd", "balance_usd", "amount_usd"), to_float),
    FieldSpec("price_usd", ("price_usd",), to_float),
    FieldSpec("token_share", ("token_share", "share"), to_float),
    FieldSpec("network_id", ("network_id",), to_str),
)

METADATA_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("contract_address", ("contract_address", "address", "contract"), to_str, ""),
    FieldSpec("name", ("name", "token_name"), to_str, "Unknown Token"),
    FieldSpec("symbol", ("symbol", "token_symbol"), to_str, "Unknown"),
    FieldSpec("decimals", ("decimals", "token_decimals"), to_int, DEFAULT_DECIMALS),
    FieldSpec("total_supply", ("total_supply", "supply"), to_raw_amount),
    FieldSpec("circulating_supply", ("circulating_supply",), to_raw_amount),
    FieldSpec("holders", ("holders", "holder_count", "holders_count"), to_int),
    FieldSpec("block_num", ("block_num", "block_number"), to_int),
    FieldSpec("timestamp", ("block_timestamp", "timestamp", "datetime", "date"), to_timestamp),
    FieldSpec("logo_url", ("logo_url", "icon.web3icon", "logo"), to_str),
    FieldSpec("price_usd", ("market_data.price_usd", "price_usd"), to_float),
    FieldSpec(
        "price_change_24h",
        ("market_data.price_change_percentage_24h", "price_change_percentage_24h"),
        to_float,
    ),
    FieldSpec("market_cap", ("market_data.market_cap", "market_cap"), to_float),
    FieldSpec("volume_24h", ("market_data.total_volume_24h", "total_volume_24h", "volume_24h"), to_float),
    FieldSpec("network_id", ("network_id",), to_str),
)

TRANSFER_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("contract", ("contract", "token_address", "contract_address"), to_str, ""),
    FieldSpec("from_address", ("from", "from_address"), to_str, ""),
    FieldSpec("to_address", ("to", "to_address"), to_str, ""),
    FieldSpec("amount", ("amount", "value"), to_raw_amount, "0"),
    FieldSpec("tx_hash", ("transaction_id", "tx_hash", "hash"), to_str, ""),
    FieldSpec("block_num", ("block_num", "block_number"), to_int),
    FieldSpec("timestamp", ("timestamp", "block_timestamp", "datetime", "date"), to_timestamp),
    FieldSpec("log_index", ("log_index",), to_int),
    FieldSpec("decimals", ("decimals",), to_int, DEFAULT_DECIMALS),
    FieldSpec("symbol", ("symbol",), to_str, "TOKEN"),
    FieldSpec("value_usd", ("value_usd",), to_float),
    FieldSpec("price_usd", ("price_usd",), to_float),
    FieldSpec("network_id", ("network_id",), to_str),
)

OHLC_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("timestamp", ("timestamp", "time", "datetime", "date"), to_timestamp),
    FieldSpec("open", ("open",), to_float, 0.0),
    FieldSpec("high", ("high",), to_float, 0.0),
    FieldSpec("low", ("low",), to_float, 0.0),
    FieldSpec("close", ("close",), to_float, 0.0),
    FieldSpec("volume", ("volume", "volume_token0"), to_float, 0.0),
    FieldSpec("volume_token1", ("volume_token1",), to_float, 0.0),
    FieldSpec("volume_usd", ("volume_usd",), to_float),
    FieldSpec("transactions", ("transactions",), to_int),
    FieldSpec("uaw", ("uaw",), to_int),
    FieldSpec("ticker", ("ticker",), to_str),
)

POOL_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("pool", ("pool", "pool_address", "address"), to_str, ""),
    FieldSpec("factory", ("factory",), to_str),
    FieldSpec("protocol", ("protocol",), to_str, "Unknown"),
    FieldSpec("fee", ("fee",), to_int),
    *_token_side(0),
    *_token_side(1),
    FieldSpec("block_num", ("block_num", "block_number"), to_int),
    FieldSpec("timestamp", ("datetime", "timestamp", "date"), to_timestamp),
    FieldSpec("tx_hash", ("transaction_id", "tx_hash"), to_str),
    FieldSpec("network_id", ("network_id",), to_str),
)

SWAP_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("tx_hash", ("transaction_id", "tx_hash", "hash"), to_str, ""),
    FieldSpec("block_num", ("block_num", "block_number"), to_int),
    FieldSpec("timestamp", ("datetime", "timestamp", "date"), to_timestamp),
    FieldSpec("caller", ("caller",), to_str),
    FieldSpec("sender", ("sender",), to_str),
    FieldSpec("recipient", ("recipient",), to_str),
    FieldSpec("pool", ("pool",), to_str),
    FieldSpec("factory", ("factory",), to_str),
    FieldSpec("protocol", ("protocol",), to_str),
    FieldSpec("amount0", ("amount0",), to_raw_amount, "0"),
    FieldSpec("amount1", ("amount1",), to_raw_amount, "0"),
    *_token_side(0),
    *_token_side(1),
    FieldSpec("amount0_usd", ("amount0_usd", "value0_usd"), to_float),
    FieldSpec("amount1_usd", ("amount1_usd", "value1_usd"), to_float),
    FieldSpec("value0", ("value0",), to_float),
    FieldSpec("value1", ("value1",), to_float),
    FieldSpec("price0", ("price0",), to_float),
    FieldSpec("price1", ("price1",), to_float),
    FieldSpec("network_id", ("network_id",), to_str),
)

HISTORICAL_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("timestamp", ("datetime", "timestamp", "date"), to_timestamp),
    FieldSpec("contract", ("contract", "contract_address"), to_str, ""),
    FieldSpec("name", ("name", "token_name"), to_str, "Unknown Token"),
    FieldSpec("symbol", ("symbol", "token_symbol"), to_str, "Unknown"),
    FieldSpec("decimals", ("decimals", "token_decimals"), to_int, DEFAULT_DECIMALS),
    FieldSpec("open", ("open",), to_float),
    FieldSpec("high", ("high",), to_float),
    FieldSpec("low", ("low",), to_float),
    FieldSpec("close", ("close",), to_float),
    FieldSpec("balance", ("balance",), to_raw_amount),
    FieldSpec("balance_usd", ("balance_usd",), to_float),
    FieldSpec("block_num", ("block_num", "block_number"), to_int),
)

# Envelope-level context for OHLC series; read from the envelope, then its statistics
SERIES_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("contract_address", ("contract_address", "pool_address"), to_str),
    FieldSpec("token_name", ("token_name", "token0_name"), to_str),
    FieldSpec("token_symbol", ("token_symbol",), to_str),
    FieldSpec("token0_symbol", ("token0_symbol", "statistics.token0_symbol"), to_str, "Token0"),
    FieldSpec("token1_symbol", ("token1_symbol", "statistics.token1_symbol"), to_str, "Token1"),
    FieldSpec("protocol", ("protocol", "statistics.protocol"), to_str, "Unknown"),
    FieldSpec("resolution", ("resolution", "interval"), to_str),
)

FIELD_TABLES: dict[ResourceKind, tuple[FieldSpec, ...]] = {
    ResourceKind.BALANCES: BALANCE_FIELDS,
    ResourceKind.HOLDERS: HOLDER_FIELDS,
    ResourceKind.METADATA: METADATA_FIELDS,
    ResourceKind.TRANSFERS: TRANSFER_FIELDS,
    ResourceKind.OHLC_BY_CONTRACT: OHLC_FIELDS,
    ResourceKind.OHLC_BY_POOL: OHLC_FIELDS,
    ResourceKind.POOLS: POOL_FIELDS,
    ResourceKind.SWAPS: SWAP_FIELDS,
    ResourceKind.HISTORICAL_BALANCES: HISTORICAL_FIELDS,
}
