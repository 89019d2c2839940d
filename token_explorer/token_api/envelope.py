"""Envelope decoding for Token API payloads.

The upstream wraps the same records differently across endpoints and even
across calls to one endpoint: a bare array, ``{"data": [...]}``, a named field
such as ``{"holders": [...]}``, or a single bare record. ``resolve_envelope``
tries each variant in a fixed order so an ambiguous payload always decodes
the same way, and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ResourceKind(str, Enum):
    BALANCES = "balances"
    HOLDERS = "holders"
    METADATA = "metadata"
    TRANSFERS = "transfers"
    OHLC_BY_CONTRACT = "ohlc-by-contract"
    OHLC_BY_POOL = "ohlc-by-pool"
    POOLS = "pools"
    SWAPS = "swaps"
    HISTORICAL_BALANCES = "historical-balances"


class EnvelopeShape(str, Enum):
    BARE_ARRAY = "bare_array"
    DATA_FIELD = "data_field"
    NAMED_FIELD = "named_field"
    SINGLE_RECORD = "single_record"
    UNRECOGNIZED = "unrecognized"


# Resource-specific wrapper keys, tried in order after "data"
NAMED_FIELDS: dict[ResourceKind, tuple[str, ...]] = {
    ResourceKind.BALANCES: ("balances",),
    ResourceKind.HOLDERS: ("holders",),
    ResourceKind.TRANSFERS: ("transfers",),
    ResourceKind.OHLC_BY_CONTRACT: ("ohlc",),
    ResourceKind.OHLC_BY_POOL: ("ohlc",),
    ResourceKind.POOLS: ("pools",),
    ResourceKind.SWAPS: ("swaps",),
    ResourceKind.HISTORICAL_BALANCES: ("balances", "history"),
}

# A bare object with any of these keys is taken as one record of the kind
RECORD_KEYS: dict[ResourceKind, frozenset[str]] = {
    ResourceKind.METADATA: frozenset({"name", "symbol", "decimals"}),
    ResourceKind.BALANCES: frozenset({"amount", "balance"}),
    ResourceKind.HOLDERS: frozenset({"amount", "balance"}),
    ResourceKind.TRANSFERS: frozenset({"transaction_id", "tx_hash"}),
    ResourceKind.OHLC_BY_CONTRACT: frozenset({"open", "close"}),
    ResourceKind.OHLC_BY_POOL: frozenset({"open", "close"}),
    ResourceKind.POOLS: frozenset({"pool", "token0"}),
    ResourceKind.SWAPS: frozenset({"amount0", "amount1"}),
    ResourceKind.HISTORICAL_BALANCES: frozenset({"open", "close", "balances"}),
}


@dataclass(frozen=True)
class ResolvedEnvelope:
    """Records found in a payload, which variant matched, and envelope-level fields."""

    shape: EnvelopeShape
    records: tuple[dict[str, Any], ...] = ()
    meta: dict[str, Any] = field(default_factory=dict)
    wrapper_key: str | None = None

    @property
    def matched(self) -> bool:
        return self.shape is not EnvelopeShape.UNRECOGNIZED

    @property
    def first(self) -> dict[str, Any] | None:
        return self.records[0] if self.records else None


def _records(value: list | dict) -> tuple[dict[str, Any], ...]:
    items = value if isinstance(value, list) else [value]
    return tuple(item for item in items if isinstance(item, dict))


def _meta(raw: dict[str, Any], key: str | None) -> dict[str, Any]:
    return {k: v for k, v in raw.items() if k != key}


def resolve_envelope(raw: Any, kind: ResourceKind) -> ResolvedEnvelope:
    """Decode ``raw`` for ``kind``. Unrecognized payloads yield no records."""
    # 1. bare array
    if isinstance(raw, list):
        return ResolvedEnvelope(EnvelopeShape.BARE_ARRAY, _records(raw))

    if not isinstance(raw, dict):
        return ResolvedEnvelope(EnvelopeShape.UNRECOGNIZED)

    # 2. {data: [...]} / {data: {...}}
    data = raw.get("data")
    if isinstance(data, (list, dict)):
        return ResolvedEnvelope(EnvelopeShape.DATA_FIELD, _records(data), _meta(raw, "data"), "data")

    # 3. resource-specific wrapper
    for key in NAMED_FIELDS.get(kind, ()):
        value = raw.get(key)
        if isinstance(value, list):
            return ResolvedEnvelope(EnvelopeShape.NAMED_FIELD, _records(value), _meta(raw, key), key)

    # 4. the payload is itself one record
    if RECORD_KEYS.get(kind, frozenset()) & raw.keys():
        return ResolvedEnvelope(EnvelopeShape.SINGLE_RECORD, (raw,))

    return ResolvedEnvelope(EnvelopeShape.UNRECOGNIZED, meta=dict(raw))
