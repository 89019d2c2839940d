"""Shared machinery for the per-resource adapters.

Every adapter call runs the same pipeline: validate the primary key, GET the
upstream path through the proxy, decode the envelope, reconcile each record
through the kind's alias table, then derive pagination.

State per call: IDLE -> LOADING -> SUCCESS | ERROR. Calls are not
de-duplicated or cancelled; whichever call resolves last leaves its result on
the adapter, even if it was dispatched first.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from config.settings import settings
from token_explorer.token_api.aliases import FIELD_TABLES, reconcile
from token_explorer.token_api.client import TokenApiClient
from token_explorer.token_api.envelope import EnvelopeShape, ResolvedEnvelope, ResourceKind, resolve_envelope
from token_explorer.token_api.exceptions import InvalidRequest, TokenApiError, UpstreamHttpError
from token_explorer.token_api.models import SeriesInfo
from token_explorer.token_api.networks import NetworkId, example_token, network_name, network_value, require_address
from token_explorer.token_api.pagination import Pagination, derive_pagination

RecordT = TypeVar("RecordT", bound=BaseModel)


class AdapterState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class AdapterResult(Generic[RecordT]):
    kind: ResourceKind
    state: AdapterState
    data: tuple[RecordT, ...] = ()
    pagination: Pagination | None = None
    shape: EnvelopeShape | None = None
    error: str | None = None
    exception: TokenApiError | None = None
    info: SeriesInfo | None = None
    network_id: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is AdapterState.SUCCESS

    @property
    def first(self) -> RecordT | None:
        return self.data[0] if self.data else None

    @property
    def is_empty(self) -> bool:
        return not self.data


def not_found_hint(subject: str, checks: list[str], network_id: str, with_example: bool = True) -> str:
    """User-facing text for a 404 that usually means "valid address, no rows"."""
    lines = [f"No {subject} found. Please verify:"]
    lines += [f"  {i}. {check}" for i, check in enumerate(checks, start=1)]
    lines.append(f"  {len(checks) + 1}. The selected network is correct (currently: {network_name(network_id)})")
    if with_example:
        symbol, address = example_token(network_id)
        lines.append(f"Try using example token ({symbol}): {address}")
    return "\n".join(lines)


class ResourceAdapter(Generic[RecordT]):
    kind: ClassVar[ResourceKind]
    path_template: ClassVar[str]
    record_model: ClassVar[type[BaseModel]]
    tag: ClassVar[str] = "ADAPTER"
    address_label: ClassVar[str] = "address"
    requires_address: ClassVar[bool] = True

    def __init__(self, client: TokenApiClient) -> None:
        self._client = client
        self.state = AdapterState.IDLE
        self.is_loading = False
        self.error: str | None = None
        self.last_result: AdapterResult[RecordT] | None = None

    # ------------------------------------------------------------ hooks

    def build_path(self, address: str | None) -> str:
        return self.path_template.format(address=address)

    def address_params(self, address: str | None) -> dict[str, Any]:
        """Query parameters that carry the primary key when it is not in the path."""
        return {}

    def not_found_message(self, network_id: str) -> str | None:
        """Friendlier text for a 404; None means surface the upstream body."""
        return None

    def expand(self, envelope: ResolvedEnvelope) -> tuple[Mapping[str, Any], ...]:
        return envelope.records

    def series_info(self, envelope: ResolvedEnvelope, address: str | None) -> SeriesInfo | None:
        return None

    # ------------------------------------------------------------ pipeline

    async def _run(
        self,
        address: str | None,
        *,
        network_id: NetworkId | str | None,
        params: dict[str, Any],
        page: int | None = None,
        page_size: int | None = None,
        skip: bool = False,
    ) -> AdapterResult[RecordT]:
        network = network_value(network_id, settings.default_network)

        if skip or (self.requires_address and not address):
            logger.debug(f"[{self.tag}] Skipped (skip={skip}, address={address!r})")
            return AdapterResult(self.kind, AdapterState.IDLE, network_id=network)

        try:
            normalized = require_address(address, self.address_label) if address else None
        except InvalidRequest as e:
            return self._settle(self._failure(e, network))

        self.state = AdapterState.LOADING
        self.is_loading = True
        self.error = None

        query = {"network_id": network, **self.address_params(normalized), **params}
        try:
            raw = await self._client.get(self.build_path(normalized), query)
        except TokenApiError as e:
            result = self._failure(e, network)
        else:
            result = self._success(raw, normalized, network, page, page_size)
        return self._settle(result)

    def _success(
        self,
        raw: Any,
        address: str | None,
        network: str,
        page: int | None,
        page_size: int | None,
    ) -> AdapterResult[RecordT]:
        envelope = resolve_envelope(raw, self.kind)
        if not envelope.matched:
            logger.debug(f"[{self.tag}] Unrecognized payload shape, treating as empty")

        records = self.expand(envelope)
        data = tuple(r for r in (self.build_record(rec, network) for rec in records) if r is not None)

        pagination = None
        if page is not None and page_size is not None:
            pagination = derive_pagination(envelope.meta, page=page, page_size=page_size, returned=len(envelope.records))

        return AdapterResult(
            self.kind,
            AdapterState.SUCCESS,
            data=data,
            pagination=pagination,
            shape=envelope.shape,
            info=self.series_info(envelope, address),
            network_id=network,
        )

    def build_record(self, record: Mapping[str, Any], network: str) -> RecordT | None:
        fields = reconcile(record, FIELD_TABLES[self.kind], {"network_id": network})
        try:
            return self.record_model.model_validate(fields)  # type: ignore[return-value]
        except ValidationError as e:
            logger.warning(f"[{self.tag}] Dropping record that failed validation: {e.error_count()} errors")
            return None

    def _failure(self, exc: TokenApiError, network: str) -> AdapterResult[RecordT]:
        message = str(exc)
        if isinstance(exc, UpstreamHttpError):
            hint = self.not_found_message(network) if exc.is_not_found else None
            message = hint or exc.body or str(exc)
        logger.warning(f"[{self.tag}] {type(exc).__name__}: {str(exc)[:200]}")
        return AdapterResult(
            self.kind,
            AdapterState.ERROR,
            error=message,
            exception=exc,
            network_id=network,
        )

    def _settle(self, result: AdapterResult[RecordT]) -> AdapterResult[RecordT]:
        self.state = result.state
        self.is_loading = False
        self.error = result.error
        self.last_result = result
        if result.ok:
            logger.debug(f"[{self.tag}] {len(result.data)} records ({result.shape.value if result.shape else '-'})")
        return result
