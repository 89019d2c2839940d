"""OHLC price series, by token contract or by liquidity pool.

Both endpoints return the same bar shape but carry their series context
(token symbol, pool pair, protocol) either on the envelope or under its
``statistics`` object, depending on the upstream version.
"""

from token_explorer.token_api import endpoints
from token_explorer.token_api.adapters.base import AdapterResult, ResourceAdapter, not_found_hint
from token_explorer.token_api.aliases import SERIES_FIELDS, reconcile
from token_explorer.token_api.envelope import ResolvedEnvelope, ResourceKind
from token_explorer.token_api.models import OHLCBar, SeriesInfo
from token_explorer.token_api.networks import NetworkId


class _OHLCAdapter(ResourceAdapter[OHLCBar]):
    record_model = OHLCBar

    async def fetch(
        self,
        address: str | None,
        *,
        network_id: NetworkId | str | None = None,
        resolution: str = "1d",
        from_timestamp: int | None = None,
        to_timestamp: int | None = None,
        page: int = 1,
        page_size: int = 10,
        skip: bool = False,
    ) -> AdapterResult[OHLCBar]:
        params = {
            "resolution": resolution,
            "from_timestamp": from_timestamp,
            "to_timestamp": to_timestamp,
            "page": page,
            "limit": page_size,
        }
        return await self._run(
            address, network_id=network_id, params=params, page=page, page_size=page_size, skip=skip,
        )

    def series_info(self, envelope: ResolvedEnvelope, address: str | None) -> SeriesInfo:
        fields = reconcile(envelope.meta, SERIES_FIELDS, {"contract_address": address})
        return SeriesInfo.model_validate(fields)


class OHLCByContractAdapter(_OHLCAdapter):
    kind = ResourceKind.OHLC_BY_CONTRACT
    path_template = endpoints.OHLC_BY_CONTRACT
    tag = "OHLC_CONTRACT"
    address_label = "token contract address"

    def not_found_message(self, network_id: str) -> str:
        return not_found_hint(
            "OHLC data for this token contract",
            ["The contract address is correct", "The contract is a tradable token"],
            network_id,
        )


class OHLCByPoolAdapter(_OHLCAdapter):
    kind = ResourceKind.OHLC_BY_POOL
    path_template = endpoints.OHLC_BY_POOL
    tag = "OHLC_POOL"
    address_label = "pool address"

    def not_found_message(self, network_id: str) -> str:
        return not_found_hint(
            "OHLC data for this pool",
            ["The pool address is correct", "The pool has sufficient trading activity"],
            network_id,
            with_example=False,
        )
