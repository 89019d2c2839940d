from collections.abc import Mapping
from typing import Any

from token_explorer.token_api import endpoints
from token_explorer.token_api.adapters.base import AdapterResult, ResourceAdapter
from token_explorer.token_api.envelope import ResolvedEnvelope, ResourceKind
from token_explorer.token_api.models import HistoricalBalancePoint
from token_explorer.token_api.networks import NetworkId, normalize_address

# Token-level keys a per-contract wrapper shares with its balance points
WRAPPER_KEYS = (
    "contract_address", "contract", "token_name", "name", "token_symbol", "symbol",
    "token_decimals", "decimals",
)


def _flatten(wrapper: Mapping[str, Any], points: list[Any]) -> list[dict[str, Any]]:
    shared = {k: wrapper[k] for k in WRAPPER_KEYS if k in wrapper}
    return [{**shared, **point} for point in points if isinstance(point, dict)]


class HistoricalBalancesAdapter(ResourceAdapter[HistoricalBalancePoint]):
    """Balance history of a wallet, one point per token per interval."""

    kind = ResourceKind.HISTORICAL_BALANCES
    path_template = endpoints.HISTORICAL_BALANCES
    record_model = HistoricalBalancePoint
    tag = "HISTORICAL"
    address_label = "wallet address"

    async def fetch(
        self,
        address: str | None,
        *,
        network_id: NetworkId | str | None = None,
        contract: str | None = None,
        resolution: str | None = None,
        from_timestamp: int | None = None,
        to_timestamp: int | None = None,
        page: int = 1,
        page_size: int = 10,
        skip: bool = False,
    ) -> AdapterResult[HistoricalBalancePoint]:
        params = {
            "contract": normalize_address(contract),
            "resolution": resolution,
            "from_timestamp": from_timestamp,
            "to_timestamp": to_timestamp,
            "page": page,
            "limit": page_size,
        }
        return await self._run(
            address, network_id=network_id, params=params, page=page, page_size=page_size, skip=skip,
        )

    def expand(self, envelope: ResolvedEnvelope) -> tuple[Mapping[str, Any], ...]:
        # Legacy shapes put token fields on the envelope or on a per-contract
        # wrapper holding its own "balances" list; both are folded into each point.
        inherited = {k: envelope.meta[k] for k in WRAPPER_KEYS if k in envelope.meta}
        points: list[Mapping[str, Any]] = []
        for record in envelope.records:
            nested = record.get("balances")
            if isinstance(nested, list):
                points.extend(_flatten({**inherited, **record}, nested))
            else:
                points.append({**inherited, **record})
        return tuple(points)
