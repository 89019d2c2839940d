from typing import Any

from token_explorer.token_api import endpoints
from token_explorer.token_api.adapters.base import AdapterResult, ResourceAdapter
from token_explorer.token_api.envelope import ResourceKind
from token_explorer.token_api.models import Balance
from token_explorer.token_api.networks import NetworkId, normalize_address


class BalancesAdapter(ResourceAdapter[Balance]):
    """Token balances held by a wallet."""

    kind = ResourceKind.BALANCES
    path_template = endpoints.BALANCES
    record_model = Balance
    tag = "BALANCES"
    address_label = "wallet address"

    async def fetch(
        self,
        address: str | None,
        *,
        network_id: NetworkId | str | None = None,
        page: int = 1,
        page_size: int = 100,
        min_amount: str | None = None,
        contract: str | None = None,
        skip: bool = False,
    ) -> AdapterResult[Balance]:
        params: dict[str, Any] = {
            "page": page,
            "page_size": page_size,
            "min_amount": min_amount,
            "contract": normalize_address(contract),
        }
        return await self._run(
            address, network_id=network_id, params=params, page=page, page_size=page_size, skip=skip,
        )
