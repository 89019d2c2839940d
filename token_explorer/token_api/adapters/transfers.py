from typing import Any

from token_explorer.token_api import endpoints
from token_explorer.token_api.adapters.base import AdapterResult, ResourceAdapter
from token_explorer.token_api.envelope import ResourceKind
from token_explorer.token_api.models import Transfer
from token_explorer.token_api.networks import NetworkId, normalize_address


class TransfersAdapter(ResourceAdapter[Transfer]):
    """ERC20 transfers of a token contract over the last ``age`` days."""

    kind = ResourceKind.TRANSFERS
    path_template = endpoints.TRANSFERS
    record_model = Transfer
    tag = "TRANSFERS"
    address_label = "contract address"

    def address_params(self, address: str | None) -> dict[str, Any]:
        return {"contract": address}

    async def fetch(
        self,
        contract: str | None,
        *,
        network_id: NetworkId | str | None = None,
        age: int = 30,
        page: int = 1,
        page_size: int = 100,
        from_address: str | None = None,
        to_address: str | None = None,
        skip: bool = False,
    ) -> AdapterResult[Transfer]:
        params = {
            "age": age,
            "limit": page_size,
            "page": page,
            "from": normalize_address(from_address),
            "to": normalize_address(to_address),
        }
        return await self._run(
            contract, network_id=network_id, params=params, page=page, page_size=page_size, skip=skip,
        )
