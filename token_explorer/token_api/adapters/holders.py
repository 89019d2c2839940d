from token_explorer.token_api import endpoints
from token_explorer.token_api.adapters.base import AdapterResult, ResourceAdapter, not_found_hint
from token_explorer.token_api.envelope import ResourceKind
from token_explorer.token_api.models import Holder
from token_explorer.token_api.networks import NetworkId


class HoldersAdapter(ResourceAdapter[Holder]):
    """Holders of an ERC20 token, largest first by default."""

    kind = ResourceKind.HOLDERS
    path_template = endpoints.HOLDERS
    record_model = Holder
    tag = "HOLDERS"
    address_label = "ERC20 contract address"

    async def fetch(
        self,
        contract: str | None,
        *,
        network_id: NetworkId | str | None = None,
        page: int = 1,
        page_size: int = 50,
        order_by: str = "desc",
        skip: bool = False,
    ) -> AdapterResult[Holder]:
        params = {"order_by": order_by, "limit": page_size, "page": page}
        return await self._run(
            contract, network_id=network_id, params=params, page=page, page_size=page_size, skip=skip,
        )

    def not_found_message(self, network_id: str) -> str:
        return not_found_hint(
            "holders for this token contract",
            ["The contract address is correct", "The contract is an ERC20 token"],
            network_id,
        )
