from token_explorer.token_api import endpoints
from token_explorer.token_api.adapters.base import AdapterResult, ResourceAdapter
from token_explorer.token_api.envelope import ResourceKind
from token_explorer.token_api.models import Swap
from token_explorer.token_api.networks import NetworkId, normalize_address


class SwapsAdapter(ResourceAdapter[Swap]):
    """DEX swaps filtered by pool, participants, transaction or protocol."""

    kind = ResourceKind.SWAPS
    path_template = endpoints.SWAPS
    record_model = Swap
    tag = "SWAPS"
    requires_address = False

    async def fetch(
        self,
        *,
        network_id: NetworkId | str | None = None,
        pool: str | None = None,
        caller: str | None = None,
        sender: str | None = None,
        recipient: str | None = None,
        tx_hash: str | None = None,
        protocol: str | None = None,
        page: int = 1,
        page_size: int = 10,
        skip: bool = False,
    ) -> AdapterResult[Swap]:
        params = {
            "pool": normalize_address(pool),
            "caller": normalize_address(caller),
            "sender": normalize_address(sender),
            "recipient": normalize_address(recipient),
            "tx_hash": tx_hash or None,
            "protocol": protocol or None,
            "page": page,
            "page_size": page_size,
        }
        return await self._run(
            None, network_id=network_id, params=params, page=page, page_size=page_size, skip=skip,
        )
