from token_explorer.token_api import endpoints
from token_explorer.token_api.adapters.base import AdapterResult, ResourceAdapter
from token_explorer.token_api.envelope import ResourceKind
from token_explorer.token_api.models import Pool
from token_explorer.token_api.networks import NetworkId, normalize_address


class PoolsAdapter(ResourceAdapter[Pool]):
    """DEX liquidity pools filtered by pool, token, symbol, factory or protocol."""

    kind = ResourceKind.POOLS
    path_template = endpoints.POOLS
    record_model = Pool
    tag = "POOLS"
    requires_address = False

    async def fetch(
        self,
        *,
        network_id: NetworkId | str | None = None,
        pool: str | None = None,
        token: str | None = None,
        symbol: str | None = None,
        factory: str | None = None,
        protocol: str | None = None,
        page: int = 1,
        page_size: int = 50,
        include_reserves: bool = True,
        skip: bool = False,
    ) -> AdapterResult[Pool]:
        params = {
            "pool": normalize_address(pool),
            "token": normalize_address(token),
            "symbol": symbol or None,
            "factory": normalize_address(factory),
            "protocol": protocol or None,
            "page": page,
            "page_size": page_size,
            "include_reserves": include_reserves,
        }
        return await self._run(
            None, network_id=network_id, params=params, page=page, page_size=page_size, skip=skip,
        )
