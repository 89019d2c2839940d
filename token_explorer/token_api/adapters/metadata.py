from token_explorer.token_api import endpoints
from token_explorer.token_api.adapters.base import AdapterResult, ResourceAdapter, not_found_hint
from token_explorer.token_api.envelope import ResolvedEnvelope, ResourceKind
from token_explorer.token_api.models import TokenMetadata
from token_explorer.token_api.networks import NetworkId


class MetadataAdapter(ResourceAdapter[TokenMetadata]):
    """Name, symbol, decimals, supply and optional market data of one token."""

    kind = ResourceKind.METADATA
    path_template = endpoints.TOKEN_METADATA
    record_model = TokenMetadata
    tag = "METADATA"
    address_label = "ERC20 contract address"

    async def fetch(
        self,
        contract: str | None,
        *,
        network_id: NetworkId | str | None = None,
        include_market_data: bool = True,
        skip: bool = False,
    ) -> AdapterResult[TokenMetadata]:
        params = {"include_market_data": include_market_data}
        return await self._run(contract, network_id=network_id, params=params, skip=skip)

    def expand(self, envelope: ResolvedEnvelope) -> tuple[dict, ...]:
        # One token per call; extra rows are duplicates from other indexers
        return envelope.records[:1]

    def not_found_message(self, network_id: str) -> str:
        return not_found_hint(
            "metadata for this token contract",
            ["The contract address is correct", "The contract is an ERC20 token"],
            network_id,
        )
