"""One adapter per resource kind over a shared proxy client."""

from token_explorer.token_api.adapters.balances import BalancesAdapter
from token_explorer.token_api.adapters.base import ResourceAdapter
from token_explorer.token_api.adapters.historical import HistoricalBalancesAdapter
from token_explorer.token_api.adapters.holders import HoldersAdapter
from token_explorer.token_api.adapters.metadata import MetadataAdapter
from token_explorer.token_api.adapters.ohlc import OHLCByContractAdapter, OHLCByPoolAdapter
from token_explorer.token_api.adapters.pools import PoolsAdapter
from token_explorer.token_api.adapters.swaps import SwapsAdapter
from token_explorer.token_api.adapters.transfers import TransfersAdapter
from token_explorer.token_api.client import TokenApiClient
from token_explorer.token_api.envelope import ResourceKind


class TokenApiExplorer:
    """Owns the client; close it (or use ``async with``) when done."""

    def __init__(self, client: TokenApiClient | None = None) -> None:
        self.client = client or TokenApiClient()
        self.balances = BalancesAdapter(self.client)
        self.holders = HoldersAdapter(self.client)
        self.metadata = MetadataAdapter(self.client)
        self.transfers = TransfersAdapter(self.client)
        self.ohlc_by_contract = OHLCByContractAdapter(self.client)
        self.ohlc_by_pool = OHLCByPoolAdapter(self.client)
        self.pools = PoolsAdapter(self.client)
        self.swaps = SwapsAdapter(self.client)
        self.historical_balances = HistoricalBalancesAdapter(self.client)

    def adapter(self, kind: ResourceKind | str) -> ResourceAdapter:
        kind = ResourceKind(kind)
        for candidate in self.adapters():
            if candidate.kind is kind:
                return candidate
        raise KeyError(kind)

    def adapters(self) -> list[ResourceAdapter]:
        return [
            self.balances,
            self.holders,
            self.metadata,
            self.transfers,
            self.ohlc_by_contract,
            self.ohlc_by_pool,
            self.pools,
            self.swaps,
            self.historical_balances,
        ]

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "TokenApiExplorer":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
