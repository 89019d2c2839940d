"""Query one Token API resource through a running explorer proxy.

Prints the normalized records, the envelope shape that matched and the
derived pagination. Useful for checking how a live upstream response is
decoded without going through the frontend.

Usage:
    poetry run python scripts/query_resource.py holders 0xc944e90c64b2c07662a292be6244bdf05cda44a7
    poetry run python scripts/query_resource.py pools --protocol uniswap_v3 --network base
    poetry run python scripts/query_resource.py ohlc-by-pool 0x... --resolution 1h --json
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402

from config.settings import settings  # noqa: E402
from token_explorer.token_api.adapters.base import AdapterResult, AdapterState  # noqa: E402
from token_explorer.token_api.adapters.explorer import TokenApiExplorer  # noqa: E402
from token_explorer.token_api.envelope import ResourceKind  # noqa: E402
from token_explorer.token_api.networks import NetworkId  # noqa: E402
from token_explorer.token_api.timeframes import DEFAULT_SPAN, TIME_SPANS, get_time_range  # noqa: E402
from token_explorer.utils.logger import setup_logger  # noqa: E402


async def query(explorer: TokenApiExplorer, args: argparse.Namespace) -> AdapterResult:
    kind = ResourceKind(args.kind)
    common = {"network_id": args.network}
    paging = {"page": args.page}
    if args.page_size:
        paging["page_size"] = args.page_size

    if kind is ResourceKind.BALANCES:
        return await explorer.balances.fetch(args.address, **common, **paging)
    if kind is ResourceKind.HOLDERS:
        return await explorer.holders.fetch(args.address, **common, **paging)
    if kind is ResourceKind.METADATA:
        return await explorer.metadata.fetch(args.address, **common)
    if kind is ResourceKind.TRANSFERS:
        return await explorer.transfers.fetch(args.address, **common, age=args.age, **paging)
    if kind is ResourceKind.POOLS:
        return await explorer.pools.fetch(**common, pool=args.address, protocol=args.protocol, **paging)
    if kind is ResourceKind.SWAPS:
        return await explorer.swaps.fetch(**common, pool=args.address, protocol=args.protocol, **paging)

    start, end = get_time_range(args.span)
    window = {"from_timestamp": start, "to_timestamp": end}
    if kind is ResourceKind.HISTORICAL_BALANCES:
        return await explorer.historical_balances.fetch(
            args.address, **common, resolution=args.resolution, **window, **paging,
        )
    adapter = explorer.ohlc_by_contract if kind is ResourceKind.OHLC_BY_CONTRACT else explorer.ohlc_by_pool
    return await adapter.fetch(args.address, **common, resolution=args.resolution, **window, **paging)


def print_result(result: AdapterResult, as_json: bool) -> None:
    if as_json:
        print(json.dumps([r.model_dump() for r in result.data], indent=2, default=str))
        return

    print("=" * 70)
    print(f"{result.kind.value.upper()} on {result.network_id}: {result.state.value}")
    print("=" * 70)
    if result.error:
        print(result.error)
        return

    print(f"Envelope shape: {result.shape.value if result.shape else '-'}")
    if result.info:
        print(f"Series: {result.info.model_dump(exclude_none=True)}")
    for i, record in enumerate(result.data, start=1):
        print(f"  {i:>3}. {record.model_dump(exclude_none=True)}")

    p = result.pagination
    if p:
        estimated = " (estimated)" if p.is_estimated else ""
        print(f"\nPage {p.page}/{p.total_pages}{estimated}, next: {p.next_page or '-'}")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Query a Token API resource through the explorer proxy")
    parser.add_argument("kind", choices=[k.value for k in ResourceKind])
    parser.add_argument("address", nargs="?", help="Wallet, contract or pool address (0x optional)")
    parser.add_argument("--network", default=settings.default_network, help=f"One of: {', '.join(n.value for n in NetworkId)}")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--page-size", type=int, default=None)
    parser.add_argument("--age", type=int, default=30, help="Transfers: look-back window in days")
    parser.add_argument("--protocol", default=None, help="Pools/swaps: uniswap_v2 or uniswap_v3")
    parser.add_argument("--resolution", default="1d", help="OHLC/historical bucket size")
    parser.add_argument("--span", default=DEFAULT_SPAN, choices=list(TIME_SPANS), help="OHLC/historical window")
    parser.add_argument("--json", action="store_true", help="Print records as JSON only")
    args = parser.parse_args()

    setup_logger(level="WARNING", log_dir=None)

    async with TokenApiExplorer() as explorer:
        result = await query(explorer, args)

    if result.state is AdapterState.IDLE:
        logger.error(f"{args.kind} needs an address")
        sys.exit(2)
    print_result(result, args.json)
    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
