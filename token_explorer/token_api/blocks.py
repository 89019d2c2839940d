"""Rough block -> wall-clock estimation for records that carry no timestamp."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from token_explorer.token_api.networks import NetworkId, network_value

# (reference block height, average block time in seconds), May 2024
BLOCK_REFERENCE: dict[str, tuple[int, float]] = {
    NetworkId.MAINNET.value: (19_200_000, 12.0),
    NetworkId.ARBITRUM_ONE.value: (175_000_000, 0.25),
    NetworkId.BASE.value: (10_000_000, 2.0),
    NetworkId.BSC.value: (34_000_000, 3.0),
    NetworkId.OPTIMISM.value: (110_000_000, 2.0),
}


def estimate_date_from_block(
    block_num: int,
    network_id: NetworkId | str,
    now: datetime | None = None,
) -> datetime | None:
    """Estimate when ``block_num`` was produced. Never returns a future date.

    None for negative heights or heights too far back to represent.
    """
    if block_num < 0:
        return None
    now = now or datetime.now(UTC)
    current_block, block_time = BLOCK_REFERENCE.get(
        network_value(network_id), BLOCK_REFERENCE[NetworkId.MAINNET.value]
    )
    blocks_ago = max(0, current_block - block_num)
    try:
        estimated = now - timedelta(seconds=blocks_ago * block_time)
    except OverflowError:
        return None
    return min(estimated, now)
