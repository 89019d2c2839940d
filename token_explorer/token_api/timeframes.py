"""Time spans and OHLC resolutions offered by the explorer."""

from __future__ import annotations

import time

OHLC_RESOLUTIONS = ("5m", "15m", "30m", "1h", "2h", "4h", "1d", "1w")

TIME_SPANS: dict[str, tuple[str, int]] = {
    "1d": ("Last 24 Hours", 86_400),
    "7d": ("Last 7 Days", 604_800),
    "30d": ("Last 30 Days", 2_592_000),
    "90d": ("Last 90 Days", 7_776_000),
    "180d": ("Last 180 Days", 15_552_000),
    "1y": ("Last Year", 31_536_000),
}
DEFAULT_SPAN = "30d"


def get_time_range(span: str = DEFAULT_SPAN, now: int | None = None) -> tuple[int, int]:
    """(start, end) unix seconds for a named span. Unknown spans mean 30 days."""
    end = int(time.time()) if now is None else now
    _, seconds = TIME_SPANS.get(span, TIME_SPANS[DEFAULT_SPAN])
    return end - seconds, end
