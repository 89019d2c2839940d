"""Base-unit token amounts and display formatting.

Formatting never raises: anything that cannot be scaled is shown as received.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

DEFAULT_DECIMALS = 18
MAX_DISPLAY_DIGITS = 80


def parse_decimals(decimals: Any, default: int = DEFAULT_DECIMALS) -> int:
    """Coerce a decimals value (int or numeric string) with a fallback of 18."""
    if decimals is None or decimals == "" or isinstance(decimals, bool):
        return default
    try:
        value = int(str(decimals).strip())
    except (TypeError, ValueError):
        return default
    return value if value >= 0 else default


def scale_amount(raw: Any, decimals: Any = DEFAULT_DECIMALS) -> Decimal | None:
    """raw / 10**decimals as an exact Decimal, None if raw is not numeric."""
    if raw is None or raw == "":
        raw = "0"
    if isinstance(raw, bool):
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    with localcontext() as ctx:
        ctx.prec = 100  # uint256 has 78 digits
        return value.scaleb(-parse_decimals(decimals))


def _group(value: Decimal, min_places: int, max_places: int) -> str:
    text = f"{value:,.{max_places}f}"
    if "." not in text:
        return text
    whole, frac = text.split(".")
    frac = frac.rstrip("0").ljust(min_places, "0")
    return f"{whole}.{frac}" if frac else whole


def format_amount(
    raw: Any,
    decimals: Any = DEFAULT_DECIMALS,
    *,
    min_places: int = 2,
    max_places: int = 6,
) -> str:
    """Format base units for display: "1000000000000000000", 18 -> "1.00"."""
    value = scale_amount(raw, decimals)
    if value is None or value.adjusted() > MAX_DISPLAY_DIGITS:
        return str(raw)
    try:
        return _group(value, min_places, max(max_places, min_places))
    except (InvalidOperation, ValueError, OverflowError):
        return str(raw)


def format_number(value: Any, places: int = 2) -> str:
    """Thousands-separated number with fixed places; non-numeric passes through."""
    if value is None or isinstance(value, bool):
        return "N/A"
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return str(value)
    if not number.is_finite():
        return str(value)
    return f"{number:,.{places}f}"


def format_usd(value: Any) -> str:
    text = format_number(value, 2)
    if text == "N/A" or not text[:1].isdigit() and not text.startswith("-"):
        return text
    return f"-${text[1:]}" if text.startswith("-") else f"${text}"


def format_fee(fee: Any) -> str:
    """Uniswap fee tier (hundredths of a bip) as a percentage: 3000 -> "0.3%"."""
    if fee is None or fee == "" or fee == 0 or isinstance(fee, bool):
        return "N/A"
    try:
        pct = Decimal(str(fee)) / Decimal(10000)
    except (InvalidOperation, ValueError):
        return "N/A"
    return f"{pct.normalize():f}%"


@dataclass(frozen=True)
class TokenAmount:
    """Integer amount in base units plus the token's decimals."""

    raw: str
    decimals: int = DEFAULT_DECIMALS

    @classmethod
    def of(cls, raw: Any, decimals: Any = DEFAULT_DECIMALS) -> TokenAmount:
        return cls(raw="0" if raw is None or raw == "" else str(raw), decimals=parse_decimals(decimals))

    @property
    def value(self) -> Decimal | None:
        return scale_amount(self.raw, self.decimals)

    @property
    def display(self) -> str:
        return format_amount(self.raw, self.decimals)

    def __str__(self) -> str:
        return self.display
