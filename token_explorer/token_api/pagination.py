"""Page bookkeeping for list resources.

Upstream reports totals in several ways (``total_holders``, ``pagination``,
``total_results``, ``total``) or not at all. When nothing is reported the page
count is estimated from how full the returned page is.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int
    total_pages: int
    total_results: int | None = None
    has_next: bool = False
    is_estimated: bool = False

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_next else None

    @property
    def previous_page(self) -> int | None:
        return self.page - 1 if self.has_previous else None


def _positive_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number >= 0 else None


def _pages(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def derive_pagination(
    meta: Mapping[str, Any] | None,
    *,
    page: int,
    page_size: int,
    returned: int,
) -> Pagination:
    """Build a Pagination from envelope-level fields and the requested cursor.

    ``meta`` is the envelope without its record list (see ResolvedEnvelope.meta).
    """
    meta = meta or {}
    page = max(1, page)
    page_size = max(1, page_size)
    size = _positive_int(meta.get("page_size")) or page_size

    # {pagination: {total_pages, ...}}
    block = meta.get("pagination")
    if isinstance(block, Mapping):
        total_pages = _positive_int(block.get("total_pages"))
        if total_pages:
            current = _positive_int(block.get("current_page") or block.get("page")) or page
            return Pagination(
                page=current,
                page_size=_positive_int(block.get("page_size")) or size,
                total_pages=total_pages,
                total_results=_positive_int(meta.get("total_results")),
                has_next=current < total_pages,
            )

    # {page, total_holders, page_size} / {results, total_results} / {total}
    for key in ("total_holders", "total_results", "total"):
        total = _positive_int(meta.get(key))
        if total is not None:
            current = _positive_int(meta.get("page")) or page
            total_pages = _pages(total, size)
            return Pagination(
                page=current,
                page_size=size,
                total_pages=total_pages,
                total_results=total,
                has_next=current < total_pages,
            )

    # Nothing reported: a full page suggests there is another one
    has_next = returned >= page_size
    return Pagination(
        page=page,
        page_size=page_size,
        total_pages=page + 1 if has_next else page,
        has_next=has_next,
        is_estimated=True,
    )
