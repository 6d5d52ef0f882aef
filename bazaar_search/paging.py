"""Result paging and the exact-match badge used by the listing page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

from .config import MAX_PAGE_SIZE
from .normalize import field_text, normalize_query


@dataclass
class SearchPage:
    items: List[Any]
    total: int
    offset: int
    limit: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total


def _clip_limit(limit: int) -> int:
    """Clip page size into [1, MAX_PAGE_SIZE]."""
    if limit < 1:
        return 1
    if limit > MAX_PAGE_SIZE:
        return MAX_PAGE_SIZE
    return limit


def paginate(items: Sequence[Any], offset: int, limit: int) -> SearchPage:
    offset = max(0, int(offset))
    limit = _clip_limit(int(limit))
    return SearchPage(
        items=list(items[offset : offset + limit]),
        total=len(items),
        offset=offset,
        limit=limit,
    )


def has_exact_match(items: Sequence[Any], query: str) -> bool:
    q = normalize_query(query)
    if not q:
        return False
    return any(q in field_text(it, "title") for it in items)
