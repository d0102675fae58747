"""
Page windows and the pagination block of list responses.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps the computed OFFSET inside bigint.
MAX_PAGE = (2**63 - 1) // MAX_LIMIT


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Page:
    """
    A skip/limit window. Values are coerced to sane integers on creation, so
    they can be bound into SQL as-is.
    """

    skip: int = 0
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        object.__setattr__(self, "skip", max(0, _as_int(self.skip, 0)))
        object.__setattr__(self, "limit", max(1, _as_int(self.limit, DEFAULT_LIMIT)))

    @classmethod
    def from_request(cls, page: int = 1, limit: int = DEFAULT_LIMIT) -> "Page":
        page = min(max(1, _as_int(page, 1)), MAX_PAGE)
        limit = min(max(1, _as_int(limit, DEFAULT_LIMIT)), MAX_LIMIT)
        return cls(skip=(page - 1) * limit, limit=limit)

    @property
    def number(self) -> int:
        return self.skip // self.limit + 1


def pagination_meta(total: int, page: Page) -> dict[str, Any]:
    total = max(0, int(total))
    total_pages = math.ceil(total / page.limit)
    current = page.number
    return {
        "total": total,
        "totalPages": total_pages,
        "currentPage": current,
        "pageSize": page.limit,
        "hasNext": current < total_pages,
        "hasPrev": current > 1,
    }
