"""
Offset pagination helpers for repository queries.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, TypeVar

from sqlalchemy.orm import Query

T = TypeVar("T")


@dataclass
class PageInfo:
    """Pagination metadata."""

    current_page: int
    per_page: int
    total_items: int

    @property
    def total_pages(self) -> int:
        if not self.per_page:
            return 0
        return math.ceil(self.total_items / self.per_page)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page": self.current_page,
            "limit": self.per_page,
            "total": self.total_items,
            "pages": self.total_pages,
        }


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated query result."""

    items: List[T]
    page_info: PageInfo


def paginate(query: Query, page: int = 1, per_page: int = 20) -> PaginatedResult:
    """
    Apply offset pagination to an ordered query.

    Args:
        query: SQLAlchemy query, already filtered and ordered
        page: 1-based page number
        per_page: Page size

    Returns:
        Items of the requested page plus page metadata
    """
    page = max(page, 1)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return PaginatedResult(items=items, page_info=PageInfo(page, per_page, total))
