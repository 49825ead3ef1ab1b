"""Pagination over Protean query results."""

import math
from dataclasses import dataclass, field

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass
class Page:
    items: list = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        if self.total_count == 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    def map(self, fn) -> "Page":
        return Page(
            items=[fn(item) for item in self.items],
            total_count=self.total_count,
            page=self.page,
            page_size=self.page_size,
        )

    def to_dict(self) -> dict:
        return {
            "items": self.items,
            "total_count": self.total_count,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_previous_page": self.has_previous_page,
        }


def normalize(page, page_size, default_size=DEFAULT_PAGE_SIZE):
    """Clamp page/page_size to sane bounds."""
    page = max(int(page or 1), 1)
    page_size = int(page_size or default_size)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)
    return page, page_size


def paginate(queryset, page, page_size, default_size=DEFAULT_PAGE_SIZE) -> Page:
    """Apply offset/limit to a Protean queryset and wrap the result set."""
    page, page_size = normalize(page, page_size, default_size)
    results = queryset.offset((page - 1) * page_size).limit(page_size).all()
    return Page(items=list(results.items), total_count=results.total, page=page, page_size=page_size)


def paginate_list(items, page, page_size, default_size=DEFAULT_PAGE_SIZE) -> Page:
    """Paginate an already-materialized list (used after in-memory filtering)."""
    page, page_size = normalize(page, page_size, default_size)
    start = (page - 1) * page_size
    return Page(items=items[start : start + page_size], total_count=len(items), page=page, page_size=page_size)
