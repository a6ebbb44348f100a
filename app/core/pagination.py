# File: app/core/pagination.py

"""
Offset pagination over SQLAlchemy queries.

`paginate` counts every row the query matches and then fetches one window
of it, so callers get both the page contents and the total.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy.orm import Query

from app.core.config import settings


@dataclass(frozen=True)
class PageParams:
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page:
    items: List[Any] = field(default_factory=list)
    count: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.count / self.limit) if self.limit else 0

    @property
    def previous_page(self) -> Optional[int]:
        return self.page - 1 if self.page > 1 else None

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.page < self.total_pages else None


def resolve_page_params(page: Optional[int] = None, limit: Optional[int] = None) -> PageParams:
    """
    Fill in defaults and cap the page size at `settings.max_page_size`.
    Values are expected to be positive already (the routes validate them).
    """
    page = page or 1
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    return PageParams(page=page, limit=limit)


def paginate(query: Query, params: PageParams) -> Page:
    count = query.order_by(None).count()
    items = query.offset(params.offset).limit(params.limit).all()
    return Page(items=items, count=count, page=params.page, limit=params.limit)
