"""Offset pagination shared by list endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Query

from campus_commons.core.settings import settings
from campus_commons.schemas.common import Pagination


@dataclass(frozen=True)
class PageRequest:
    """A validated page/limit pair; ``limit`` is clamped to the configured maximum."""

    page: int = 1
    limit: int = 20

    @classmethod
    def from_params(cls, page: int | None, limit: int | None) -> PageRequest:
        page_num = page if page and page > 0 else 1
        limit_num = limit if limit and limit > 0 else settings.default_page_size
        return cls(page=page_num, limit=min(limit_num, settings.max_page_size))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginate(query: Query[Any], page: PageRequest) -> tuple[list[Any], Pagination]:
    """Return one page of ``query`` along with its pagination metadata."""
    total = query.order_by(None).count()
    rows = query.offset(page.offset).limit(page.limit).all()
    return rows, Pagination.build(total, page.page, page.limit)
