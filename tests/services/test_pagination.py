"""Tests for page parameter handling."""

from campus_commons.schemas.common import Pagination
from campus_commons.services.pagination import PageRequest


def test_limit_is_clamped_to_maximum() -> None:
    page = PageRequest.from_params(3, 1000)

    assert page.limit == 100
    assert page.offset == 200


def test_missing_values_use_defaults() -> None:
    page = PageRequest.from_params(None, None)

    assert (page.page, page.limit, page.offset) == (1, 20, 0)


def test_total_pages_rounds_up() -> None:
    assert Pagination.build(total=41, page=1, limit=20).total_pages == 3
    assert Pagination.build(total=0, page=1, limit=20).total_pages == 0
