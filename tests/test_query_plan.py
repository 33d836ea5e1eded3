"""Tests for translating search filters into SQL instructions."""

from decimal import Decimal

import pytest
from sqlalchemy import select

from src.db.query_plan import build_order_by, build_query_plan
from src.models.property import Property
from src.services.filters import SearchFilter


def _filter(**overrides: object) -> SearchFilter:
    values: dict[str, object] = {
        "name": None,
        "address": None,
        "min_price": None,
        "max_price": None,
        "page": 1,
        "page_size": 10,
        "sort_by": "createdat",
        "sort_dir": "desc",
    }
    values.update(overrides)
    return SearchFilter(**values)  # type: ignore[arg-type]


def _compiled_where(search_filter: SearchFilter) -> str:
    plan = build_query_plan(search_filter)
    stmt = select(Property).where(*plan.clauses)
    return str(stmt.compile(compile_kwargs={"literal_binds": True}))


def test_no_filters_yield_unconstrained_predicate() -> None:
    plan = build_query_plan(_filter())

    assert plan.clauses == ()


def test_all_filters_are_combined_conjunctively() -> None:
    plan = build_query_plan(
        _filter(
            name="casa",
            address="cedritos",
            min_price=Decimal("100"),
            max_price=Decimal("500"),
        )
    )
    criteria = [str(clause) for clause in plan.clauses]

    assert len(criteria) == 4
    assert any("lower(properties.name) LIKE" in item for item in criteria)
    assert any("lower(properties.address) LIKE" in item for item in criteria)
    assert any("properties.price >=" in item for item in criteria)
    assert any("properties.price <=" in item for item in criteria)


def test_text_match_is_case_insensitive_substring() -> None:
    compiled = _compiled_where(_filter(name="Casa"))

    assert "lower(properties.name) LIKE" in compiled
    assert "'%'" in compiled
    assert "'Casa'" in compiled


def test_like_wildcards_in_fragment_are_escaped() -> None:
    compiled = _compiled_where(_filter(name="100%_off"))

    assert "100/%/_off" in compiled
    assert "ESCAPE '/'" in compiled


def test_single_price_bound_adds_single_clause() -> None:
    plan = build_query_plan(_filter(max_price=Decimal("250000")))

    assert len(plan.clauses) == 1
    assert "properties.price <=" in str(plan.clauses[0])


@pytest.mark.parametrize(
    ("sort_by", "sort_dir", "expected"),
    [
        ("price", "asc", "properties.price ASC"),
        ("price", "desc", "properties.price DESC"),
        ("name", "asc", "properties.name ASC"),
        ("name", "desc", "properties.name DESC"),
        ("createdat", "asc", "properties.created_at ASC"),
        ("createdat", "desc", "properties.created_at DESC"),
    ],
)
def test_order_by_maps_sort_options(sort_by: str, sort_dir: str, expected: str) -> None:
    order_by = build_order_by(sort_by, sort_dir)  # type: ignore[arg-type]

    assert str(order_by[0]) == expected
    assert str(order_by[-1]) == "properties.id ASC"


def test_unknown_sort_key_falls_back_to_newest_first() -> None:
    order_by = build_order_by("year", "asc")  # type: ignore[arg-type]

    assert str(order_by[0]) == "properties.created_at DESC"


@pytest.mark.parametrize(
    ("page", "page_size", "offset"),
    [(1, 10, 0), (2, 10, 10), (3, 25, 50), (7, 1, 6)],
)
def test_offset_and_limit_follow_page(page: int, page_size: int, offset: int) -> None:
    plan = build_query_plan(_filter(page=page, page_size=page_size))

    assert plan.offset == offset
    assert plan.limit == page_size
