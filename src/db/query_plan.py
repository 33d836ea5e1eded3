"""Translate a normalized search filter into SQL clauses and ordering."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import ColumnElement
from sqlalchemy.sql.elements import UnaryExpression

from src.models.property import Property
from src.services.filters import SearchFilter, SortDirection, SortField

_SORT_COLUMNS = {
    "name": Property.name,
    "price": Property.price,
    "createdat": Property.created_at,
}


@dataclass(frozen=True, slots=True)
class QueryPlan:
    """Store instructions for one page of a property search."""

    clauses: tuple[ColumnElement[bool], ...]
    order_by: tuple[UnaryExpression, ...]
    offset: int
    limit: int


def build_clauses(search_filter: SearchFilter) -> tuple[ColumnElement[bool], ...]:
    """Fold the present filter fields into a conjunction of clauses.

    An empty tuple means "match everything".
    """

    fragments: list[ColumnElement[bool] | None] = [
        Property.name.icontains(search_filter.name, autoescape=True)
        if search_filter.name
        else None,
        Property.address.icontains(search_filter.address, autoescape=True)
        if search_filter.address
        else None,
        Property.price >= search_filter.min_price
        if search_filter.min_price is not None
        else None,
        Property.price <= search_filter.max_price
        if search_filter.max_price is not None
        else None,
    ]
    return tuple(clause for clause in fragments if clause is not None)


def build_order_by(
    sort_by: SortField, sort_dir: SortDirection
) -> tuple[UnaryExpression, ...]:
    column = _SORT_COLUMNS.get(sort_by)
    if column is None:
        primary = Property.created_at.desc()
    else:
        primary = column.asc() if sort_dir == "asc" else column.desc()
    # id keeps equal primary keys in the same order across repeated pages
    return (primary, Property.id.asc())


def build_query_plan(search_filter: SearchFilter) -> QueryPlan:
    return QueryPlan(
        clauses=build_clauses(search_filter),
        order_by=build_order_by(search_filter.sort_by, search_filter.sort_dir),
        offset=(search_filter.page - 1) * search_filter.page_size,
        limit=search_filter.page_size,
    )
