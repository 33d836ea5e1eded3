"""Normalization of raw property search requests."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from src.config import Settings, get_settings
from src.services.errors import (
    FragmentTooLongError,
    InvalidPageSizeError,
    InvalidRangeError,
)

SortField = Literal["name", "price", "createdat"]
SortDirection = Literal["asc", "desc"]

DEFAULT_SORT_FIELD: SortField = "createdat"
DEFAULT_SORT_DIRECTION: SortDirection = "desc"

_SORT_FIELD_ALIASES: dict[str, SortField] = {
    "name": "name",
    "price": "price",
    "createdat": "createdat",
    "created_at": "createdat",
    "created": "createdat",
}
_SORT_DIRECTIONS: dict[str, SortDirection] = {"asc": "asc", "desc": "desc"}


@dataclass(slots=True)
class SearchRequest:
    """Raw search input as received from a caller. Every field may be absent."""

    name: str | None = None
    address: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    page: int | None = None
    page_size: int | None = None
    sort_by: str | None = None
    sort_dir: str | None = None


@dataclass(frozen=True, slots=True)
class SearchFilter:
    """Validated, bounded search descriptor."""

    name: str | None
    address: str | None
    min_price: Decimal | None
    max_price: Decimal | None
    page: int
    page_size: int
    sort_by: SortField
    sort_dir: SortDirection


def _clean_fragment(value: str | None, *, field: str, max_length: int) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        return None
    if len(stripped) > max_length:
        raise FragmentTooLongError(field, max_length)
    return stripped


def _to_decimal(value: Decimal | int | float | str | None) -> Decimal | None:
    if value is None or isinstance(value, Decimal):
        return value
    # str() first so floats keep their shortest repr instead of binary noise
    return Decimal(str(value))


def normalize_sort_field(value: str | None) -> SortField:
    if value is None:
        return DEFAULT_SORT_FIELD
    return _SORT_FIELD_ALIASES.get(value.strip().lower(), DEFAULT_SORT_FIELD)


def normalize_sort_direction(value: str | None) -> SortDirection:
    if value is None:
        return DEFAULT_SORT_DIRECTION
    return _SORT_DIRECTIONS.get(value.strip().lower(), DEFAULT_SORT_DIRECTION)


def normalize_page_size(value: int | None, settings: Settings) -> int:
    """Clamp (or reject, depending on policy) a requested page size."""

    if value is None:
        return settings.default_page_size
    if 1 <= value <= settings.max_page_size:
        return value
    if settings.page_size_policy == "reject":
        raise InvalidPageSizeError(value, settings.max_page_size)
    return max(1, min(value, settings.max_page_size))


def normalize_filter(
    request: SearchRequest | None,
    *,
    settings: Settings | None = None,
) -> SearchFilter:
    """Turn a raw request into a `SearchFilter`.

    Missing values fall back to defaults, pagination is clamped into range and
    unknown sort options fall back to newest-first. The only conditions that
    reject the request are an inverted price range, an over-long text fragment
    and, under the ``reject`` page size policy, an out-of-range page size.
    """

    settings = settings or get_settings()
    request = request or SearchRequest()

    min_price = _to_decimal(request.min_price)
    max_price = _to_decimal(request.max_price)
    if min_price is not None and max_price is not None and min_price > max_price:
        raise InvalidRangeError(min_price, max_price)

    page = request.page if request.page is not None else 1

    return SearchFilter(
        name=_clean_fragment(
            request.name, field="name", max_length=settings.max_name_length
        ),
        address=_clean_fragment(
            request.address, field="address", max_length=settings.max_address_length
        ),
        min_price=min_price,
        max_price=max_price,
        page=max(1, page),
        page_size=normalize_page_size(request.page_size, settings),
        sort_by=normalize_sort_field(request.sort_by),
        sort_dir=normalize_sort_direction(request.sort_dir),
    )
