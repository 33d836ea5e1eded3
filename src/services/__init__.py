"""Service layer for property search and lookup."""

from src.services.errors import (
    FragmentTooLongError,
    InvalidPageSizeError,
    InvalidRangeError,
    MalformedIdentifierError,
    PropertyQueryError,
)
from src.services.filters import SearchFilter, SearchRequest, normalize_filter

__all__ = [
    "FragmentTooLongError",
    "InvalidPageSizeError",
    "InvalidRangeError",
    "MalformedIdentifierError",
    "PropertyQueryError",
    "SearchFilter",
    "SearchRequest",
    "normalize_filter",
]
