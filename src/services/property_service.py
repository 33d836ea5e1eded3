"""Business logic for property search and lookup."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.config import Settings, get_settings
from src.db.query_plan import build_query_plan
from src.db.repositories import (
    count_properties,
    fetch_primary_images,
    fetch_property,
    fetch_property_page,
)
from src.models.identifiers import is_object_id
from src.models.property import Property
from src.services.errors import MalformedIdentifierError
from src.services.filters import SearchFilter, SearchRequest, normalize_filter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PropertyView:
    """Public representation of a property."""

    id: str
    owner_id: str
    name: str
    address: str
    price: Decimal
    code_internal: str
    year: int
    created_at: datetime | None
    updated_at: datetime | None
    image_url: str | None

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["price"] = str(self.price)
        data["created_at"] = self.created_at.isoformat() if self.created_at else None
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


@dataclass(frozen=True, slots=True)
class Page:
    """One page of search results plus pagination metadata."""

    items: tuple[PropertyView, ...]
    page: int
    page_size: int
    total: int
    total_pages: int

    def to_dict(self) -> dict[str, object]:
        return {
            "items": [item.to_dict() for item in self.items],
            "page": self.page,
            "page_size": self.page_size,
            "total": self.total,
            "total_pages": self.total_pages,
        }


def to_view(row: Property, image_url: str | None) -> PropertyView:
    return PropertyView(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        address=row.address,
        price=row.price,
        code_internal=row.code_internal,
        year=row.year,
        created_at=row.created_at,
        updated_at=row.updated_at,
        image_url=image_url,
    )


def total_pages(total: int, page_size: int) -> int:
    if total <= 0:
        return 0
    return -(-total // page_size)


def build_page(
    rows: Sequence[Property],
    images: Mapping[str, str],
    *,
    total: int,
    search_filter: SearchFilter,
) -> Page:
    """Shape already ordered rows into a `Page`. Order is kept as given."""

    return Page(
        items=tuple(to_view(row, images.get(row.id)) for row in rows),
        page=search_filter.page,
        page_size=search_filter.page_size,
        total=total,
        total_pages=total_pages(total, search_filter.page_size),
    )


class PropertyService:
    """Service layer for the property catalog."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        self._session = session
        self._settings = settings or get_settings()

    async def search_properties(self, request: SearchRequest | None = None) -> Page:
        """Search properties with optional filters, sorting and pagination."""

        search_filter = normalize_filter(request, settings=self._settings)
        plan = build_query_plan(search_filter)
        logger.debug(
            "Searching properties page=%s page_size=%s sort=%s/%s clauses=%s",
            search_filter.page,
            search_filter.page_size,
            search_filter.sort_by,
            search_filter.sort_dir,
            len(plan.clauses),
        )

        total = await count_properties(self._session, plan)
        # pages past the end are empty without asking the store
        rows: Sequence[Property] = []
        if total > plan.offset:
            rows = await fetch_property_page(self._session, plan)
        images = await fetch_primary_images(self._session, [row.id for row in rows])

        return build_page(rows, images, total=total, search_filter=search_filter)

    async def get_property(self, property_id: str | None) -> PropertyView | None:
        """Return one property by id, or None when it does not exist."""

        if property_id is None or not is_object_id(property_id):
            raise MalformedIdentifierError(property_id)

        canonical_id = property_id.lower()
        row = await fetch_property(self._session, canonical_id)
        if row is None:
            return None

        images = await fetch_primary_images(self._session, [row.id])
        return to_view(row, images.get(row.id))
