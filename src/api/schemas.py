"""Response schemas for the property API."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.services.property_service import Page, PropertyView


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropertyOut(_CamelModel):
    id: str
    id_owner: str
    name: str
    address: str
    price: Decimal
    code_internal: str
    year: int
    created_at: datetime | None
    updated_at: datetime | None
    image_url: str | None

    @classmethod
    def from_view(cls, view: PropertyView) -> "PropertyOut":
        return cls(
            id=view.id,
            id_owner=view.owner_id,
            name=view.name,
            address=view.address,
            price=view.price,
            code_internal=view.code_internal,
            year=view.year,
            created_at=view.created_at,
            updated_at=view.updated_at,
            image_url=view.image_url,
        )


class PageOut(_CamelModel):
    items: list[PropertyOut]
    page: int
    page_size: int
    total: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page) -> "PageOut":
        return cls(
            items=[PropertyOut.from_view(item) for item in page.items],
            page=page.page,
            page_size=page.page_size,
            total=page.total,
            total_pages=page.total_pages,
        )


class ProblemOut(BaseModel):
    title: str
    status: int
    detail: str
    instance: str | None = None
