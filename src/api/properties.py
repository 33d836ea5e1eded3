"""Property search and lookup endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.schemas import PageOut, PropertyOut
from src.db.session import get_db_session
from src.services.filters import SearchRequest
from src.services.property_service import PropertyService

router = APIRouter(prefix="/api/properties", tags=["properties"])


@router.get("", response_model=PageOut)
async def search_properties(
    session: AsyncSession = Depends(get_db_session),
    name: str | None = None,
    address: str | None = None,
    min_price: Decimal | None = Query(None, alias="minPrice"),
    max_price: Decimal | None = Query(None, alias="maxPrice"),
    page: int = 1,
    page_size: int | None = Query(None, alias="pageSize"),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_dir: str | None = Query(None, alias="sortDir"),
) -> PageOut:
    """Search the catalog with optional name/address/price filters."""

    service = PropertyService(session)
    result = await service.search_properties(
        SearchRequest(
            name=name,
            address=address,
            min_price=min_price,
            max_price=max_price,
            page=page,
            page_size=page_size,
            sort_by=sort_by,
            sort_dir=sort_dir,
        )
    )
    return PageOut.from_page(result)


@router.get("/{property_id}", response_model=PropertyOut)
async def get_property(
    property_id: str,
    session: AsyncSession = Depends(get_db_session),
) -> PropertyOut:
    service = PropertyService(session)
    view = await service.get_property(property_id)
    if view is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return PropertyOut.from_view(view)
