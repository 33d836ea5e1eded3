"""MCP tools for property search and lookup."""

import logging
from decimal import Decimal

from mcp.server.fastmcp import FastMCP

from src.db.session import session_context
from src.services.errors import PropertyQueryError
from src.services.filters import SearchRequest
from src.services.property_service import PropertyService

logger = logging.getLogger(__name__)

EMPTY_RESULTS_MESSAGE = "No properties matched the given filters."


def _error_payload(exc: PropertyQueryError) -> dict[str, object]:
    return {"error": exc.kind, "message": str(exc)}


def register_property_tools(mcp: FastMCP) -> None:
    """Register property tools on a FastMCP server."""

    @mcp.tool(name="search_properties")
    async def search_properties(
        name: str | None = None,
        address: str | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        page: int = 1,
        page_size: int = 10,
        sort_by: str = "createdat",
        sort_dir: str = "desc",
    ) -> dict[str, object]:
        request = SearchRequest(
            name=name,
            address=address,
            min_price=Decimal(str(min_price)) if min_price is not None else None,
            max_price=Decimal(str(max_price)) if max_price is not None else None,
            page=page,
            page_size=page_size,
            sort_by=sort_by,
            sort_dir=sort_dir,
        )

        try:
            async with session_context() as session:
                service = PropertyService(session)
                page_result = await service.search_properties(request)
        except PropertyQueryError as exc:
            logger.info("search_properties rejected: %s", exc)
            return _error_payload(exc)

        result: dict[str, object] = {
            "query": {
                "name": name,
                "address": address,
                "min_price": min_price,
                "max_price": max_price,
                "page": page,
                "page_size": page_size,
                "sort_by": sort_by,
                "sort_dir": sort_dir,
            },
            **page_result.to_dict(),
        }
        if page_result.total == 0:
            result["message"] = EMPTY_RESULTS_MESSAGE
        return result

    @mcp.tool(name="get_property")
    async def get_property(property_id: str) -> dict[str, object]:
        try:
            async with session_context() as session:
                service = PropertyService(session)
                view = await service.get_property(property_id)
        except PropertyQueryError as exc:
            logger.info("get_property rejected: %s", exc)
            return _error_payload(exc)

        if view is None:
            return {"found": False, "property_id": property_id}
        return {"found": True, "item": view.to_dict()}
