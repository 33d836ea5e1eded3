import importlib
from collections.abc import AsyncIterator, Iterator
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any, cast

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.session import get_db_session
from src.main import app
from src.services.errors import InvalidRangeError
from src.services.filters import SearchRequest
from src.services.property_service import Page, PropertyView

properties_module = importlib.import_module("src.api.properties")
main_module = importlib.import_module("src.main")

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
PROPERTY_ID = "666aaa000000000000000001"


def _view(**overrides: Any) -> PropertyView:
    values: dict[str, Any] = {
        "id": PROPERTY_ID,
        "owner_id": "666bbb000000000000000001",
        "name": "Casa Norte",
        "address": "Calle 10 # 5-20",
        "price": Decimal("350000.00"),
        "code_internal": "P-0001",
        "year": 2015,
        "created_at": NOW,
        "updated_at": NOW,
        "image_url": "https://example.com/img1.jpg",
    }
    values.update(overrides)
    return PropertyView(**values)


async def _override_db_session() -> AsyncIterator[AsyncSession]:
    yield cast(AsyncSession, object())


@pytest.fixture
def override_db_dependency() -> Iterator[None]:
    app.dependency_overrides[get_db_session] = _override_db_session
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def api_client(override_db_dependency: None) -> AsyncIterator[AsyncClient]:
    _ = override_db_dependency
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.mark.anyio
async def test_health_returns_ok(api_client: AsyncClient) -> None:
    response = await api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_search_maps_query_params_and_returns_camel_case_page(
    monkeypatch: pytest.MonkeyPatch, api_client: AsyncClient
) -> None:
    captured: list[SearchRequest | None] = []

    async def fake_search(self: Any, request: SearchRequest | None = None) -> Page:  # noqa: ARG001
        captured.append(request)
        return Page(items=(_view(),), page=2, page_size=5, total=11, total_pages=3)

    monkeypatch.setattr(
        properties_module.PropertyService, "search_properties", fake_search
    )

    response = await api_client.get(
        "/api/properties",
        params={
            "name": "casa",
            "address": "calle",
            "minPrice": "100000",
            "maxPrice": "500000",
            "page": 2,
            "pageSize": 5,
            "sortBy": "Price",
            "sortDir": "asc",
        },
    )

    assert response.status_code == 200
    request = captured[0]
    assert request is not None
    assert request.name == "casa"
    assert request.address == "calle"
    assert request.min_price == Decimal("100000")
    assert request.max_price == Decimal("500000")
    assert (request.page, request.page_size) == (2, 5)
    assert (request.sort_by, request.sort_dir) == ("Price", "asc")

    body = response.json()
    assert body["page"] == 2
    assert body["pageSize"] == 5
    assert body["total"] == 11
    assert body["totalPages"] == 3
    item = body["items"][0]
    assert item["id"] == PROPERTY_ID
    assert item["idOwner"] == "666bbb000000000000000001"
    assert item["codeInternal"] == "P-0001"
    assert item["imageUrl"] == "https://example.com/img1.jpg"
    assert Decimal(str(item["price"])) == Decimal("350000")


@pytest.mark.anyio
async def test_search_without_params_leaves_defaults_to_normalizer(
    monkeypatch: pytest.MonkeyPatch, api_client: AsyncClient
) -> None:
    captured: list[SearchRequest | None] = []

    async def fake_search(self: Any, request: SearchRequest | None = None) -> Page:  # noqa: ARG001
        captured.append(request)
        return Page(items=(), page=1, page_size=10, total=0, total_pages=0)

    monkeypatch.setattr(
        properties_module.PropertyService, "search_properties", fake_search
    )

    response = await api_client.get("/api/properties")

    assert response.status_code == 200
    assert response.json() == {
        "items": [],
        "page": 1,
        "pageSize": 10,
        "total": 0,
        "totalPages": 0,
    }
    request = captured[0]
    assert request is not None
    assert request.page_size is None
    assert request.sort_by is None


@pytest.mark.anyio
async def test_search_inverted_range_returns_400_problem(
    monkeypatch: pytest.MonkeyPatch, api_client: AsyncClient
) -> None:
    async def fake_search(self: Any, request: SearchRequest | None = None) -> Page:  # noqa: ARG001
        raise InvalidRangeError(Decimal("500"), Decimal("100"))

    monkeypatch.setattr(
        properties_module.PropertyService, "search_properties", fake_search
    )

    response = await api_client.get(
        "/api/properties", params={"minPrice": "500", "maxPrice": "100"}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["title"] == "Bad Request"
    assert body["status"] == 400
    assert "min_price" in body["detail"]
    assert body["instance"] == "/api/properties"


@pytest.mark.anyio
async def test_store_outage_returns_503(
    monkeypatch: pytest.MonkeyPatch, api_client: AsyncClient
) -> None:
    async def fake_search(self: Any, request: SearchRequest | None = None) -> Page:  # noqa: ARG001
        raise OperationalError("SELECT count(*)", {}, Exception("connection refused"))

    monkeypatch.setattr(
        properties_module.PropertyService, "search_properties", fake_search
    )

    response = await api_client.get("/api/properties")

    assert response.status_code == 503
    assert response.json()["title"] == "Service Unavailable"


@pytest.mark.anyio
async def test_get_by_id_returns_property(
    monkeypatch: pytest.MonkeyPatch, api_client: AsyncClient
) -> None:
    async def fake_get(self: Any, property_id: str | None) -> PropertyView:  # noqa: ARG001
        return _view(image_url=None)

    monkeypatch.setattr(properties_module.PropertyService, "get_property", fake_get)

    response = await api_client.get(f"/api/properties/{PROPERTY_ID}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == PROPERTY_ID
    assert body["name"] == "Casa Norte"
    assert body["imageUrl"] is None


@pytest.mark.anyio
async def test_get_by_id_not_found_returns_404(
    monkeypatch: pytest.MonkeyPatch, api_client: AsyncClient
) -> None:
    async def fake_get(self: Any, property_id: str | None) -> None:  # noqa: ARG001
        return None

    monkeypatch.setattr(properties_module.PropertyService, "get_property", fake_get)

    response = await api_client.get("/api/properties/0123456789abcdef01234567")

    assert response.status_code == 404


@pytest.mark.anyio
async def test_get_by_malformed_id_returns_400(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/properties/not-a-valid-id")

    assert response.status_code == 400
    assert "24-hex" in response.json()["detail"]


@pytest.mark.anyio
async def test_readyz_reports_store_state(
    monkeypatch: pytest.MonkeyPatch, api_client: AsyncClient
) -> None:
    async def healthy() -> None:
        return None

    async def unreachable() -> None:
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr(main_module, "ping_database", healthy)
    ready = await api_client.get("/readyz")

    monkeypatch.setattr(main_module, "ping_database", unreachable)
    not_ready = await api_client.get("/readyz")

    assert ready.status_code == 200
    assert ready.json() == {"status": "ready"}
    assert not_ready.status_code == 503
