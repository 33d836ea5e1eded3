"""Repository helpers for property queries and seeding."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.query_plan import QueryPlan
from src.models.identifiers import new_object_id
from src.models.property import Property
from src.models.property_image import PropertyImage


@dataclass(slots=True)
class PropertyInsert:
    """Payload used to insert property records."""

    owner_id: str
    name: str
    address: str
    price: Decimal
    code_internal: str
    year: int
    id: str = field(default_factory=new_object_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(slots=True)
class PropertyImageInsert:
    """Payload used to insert property image records."""

    property_id: str
    file: str
    enabled: bool = True
    id: str = field(default_factory=new_object_id)


async def count_properties(session: AsyncSession, plan: QueryPlan) -> int:
    """Count every property matching the plan's clauses, ignoring pagination."""

    stmt = select(func.count()).select_from(Property).where(*plan.clauses)
    result = await session.execute(stmt)
    return int(result.scalar_one())


async def fetch_property_page(session: AsyncSession, plan: QueryPlan) -> list[Property]:
    """Fetch one ordered page of properties."""

    stmt = (
        select(Property)
        .where(*plan.clauses)
        .order_by(*plan.order_by)
        .offset(plan.offset)
        .limit(plan.limit)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def fetch_property(session: AsyncSession, property_id: str) -> Property | None:
    stmt = select(Property).where(Property.id == property_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def fetch_primary_images(
    session: AsyncSession, property_ids: Sequence[str]
) -> dict[str, str]:
    """Map each property id to the file of one of its enabled images.

    Issues a single query for the whole page. Properties without an enabled
    image are left out of the mapping.
    """

    if not property_ids:
        return {}

    stmt = (
        select(PropertyImage.property_id, PropertyImage.file)
        .where(PropertyImage.property_id.in_(list(property_ids)))
        .where(PropertyImage.enabled.is_(True))
        .order_by(PropertyImage.property_id, PropertyImage.id)
    )
    result = await session.execute(stmt)

    images: dict[str, str] = {}
    for property_id, file in result.all():
        images.setdefault(property_id, file)
    return images


async def upsert_properties(session: AsyncSession, rows: list[PropertyInsert]) -> int:
    """Insert property rows, skipping any whose internal code already exists."""

    if not rows:
        return 0

    values = [asdict(row) for row in rows]
    dialect_name = session.get_bind().dialect.name

    if dialect_name == "postgresql":
        stmt = (
            pg_insert(Property)
            .values(values)
            .on_conflict_do_nothing(index_elements=["code_internal"])
            .returning(Property.id)
        )
        result = await session.execute(stmt)
        inserted_ids = result.scalars().all()
        await session.commit()
        return len(inserted_ids)

    inserted = 0
    for row in rows:
        exists_stmt = select(Property.id).where(
            Property.code_internal == row.code_internal
        )
        if (await session.execute(exists_stmt)).scalar_one_or_none() is not None:
            continue
        session.add(Property(**asdict(row)))
        inserted += 1

    await session.commit()
    return inserted


async def fetch_property_ids_by_code(
    session: AsyncSession, codes: Sequence[str]
) -> dict[str, str]:
    if not codes:
        return {}

    stmt = select(Property.code_internal, Property.id).where(
        Property.code_internal.in_(list(codes))
    )
    result = await session.execute(stmt)
    return {code: property_id for code, property_id in result.all()}


async def insert_property_images(
    session: AsyncSession, rows: list[PropertyImageInsert]
) -> int:
    if not rows:
        return 0

    session.add_all(PropertyImage(**asdict(row)) for row in rows)
    await session.commit()
    return len(rows)


async def delete_all_properties(session: AsyncSession) -> int:
    """Remove every image and property row. Used by the seed script."""

    await session.execute(delete(PropertyImage))
    result = await session.execute(delete(Property))
    await session.commit()
    return int(result.rowcount or 0)
