"""Property table model."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base
from src.models.identifiers import new_object_id


class Property(Base):
    """Real-estate listing exposed by the catalog search."""

    __tablename__ = "properties"
    __table_args__ = (
        Index("idx_properties_price", "price"),
        CheckConstraint("price >= 0", name="price_non_negative"),
        CheckConstraint("year BETWEEN 1800 AND 2100", name="year_range"),
    )

    id: Mapped[str] = mapped_column(
        String(24), primary_key=True, default=new_object_id
    )
    owner_id: Mapped[str] = mapped_column(String(24), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    code_internal: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


Index("idx_properties_created_at_desc", Property.created_at.desc())
