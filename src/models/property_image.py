"""Property image table model."""

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base
from src.models.identifiers import new_object_id


class PropertyImage(Base):
    """Image file attached to a property; only enabled images are shown."""

    __tablename__ = "property_images"
    __table_args__ = (
        Index("idx_property_images_property_enabled", "property_id", "enabled"),
    )

    id: Mapped[str] = mapped_column(
        String(24), primary_key=True, default=new_object_id
    )
    property_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
    )
    file: Mapped[str] = mapped_column(Text, nullable=False)
    enabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true"
    )
