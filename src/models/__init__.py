"""SQLAlchemy ORM models."""

from src.models.base import Base
from src.models.property import Property
from src.models.property_image import PropertyImage

__all__ = ["Base", "Property", "PropertyImage"]
