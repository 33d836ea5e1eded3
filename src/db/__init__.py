"""Database session and repository utilities."""

from src.db.session import (
    dispose_engine,
    get_db_session,
    get_engine,
    get_sessionmaker,
    session_context,
)
from src.db.repositories import (
    count_properties,
    fetch_primary_images,
    fetch_property,
    fetch_property_page,
)

__all__ = [
    "dispose_engine",
    "get_db_session",
    "get_engine",
    "get_sessionmaker",
    "session_context",
    "count_properties",
    "fetch_primary_images",
    "fetch_property",
    "fetch_property_page",
]
