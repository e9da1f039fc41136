"""SQLAlchemy ORM models."""

from lineplanner.models.collection import StoredCollection

__all__ = [
    "StoredCollection",
]
