"""StoredCollection SQLAlchemy model."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from lineplanner.core.database import Base


class StoredCollection(Base):
    """One persisted planner collection, stored as a JSON array."""

    __tablename__ = "planner_collections"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    payload: Mapped[str] = mapped_column(
        Text, nullable=False, server_default="[]", comment="JSON array of entities"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
