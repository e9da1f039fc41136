"""Database initialization utilities."""

from lineplanner.core.database import Base, engine

# Register models on Base.metadata
import lineplanner.models  # noqa: F401


async def init_db() -> None:
    """Create all database tables using SQLAlchemy metadata.

    This is a convenience function for development. In production,
    use Alembic migrations via `alembic upgrade head`.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

