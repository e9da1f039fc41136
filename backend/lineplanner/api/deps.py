"""Shared FastAPI dependencies for the planner routers."""

from collections.abc import AsyncGenerator, Iterator
from contextlib import contextmanager

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from lineplanner.core.database import get_db
from lineplanner.services.entity_store import (
    EntityNotFoundError,
    EntityStore,
    PlannerValidationError,
)
from lineplanner.services.repository import CollectionRepository


async def get_repository(db: AsyncSession = Depends(get_db)) -> CollectionRepository:
    return CollectionRepository(db)


async def read_store(repo: CollectionRepository = Depends(get_repository)) -> EntityStore:
    """Load the planner state for a read-only request."""
    return await repo.load()


async def get_store(
    repo: CollectionRepository = Depends(get_repository),
) -> AsyncGenerator[EntityStore, None]:
    """Load the planner state and save it back once the handler succeeds."""
    store = await repo.load()
    yield store
    await repo.save(store)


@contextmanager
def planner_errors() -> Iterator[None]:
    """Translate planner errors into HTTP errors."""
    try:
        yield
    except EntityNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except PlannerValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
