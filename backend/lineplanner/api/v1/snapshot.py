"""Snapshot API endpoints for exporting and replacing all planner collections."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from lineplanner.api.deps import get_repository, read_store
from lineplanner.schemas.schedule import SyncResult
from lineplanner.schemas.snapshot import PlannerSnapshot
from lineplanner.services.entity_store import EntityStore
from lineplanner.services.repository import CollectionRepository
from lineplanner.services.scheduler import SchedulerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/snapshot", tags=["snapshot"])


@router.get("", response_model=PlannerSnapshot)
async def export_snapshot(store: EntityStore = Depends(read_store)) -> PlannerSnapshot:
    """Export every collection in its stored JSON shape."""
    return store.to_snapshot()


@router.put("", response_model=SyncResult)
async def import_snapshot(
    collections: dict[str, Any] = Body(...),
    repo: CollectionRepository = Depends(get_repository),
) -> SyncResult:
    """Replace all collections wholesale, then schedule any unscheduled orders.

    A collection that fails validation is imported as empty.
    """
    store = EntityStore.from_collections(collections)
    result = SchedulerService(store).sync()
    await repo.save(store)
    logger.info(
        "Imported snapshot: %d order(s), %d block(s)", len(store.orders), len(store.blocks)
    )
    return result
