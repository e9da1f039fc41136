"""Schedule API endpoints: automatic passes, block moves and manual overrides."""

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query, status

from lineplanner.api.deps import get_store, planner_errors, read_store
from lineplanner.api.v1.orders import build_order_response
from lineplanner.schemas.order import OrderResponse
from lineplanner.schemas.schedule import (
    AttentionItem,
    BlockMove,
    CapacityUsage,
    ScheduledBlock,
    SlotAssignment,
    SyncResult,
)
from lineplanner.services.calendar_view import capacity_usage
from lineplanner.services.entity_store import EntityStore
from lineplanner.services.scheduler import SchedulerService

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.post("/sync", response_model=SyncResult)
async def sync_schedule(store: EntityStore = Depends(get_store)) -> SyncResult:
    """Run an automatic scheduling pass over all unscheduled orders."""
    return SchedulerService(store).sync()


@router.get("/blocks", response_model=list[ScheduledBlock])
async def list_blocks(
    line_id: str | None = Query(None),
    date: dt.date | None = Query(None),
    order_id: str | None = Query(None),
    store: EntityStore = Depends(read_store),
) -> list[ScheduledBlock]:
    """List scheduled blocks, ordered by date, filtered by line, date or order."""
    blocks = [
        b
        for b in store.blocks.values()
        if (line_id is None or b.line_id == line_id)
        and (date is None or b.date == date)
        and (order_id is None or b.order_id == order_id)
    ]
    return sorted(blocks, key=lambda b: b.date)


@router.delete("/blocks", status_code=status.HTTP_204_NO_CONTENT)
async def clear_blocks(store: EntityStore = Depends(get_store)) -> None:
    """Remove every block. Cleared orders are not re-allocated automatically."""
    store.clear_blocks()


@router.delete("/blocks/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_block(block_id: str, store: EntityStore = Depends(get_store)) -> None:
    """Remove a single block. Its order is left partially scheduled."""
    if not store.remove_block(block_id):
        raise HTTPException(status_code=404, detail="Block not found")


@router.patch("/blocks/{block_id}", response_model=ScheduledBlock)
async def move_block(
    block_id: str,
    payload: BlockMove,
    store: EntityStore = Depends(get_store),
) -> ScheduledBlock:
    """Move a block to another line and/or date. Overbooking is allowed."""
    with planner_errors():
        block = SchedulerService(store).move_block(block_id, payload.new_line_id, payload.new_date)
    if block is None:
        raise HTTPException(status_code=404, detail="Block not found")
    return block


@router.post("/orders/{order_id}/assign", response_model=ScheduledBlock)
async def assign_order_slot(
    order_id: str,
    payload: SlotAssignment,
    store: EntityStore = Depends(get_store),
) -> ScheduledBlock:
    """Schedule the whole order on one line and date, replacing its blocks."""
    with planner_errors():
        return SchedulerService(store).assign_slot(order_id, payload.line_id, payload.date)


@router.post("/orders/{order_id}/reschedule", response_model=list[ScheduledBlock])
async def reschedule_order(
    order_id: str,
    store: EntityStore = Depends(get_store),
) -> list[ScheduledBlock]:
    """Drop the order's blocks and allocate it again starting today."""
    with planner_errors():
        return SchedulerService(store).reschedule_order(order_id)


@router.delete("/orders/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unschedule_order(order_id: str, store: EntityStore = Depends(get_store)) -> None:
    """Remove all blocks of an order without deleting the order."""
    with planner_errors():
        SchedulerService(store).unschedule_order(order_id)


@router.get("/unscheduled", response_model=list[OrderResponse])
async def list_unscheduled(store: EntityStore = Depends(read_store)) -> list[OrderResponse]:
    """Orders still waiting for the automatic scheduling pass."""
    scheduler = SchedulerService(store)
    return [build_order_response(scheduler, order) for order in scheduler.unscheduled_orders()]


@router.get("/attention", response_model=list[AttentionItem])
async def list_attention(store: EntityStore = Depends(read_store)) -> list[AttentionItem]:
    """Orders that need a user decision: unschedulable or cleared."""
    return SchedulerService(store).needs_attention()


@router.get("/usage", response_model=CapacityUsage)
async def get_capacity_usage(
    line_id: str = Query(...),
    date: dt.date = Query(...),
    store: EntityStore = Depends(read_store),
) -> CapacityUsage:
    """Used vs. total capacity of one line on one date."""
    return capacity_usage(store, line_id, date)
