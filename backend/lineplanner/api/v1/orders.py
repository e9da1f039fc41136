"""Orders CRUD API endpoints.

Creating, updating or deleting an order runs an automatic scheduling pass
so new orders are allocated as soon as they exist.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from lineplanner.api.deps import get_store, planner_errors, read_store
from lineplanner.schemas.order import Order, OrderCreate, OrderResponse, OrderStatus
from lineplanner.services.entity_store import EntityStore
from lineplanner.services.scheduler import SchedulerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def build_order_response(scheduler: SchedulerService, order: Order) -> OrderResponse:
    """Attach schedule state and resolved labels to an order."""
    store = scheduler.store
    return OrderResponse(
        **order.model_dump(),
        status=scheduler.order_status(order),
        unit_name=store.unit_name(order.unit_id),
        shift_name=store.shift_name(order.shift_id),
        line_names=[store.line_name(line_id) for line_id in order.assigned_line_ids],
        scheduled_quantity=scheduler.scheduled_quantity(order.id),
    )


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    unit_id: str | None = Query(None),
    status_filter: OrderStatus | None = Query(None, alias="status"),
    store: EntityStore = Depends(read_store),
) -> list[OrderResponse]:
    """List orders with optional unit and schedule-status filters."""
    scheduler = SchedulerService(store)
    responses = [
        build_order_response(scheduler, order)
        for order in store.orders.values()
        if unit_id is None or order.unit_id == unit_id
    ]
    if status_filter is not None:
        responses = [r for r in responses if r.status == status_filter]
    return responses


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    store: EntityStore = Depends(get_store),
) -> OrderResponse:
    """Create an order and schedule it automatically."""
    with planner_errors():
        order = store.add_order(payload)
    scheduler = SchedulerService(store)
    scheduler.sync()
    logger.info("Created order %s (%d pcs)", order.order_no, order.quantity)
    return build_order_response(scheduler, order)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, store: EntityStore = Depends(read_store)) -> OrderResponse:
    """Get a single order by ID."""
    order = store.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return build_order_response(SchedulerService(store), order)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: str,
    payload: OrderCreate,
    store: EntityStore = Depends(get_store),
) -> OrderResponse:
    """Update an order.

    Quantity, unit and lines can only change while the order has no blocks.
    """
    with planner_errors():
        order = store.update_order(order_id, payload)
    scheduler = SchedulerService(store)
    scheduler.sync()
    return build_order_response(scheduler, order)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(order_id: str, store: EntityStore = Depends(get_store)) -> None:
    """Delete an order and all of its scheduled blocks."""
    with planner_errors():
        removed = store.delete_order(order_id)
    SchedulerService(store).sync()
    logger.info("Deleted order %s and %d block(s)", order_id, removed)
