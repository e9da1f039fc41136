"""Scheduling orchestrator.

Drives the allocator for every order that has not been scheduled yet and
exposes the manual overrides (block moves, whole-order slot assignment,
unschedule, reschedule). All transitions are synchronous mutations of an
:class:`EntityStore`; persisting the store is left to the caller.

An order is eligible for automatic scheduling iff it has no blocks and its
id is not in the store's processed set. Every order the automatic path
attempts is marked processed, so a second ``sync()`` over the same orders
creates nothing, and orders whose blocks were cleared by other means are
not silently re-allocated.
"""

import logging
from datetime import date

from lineplanner.schemas.order import Order, OrderStatus
from lineplanner.schemas.schedule import AttentionItem, ScheduledBlock, SyncResult
from lineplanner.services.allocator import allocate, daily_capacity
from lineplanner.services.entity_store import (
    EntityNotFoundError,
    EntityStore,
    PlannerValidationError,
)
from lineplanner.services.planner_helpers import block_id_for

logger = logging.getLogger(__name__)


class SchedulerService:
    """Automatic allocation plus manual overrides over an entity store."""

    def __init__(self, store: EntityStore, today: date | None = None) -> None:
        self.store = store
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    # ---------------------------------------------------------------
    # Automatic path
    # ---------------------------------------------------------------

    def unscheduled_orders(self) -> list[Order]:
        """Orders with no blocks that the automatic path has not attempted."""
        scheduled = self.store.scheduled_order_ids()
        return [
            order
            for order in self.store.orders.values()
            if order.id not in scheduled and order.id not in self.store.processed_order_ids
        ]

    def prune_processed(self) -> int:
        """Forget processed marks of orders that no longer exist."""
        stale = self.store.processed_order_ids - set(self.store.orders)
        self.store.processed_order_ids -= stale
        return len(stale)

    def sync(self) -> SyncResult:
        """Allocate every unscheduled order once and store the blocks in one batch.

        Call after every mutation of the order or block collections.
        """
        self.prune_processed()
        pending = self.unscheduled_orders()
        if not pending:
            return SyncResult()

        start = self.today
        new_blocks: list[ScheduledBlock] = []
        result = SyncResult()

        for order in pending:
            blocks = allocate(order, self.store.lines, start, self.store.blocks_for_order(order.id))
            self.store.processed_order_ids.add(order.id)
            if not blocks:
                logger.warning(
                    "Order %s is unschedulable: assigned lines have no daily capacity",
                    order.order_no,
                )
                result.unschedulable.append(order.id)
                continue

            new_blocks.extend(blocks)
            result.scheduled_order_ids.append(order.id)

        self.store.add_blocks(new_blocks)
        result.created = new_blocks
        logger.info(
            "Scheduling pass: %d order(s) scheduled, %d block(s) created, %d unschedulable",
            len(result.scheduled_order_ids),
            len(new_blocks),
            len(result.unschedulable),
        )
        return result

    # ---------------------------------------------------------------
    # Manual overrides
    # ---------------------------------------------------------------

    def move_block(self, block_id: str, new_line_id: str, new_date: date) -> ScheduledBlock | None:
        """Move a block to another line/date in place.

        Returns ``None`` when the block does not exist. Capacity is not
        checked; an overbooked target is flagged by the calendar projection.
        """
        block = self.store.get_block(block_id)
        if block is None:
            return None
        if self.store.get_line(new_line_id) is None:
            raise PlannerValidationError(f"Line {new_line_id} does not exist")

        logger.debug(
            "Moving block %s from %s/%s to %s/%s",
            block_id,
            block.line_id,
            block.date,
            new_line_id,
            new_date,
        )
        block.line_id = new_line_id
        block.date = new_date
        return block

    def remove_blocks_for_order(self, order_id: str) -> int:
        return self.store.remove_blocks(lambda b: b.order_id == order_id)

    def assign_slot(self, order_id: str, line_id: str, day: date) -> ScheduledBlock:
        """Put the whole order on a single line and date, replacing its blocks."""
        order = self.store.get_order(order_id)
        if order is None:
            raise EntityNotFoundError("Order", order_id)
        if self.store.get_line(line_id) is None:
            raise PlannerValidationError(f"Line {line_id} does not exist")

        self.remove_blocks_for_order(order_id)
        block = ScheduledBlock(
            block_id=block_id_for(order_id, line_id, day),
            order_id=order_id,
            line_id=line_id,
            date=day,
            allocated_quantity=order.quantity,
            style_name=order.style_name,
            order_no=order.order_no,
            kind="whole",
        )
        self.store.add_blocks([block])
        self.store.processed_order_ids.add(order_id)
        return block

    def unschedule_order(self, order_id: str) -> int:
        """Remove an order's blocks; it stays processed and is not auto-retried."""
        if self.store.get_order(order_id) is None:
            raise EntityNotFoundError("Order", order_id)
        self.store.processed_order_ids.add(order_id)
        return self.remove_blocks_for_order(order_id)

    def reschedule_order(self, order_id: str) -> list[ScheduledBlock]:
        """Drop an order's blocks and run the allocator for it again from today.

        Other pending orders are left for the next ``sync()``.
        """
        order = self.store.get_order(order_id)
        if order is None:
            raise EntityNotFoundError("Order", order_id)
        self.remove_blocks_for_order(order_id)

        blocks = allocate(order, self.store.lines, self.today)
        self.store.add_blocks(blocks)
        self.store.processed_order_ids.add(order_id)
        if not blocks:
            logger.warning(
                "Order %s is unschedulable: assigned lines have no daily capacity",
                order.order_no,
            )
        logger.info("Rescheduled order %s into %d block(s)", order.order_no, len(blocks))
        return blocks

    # ---------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------

    def order_status(self, order: Order) -> OrderStatus:
        blocks = self.store.blocks_for_order(order.id)
        if blocks:
            if sum(b.allocated_quantity for b in blocks) < order.quantity:
                return OrderStatus.PARTIAL
            return OrderStatus.SCHEDULED
        if daily_capacity(order, self.store.lines) <= 0:
            return OrderStatus.UNSCHEDULABLE
        if order.id in self.store.processed_order_ids:
            return OrderStatus.UNASSIGNED
        return OrderStatus.PENDING

    def scheduled_quantity(self, order_id: str) -> int:
        return sum(b.allocated_quantity for b in self.store.blocks_for_order(order_id))

    def needs_attention(self) -> list[AttentionItem]:
        """Orders the automatic path will not cover without user action."""
        items: list[AttentionItem] = []
        for order in self.store.orders.values():
            status = self.order_status(order)
            if status == OrderStatus.UNSCHEDULABLE:
                reason = "Assigned lines have no daily capacity"
            elif status == OrderStatus.UNASSIGNED:
                reason = "Blocks were removed; assign a slot or reschedule"
            elif status == OrderStatus.PARTIAL:
                reason = "Blocks cover less than the order quantity; reschedule"
            else:
                continue
            items.append(
                AttentionItem(
                    order_id=order.id,
                    order_no=order.order_no,
                    status=status,
                    reason=reason,
                )
            )
        return items
