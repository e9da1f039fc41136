"""Greedy day-by-day capacity allocator.

Splits an order's quantity into dated, per-line blocks:

1. Sum the daily capacity of the order's assigned lines.
2. ``required_days = ceil(quantity / daily_capacity)``.
3. Walk consecutive calendar days from the start date (weekends included)
   and, per day, fill the assigned lines in their stored order, each up to
   its daily capacity, until the quantity is covered.

The allocator is first-fit: it never looks at what other orders already
booked on a line, so overbooking is possible and is flagged by the calendar
projection instead.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, timedelta

from lineplanner.schemas.order import Order
from lineplanner.schemas.production_line import Line
from lineplanner.schemas.schedule import ScheduledBlock
from lineplanner.services.planner_helpers import block_id_for

logger = logging.getLogger(__name__)

SlotKey = tuple[str, str, date]


def block_key(block: ScheduledBlock) -> SlotKey:
    """Identity of a block for duplicate suppression: (order, line, date)."""
    return (block.order_id, block.line_id, block.date)


def resolve_lines(order: Order, lines: Mapping[str, Line]) -> list[Line]:
    """Assigned lines that exist, in stored order, each at most once."""
    resolved: list[Line] = []
    seen: set[str] = set()
    for line_id in order.assigned_line_ids:
        line = lines.get(line_id)
        if line is None or line_id in seen:
            continue
        seen.add(line_id)
        resolved.append(line)
    return resolved


def daily_capacity(order: Order, lines: Mapping[str, Line]) -> int:
    """Combined pieces per day of the order's assigned lines; missing lines count as zero."""
    return sum(line.daily_capacity for line in resolve_lines(order, lines))


def required_days(quantity: int, capacity_per_day: int) -> int:
    if capacity_per_day <= 0:
        return 0
    return math.ceil(quantity / capacity_per_day)


def allocate(
    order: Order,
    lines: Mapping[str, Line],
    start_date: date,
    existing: Iterable[ScheduledBlock] = (),
) -> list[ScheduledBlock]:
    """Compute the blocks covering ``order.quantity`` from ``start_date`` onwards.

    Args:
        order: The order to split.
        lines: All known lines keyed by id; unknown assigned ids are skipped.
        start_date: First production day (the day the order becomes eligible).
        existing: Blocks already stored; their (order, line, date) slots are
            never emitted again.

    Returns:
        The new blocks, or an empty list when the assigned lines have no
        capacity. Callers must treat the empty result as "unschedulable".
    """
    assigned = resolve_lines(order, lines)
    capacity = sum(line.daily_capacity for line in assigned)
    if capacity <= 0:
        logger.debug("Order %s has zero assigned capacity", order.order_no)
        return []

    days = required_days(order.quantity, capacity)
    taken: set[SlotKey] = {block_key(b) for b in existing}
    blocks: list[ScheduledBlock] = []
    remaining = order.quantity

    for offset in range(days):
        if remaining <= 0:
            break
        day = start_date + timedelta(days=offset)
        for line in assigned:
            if remaining <= 0:
                break
            if line.daily_capacity <= 0:
                continue
            key = (order.id, line.id, day)
            if key in taken:
                continue
            quantity = min(line.daily_capacity, remaining)
            blocks.append(
                ScheduledBlock(
                    block_id=block_id_for(order.id, line.id, day),
                    order_id=order.id,
                    line_id=line.id,
                    date=day,
                    allocated_quantity=quantity,
                    style_name=order.style_name,
                    order_no=order.order_no,
                    kind="split",
                )
            )
            taken.add(key)
            remaining -= quantity

    logger.debug(
        "Allocated order %s: %d block(s) over %d day(s), %d left",
        order.order_no,
        len(blocks),
        days,
        remaining,
    )
    return blocks
