"""Calendar projection: per-slot capacity usage, conflicts and month grids.

Everything here is derived from the block collection on demand; nothing is
stored. Conflicts are advisory only; no allocation or move is ever
rejected because of them.
"""

import calendar
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date

from lineplanner.core.config import settings
from lineplanner.schemas.calendar import CalendarBlock, CalendarCell, CalendarMonth
from lineplanner.schemas.schedule import CapacityUsage, ScheduledBlock
from lineplanner.services.entity_store import EntityStore
from lineplanner.services.planner_helpers import is_weekend


def _usage_from_blocks(
    store: EntityStore, line_id: str, day: date, blocks: Sequence[ScheduledBlock]
) -> CapacityUsage:
    line = store.get_line(line_id)
    total = line.daily_capacity if line else 0
    used = sum(b.allocated_quantity for b in blocks)
    order_ids = list(dict.fromkeys(b.order_id for b in blocks))
    # A whole-order assignment claims its slot outright.
    shared_whole = len(order_ids) > 1 and any(b.kind == "whole" for b in blocks)
    return CapacityUsage(
        line_id=line_id,
        date=day,
        used=used,
        total=total,
        order_ids=order_ids,
        conflict=used > total or shared_whole,
    )


def capacity_usage(store: EntityStore, line_id: str, day: date) -> CapacityUsage:
    """Used and total capacity of one (line, date) slot; total is 0 for a missing line."""
    return _usage_from_blocks(store, line_id, day, store.blocks_for_slot(line_id, day))


def has_conflict(store: EntityStore, line_id: str, day: date) -> bool:
    """True when the slot is overbooked or a whole-order slot is shared."""
    return capacity_usage(store, line_id, day).conflict


def overbooked_slots(store: EntityStore) -> list[CapacityUsage]:
    """Every conflicting slot, ordered by date then line name."""
    by_slot: dict[tuple[str, date], list[ScheduledBlock]] = defaultdict(list)
    for block in store.blocks.values():
        by_slot[(block.line_id, block.date)].append(block)

    conflicts = [
        usage
        for (line_id, day), blocks in by_slot.items()
        if (usage := _usage_from_blocks(store, line_id, day, blocks)).conflict
    ]
    conflicts.sort(key=lambda u: (u.date, store.line_name(u.line_id)))
    return conflicts


def month_days(year: int, month: int) -> list[date | None]:
    """Days of a month laid out in Sunday-first weeks.

    Leading ``None`` entries pad the first week up to the month's first day.
    """
    first = date(year, month, 1)
    offset = (first.weekday() + 1) % 7
    _, days_in_month = calendar.monthrange(year, month)
    days: list[date | None] = [None] * offset
    days.extend(date(year, month, d) for d in range(1, days_in_month + 1))
    return days


def order_colors(blocks: Iterable[ScheduledBlock], palette: Sequence[str] | None = None) -> dict[str, str]:
    """Stable color per order: first-seen order gets palette[0], wrapping around."""
    if palette is None:
        palette = settings.palette
    colors: dict[str, str] = {}
    for block in blocks:
        if block.order_id not in colors:
            colors[block.order_id] = palette[len(colors) % len(palette)]
    return colors


def month_view(
    store: EntityStore,
    line_id: str,
    year: int,
    month: int,
    palette: Sequence[str] | None = None,
) -> CalendarMonth:
    """Month grid for one line with blocks, usage and conflict per day.

    Colors are assigned over the whole block collection so an order keeps
    its color across lines and months.
    """
    colors = order_colors(store.blocks.values(), palette)
    cells: list[CalendarCell | None] = []
    for day in month_days(year, month):
        if day is None:
            cells.append(None)
            continue
        blocks = store.blocks_for_slot(line_id, day)
        usage = _usage_from_blocks(store, line_id, day, blocks)
        cells.append(
            CalendarCell(
                date=day,
                is_weekend=is_weekend(day),
                blocks=[
                    CalendarBlock(**b.model_dump(), color=colors[b.order_id]) for b in blocks
                ],
                used=usage.used,
                total=usage.total,
                conflict=usage.conflict,
            )
        )
    return CalendarMonth(
        line_id=line_id,
        line_name=store.line_name(line_id),
        year=year,
        month=month,
        days=cells,
    )
