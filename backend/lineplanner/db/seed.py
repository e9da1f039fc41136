"""Seed script with demo data for a two-unit garment plant.

Scenarios covered:
1. Multi-line split: a large order spread over two lines and several days
2. Single-line order finishing part-way through its last day
3. Zero-capacity line: an order that cannot be scheduled automatically
4. Overnight shift spanning midnight
"""

from datetime import date, timedelta

from lineplanner.schemas.order import OrderCreate
from lineplanner.schemas.production_line import LineCreate
from lineplanner.schemas.shift import ShiftCreate
from lineplanner.schemas.unit import UnitCreate
from lineplanner.services.entity_store import EntityStore
from lineplanner.services.repository import CollectionRepository
from lineplanner.services.scheduler import SchedulerService


def _days_from_now(days: int) -> date:
    return date.today() + timedelta(days=days)


def seed_demo_data(store: EntityStore) -> dict[str, int]:
    """Populate ``store`` with demo units, lines, shifts and orders, then schedule them.

    Returns:
        Dictionary with counts of created entities.
    """
    knit = store.add_unit(UnitCreate(name="Knitwear Unit", location="Building A"))
    denim = store.add_unit(UnitCreate(name="Denim Unit", location="Building B"))

    line_a = store.add_line(LineCreate(name="Knit Line 1", unit_id=knit.id, daily_capacity=1000))
    line_b = store.add_line(LineCreate(name="Knit Line 2", unit_id=knit.id, daily_capacity=800))
    line_c = store.add_line(LineCreate(name="Denim Line 1", unit_id=denim.id, daily_capacity=600))
    idle = store.add_line(LineCreate(name="Denim Line 2 (idle)", unit_id=denim.id, daily_capacity=0))

    day = store.add_shift(ShiftCreate(name="Day", start_time="08:00", end_time="16:00"))
    night = store.add_shift(ShiftCreate(name="Night", start_time="22:00", end_time="06:00"))

    orders = [
        OrderCreate(
            order_no="ORD-DEMO-001",
            style_name="Crew Neck Tee",
            quantity=2500,
            delivery_date=_days_from_now(10),
            unit_id=knit.id,
            assigned_line_ids=[line_a.id, line_b.id],
            shift_id=day.id,
        ),
        OrderCreate(
            order_no="ORD-DEMO-002",
            style_name="Slim Fit Jeans",
            quantity=1500,
            delivery_date=_days_from_now(14),
            unit_id=denim.id,
            assigned_line_ids=[line_c.id],
            shift_id=night.id,
        ),
        OrderCreate(
            order_no="ORD-DEMO-003",
            style_name="Denim Jacket",
            quantity=400,
            delivery_date=_days_from_now(21),
            unit_id=denim.id,
            assigned_line_ids=[idle.id],
            shift_id=day.id,
        ),
    ]
    for payload in orders:
        store.add_order(payload)

    result = SchedulerService(store).sync()

    return {
        "units": len(store.units),
        "lines": len(store.lines),
        "shifts": len(store.shifts),
        "orders": len(store.orders),
        "scheduled_blocks": len(result.created),
    }


async def seed_if_empty(repo: CollectionRepository) -> dict[str, int] | None:
    """Seed demo data only if nothing is stored yet.

    Returns:
        Seed counts if data was seeded, None if the store already has data.
    """
    if not await repo.is_empty():
        return None

    store = await repo.load()
    counts = seed_demo_data(store)
    await repo.save(store)
    return counts
