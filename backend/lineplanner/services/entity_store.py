"""In-memory entity store for units, lines, shifts, orders and scheduled blocks.

Each collection is a flat mapping keyed by id, kept in insertion order.
The store owns reference validation at creation/update time and the
cascade rules for deletions; it performs no I/O. Loading and saving is
the job of :class:`lineplanner.services.repository.CollectionRepository`.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import date
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from lineplanner.schemas.order import Order, OrderCreate
from lineplanner.schemas.production_line import Line, LineCreate
from lineplanner.schemas.schedule import ScheduledBlock
from lineplanner.schemas.shift import Shift, ShiftCreate
from lineplanner.schemas.snapshot import PlannerSnapshot
from lineplanner.schemas.unit import Unit, UnitCreate
from lineplanner.services.planner_helpers import (
    UNKNOWN_LINE,
    UNKNOWN_SHIFT,
    UNKNOWN_UNIT,
    generate_order_no,
    new_id,
)

logger = logging.getLogger(__name__)

UNITS = "units"
LINES = "lines"
SHIFTS = "shifts"
ORDERS = "orders"
SCHEDULED_BLOCKS = "scheduledBlocks"
PROCESSED_ORDER_IDS = "processedOrderIds"

COLLECTION_NAMES = (UNITS, LINES, SHIFTS, ORDERS, SCHEDULED_BLOCKS, PROCESSED_ORDER_IDS)

_ADAPTERS: dict[str, TypeAdapter] = {
    UNITS: TypeAdapter(list[Unit]),
    LINES: TypeAdapter(list[Line]),
    SHIFTS: TypeAdapter(list[Shift]),
    ORDERS: TypeAdapter(list[Order]),
    SCHEDULED_BLOCKS: TypeAdapter(list[ScheduledBlock]),
    PROCESSED_ORDER_IDS: TypeAdapter(list[str]),
}

_E = TypeVar("_E", bound=BaseModel)


class PlannerError(Exception):
    """Base class for planner errors."""


class PlannerValidationError(PlannerError):
    """Raised when a creation, update or move would break a reference rule."""


class EntityNotFoundError(PlannerError):
    """Raised when an operation targets an entity that does not exist."""

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"{kind} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


def parse_collection(name: str, raw: Any) -> list[Any]:
    """Validate one stored collection, falling back to empty on any failure."""
    if raw is None:
        return []
    try:
        return _ADAPTERS[name].validate_python(raw)
    except ValidationError as exc:
        logger.warning(
            "Collection %r failed validation (%d error(s)); loading it empty",
            name,
            exc.error_count(),
        )
        return []


class EntityStore:
    """Flat, id-keyed collections of every planner entity."""

    def __init__(
        self,
        units: Iterable[Unit] = (),
        lines: Iterable[Line] = (),
        shifts: Iterable[Shift] = (),
        orders: Iterable[Order] = (),
        blocks: Iterable[ScheduledBlock] = (),
        processed_order_ids: Iterable[str] = (),
    ) -> None:
        self.units: dict[str, Unit] = {u.id: u for u in units}
        self.lines: dict[str, Line] = {ln.id: ln for ln in lines}
        self.shifts: dict[str, Shift] = {s.id: s for s in shifts}
        self.orders: dict[str, Order] = {o.id: o for o in orders}
        self.blocks: dict[str, ScheduledBlock] = {b.block_id: b for b in blocks}
        self.processed_order_ids: set[str] = set(processed_order_ids)

    # ---------------------------------------------------------------
    # Snapshot conversion
    # ---------------------------------------------------------------

    @classmethod
    def from_collections(cls, raw: Mapping[str, Any]) -> "EntityStore":
        """Build a store from stored JSON-shaped collections.

        A missing or malformed collection loads as empty; the others are kept.
        """
        parsed = {name: parse_collection(name, raw.get(name)) for name in COLLECTION_NAMES}
        return cls(
            units=parsed[UNITS],
            lines=parsed[LINES],
            shifts=parsed[SHIFTS],
            orders=parsed[ORDERS],
            blocks=parsed[SCHEDULED_BLOCKS],
            processed_order_ids=parsed[PROCESSED_ORDER_IDS],
        )

    def to_snapshot(self) -> PlannerSnapshot:
        return PlannerSnapshot(
            units=list(self.units.values()),
            lines=list(self.lines.values()),
            shifts=list(self.shifts.values()),
            orders=list(self.orders.values()),
            scheduled_blocks=list(self.blocks.values()),
            processed_order_ids=sorted(self.processed_order_ids),
        )

    def to_collections(self) -> dict[str, list[Any]]:
        """Dump every collection in its stored (camelCase JSON) shape."""
        dumped = self.to_snapshot().model_dump(mode="json", by_alias=True)
        return {name: dumped[name] for name in COLLECTION_NAMES}

    # ---------------------------------------------------------------
    # Lookups
    # ---------------------------------------------------------------

    def get_unit(self, unit_id: str) -> Unit | None:
        return self.units.get(unit_id)

    def get_line(self, line_id: str) -> Line | None:
        return self.lines.get(line_id)

    def get_shift(self, shift_id: str) -> Shift | None:
        return self.shifts.get(shift_id)

    def get_order(self, order_id: str) -> Order | None:
        return self.orders.get(order_id)

    def get_block(self, block_id: str) -> ScheduledBlock | None:
        return self.blocks.get(block_id)

    def unit_name(self, unit_id: str) -> str:
        unit = self.units.get(unit_id)
        return unit.name if unit else UNKNOWN_UNIT

    def line_name(self, line_id: str) -> str:
        line = self.lines.get(line_id)
        return line.name if line else UNKNOWN_LINE

    def shift_name(self, shift_id: str) -> str:
        shift = self.shifts.get(shift_id)
        return shift.name if shift else UNKNOWN_SHIFT

    def lines_for_unit(self, unit_id: str) -> list[Line]:
        return [ln for ln in self.lines.values() if ln.unit_id == unit_id]

    def blocks_for_order(self, order_id: str) -> list[ScheduledBlock]:
        return [b for b in self.blocks.values() if b.order_id == order_id]

    def blocks_for_line(self, line_id: str) -> list[ScheduledBlock]:
        return [b for b in self.blocks.values() if b.line_id == line_id]

    def blocks_for_slot(self, line_id: str, day: date) -> list[ScheduledBlock]:
        return [b for b in self.blocks.values() if b.line_id == line_id and b.date == day]

    def scheduled_order_ids(self) -> set[str]:
        return {b.order_id for b in self.blocks.values()}

    def _require(self, collection: Mapping[str, _E], entity_id: str, kind: str) -> _E:
        entity = collection.get(entity_id)
        if entity is None:
            raise EntityNotFoundError(kind, entity_id)
        return entity

    # ---------------------------------------------------------------
    # Units
    # ---------------------------------------------------------------

    def add_unit(self, payload: UnitCreate) -> Unit:
        unit = Unit(id=new_id(), **payload.model_dump())
        self.units[unit.id] = unit
        return unit

    def update_unit(self, unit_id: str, payload: UnitCreate) -> Unit:
        self._require(self.units, unit_id, "Unit")
        unit = Unit(id=unit_id, **payload.model_dump())
        self.units[unit_id] = unit
        return unit

    def delete_unit(self, unit_id: str) -> list[str]:
        """Delete a unit and its lines; returns the removed line ids."""
        self._require(self.units, unit_id, "Unit")
        removed = [ln.id for ln in self.lines_for_unit(unit_id)]
        for line_id in removed:
            self.delete_line(line_id)
        del self.units[unit_id]
        logger.info("Deleted unit %s with %d line(s)", unit_id, len(removed))
        return removed

    # ---------------------------------------------------------------
    # Lines
    # ---------------------------------------------------------------

    def add_line(self, payload: LineCreate) -> Line:
        if payload.unit_id not in self.units:
            raise PlannerValidationError(f"Unit {payload.unit_id} does not exist")
        line = Line(id=new_id(), **payload.model_dump())
        self.lines[line.id] = line
        return line

    def update_line(self, line_id: str, payload: LineCreate) -> Line:
        current = self._require(self.lines, line_id, "Line")
        if payload.unit_id not in self.units:
            raise PlannerValidationError(f"Unit {payload.unit_id} does not exist")
        if payload.unit_id != current.unit_id and any(
            line_id in o.assigned_line_ids for o in self.orders.values()
        ):
            raise PlannerValidationError(
                f"Line {line_id} is assigned to orders and cannot move to another unit"
            )
        line = Line(id=line_id, **payload.model_dump())
        self.lines[line_id] = line
        return line

    def delete_line(self, line_id: str) -> int:
        """Delete a line, its blocks, and its id from every order; returns blocks removed."""
        self._require(self.lines, line_id, "Line")
        removed = self.remove_blocks(lambda b: b.line_id == line_id)
        for order in self.orders.values():
            if line_id in order.assigned_line_ids:
                order.assigned_line_ids = [i for i in order.assigned_line_ids if i != line_id]
        del self.lines[line_id]
        return removed

    # ---------------------------------------------------------------
    # Shifts
    # ---------------------------------------------------------------

    def add_shift(self, payload: ShiftCreate) -> Shift:
        shift = Shift(id=new_id(), **payload.model_dump())
        self.shifts[shift.id] = shift
        return shift

    def update_shift(self, shift_id: str, payload: ShiftCreate) -> Shift:
        self._require(self.shifts, shift_id, "Shift")
        shift = Shift(id=shift_id, **payload.model_dump())
        self.shifts[shift_id] = shift
        return shift

    def delete_shift(self, shift_id: str) -> None:
        self._require(self.shifts, shift_id, "Shift")
        del self.shifts[shift_id]

    # ---------------------------------------------------------------
    # Orders
    # ---------------------------------------------------------------

    def _validate_order(self, payload: OrderCreate, order_no: str, order_id: str | None) -> None:
        if payload.unit_id not in self.units:
            raise PlannerValidationError(f"Unit {payload.unit_id} does not exist")
        if payload.shift_id not in self.shifts:
            raise PlannerValidationError(f"Shift {payload.shift_id} does not exist")
        for line_id in payload.assigned_line_ids:
            line = self.lines.get(line_id)
            if line is None:
                raise PlannerValidationError(f"Line {line_id} does not exist")
            if line.unit_id != payload.unit_id:
                raise PlannerValidationError(
                    f"Line {line_id} does not belong to unit {payload.unit_id}"
                )
        if any(o.order_no == order_no and o.id != order_id for o in self.orders.values()):
            raise PlannerValidationError(f"Order number {order_no!r} is already in use")

    def add_order(self, payload: OrderCreate) -> Order:
        order_no = payload.order_no or generate_order_no()
        self._validate_order(payload, order_no, None)
        order = Order(id=new_id(), **payload.model_dump(exclude={"order_no"}), order_no=order_no)
        self.orders[order.id] = order
        return order

    def update_order(self, order_id: str, payload: OrderCreate) -> Order:
        """Replace an order's fields.

        Quantity, unit and assigned lines are the allocator's inputs, so they
        are frozen while the order has blocks.
        """
        current = self._require(self.orders, order_id, "Order")
        order_no = payload.order_no or current.order_no
        self._validate_order(payload, order_no, order_id)

        blocks = self.blocks_for_order(order_id)
        if blocks and (
            payload.quantity != current.quantity
            or payload.unit_id != current.unit_id
            or payload.assigned_line_ids != current.assigned_line_ids
        ):
            raise PlannerValidationError(
                f"Order {current.order_no} is scheduled; unschedule it before changing "
                "quantity, unit or lines"
            )

        order = Order(id=order_id, **payload.model_dump(exclude={"order_no"}), order_no=order_no)
        self.orders[order_id] = order
        for block in blocks:
            block.style_name = order.style_name
            block.order_no = order.order_no
        return order

    def delete_order(self, order_id: str) -> int:
        """Delete an order with its blocks and processed mark; returns blocks removed."""
        self._require(self.orders, order_id, "Order")
        removed = self.remove_blocks(lambda b: b.order_id == order_id)
        del self.orders[order_id]
        self.processed_order_ids.discard(order_id)
        return removed

    # ---------------------------------------------------------------
    # Blocks
    # ---------------------------------------------------------------

    def add_blocks(self, blocks: Iterable[ScheduledBlock]) -> None:
        for block in blocks:
            self.blocks[block.block_id] = block

    def remove_blocks(self, predicate: Callable[[ScheduledBlock], bool]) -> int:
        doomed = [bid for bid, b in self.blocks.items() if predicate(b)]
        for block_id in doomed:
            del self.blocks[block_id]
        return len(doomed)

    def remove_block(self, block_id: str) -> bool:
        """Delete a single block; the owning order keeps its processed mark."""
        return self.remove_blocks(lambda b: b.block_id == block_id) > 0

    def clear_blocks(self) -> int:
        """Drop every block; processed marks are kept."""
        count = len(self.blocks)
        self.blocks.clear()
        return count
