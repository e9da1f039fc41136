"""Pydantic v2 schemas for request/response validation."""

from lineplanner.schemas.calendar import CalendarBlock, CalendarCell, CalendarMonth
from lineplanner.schemas.order import Order, OrderCreate, OrderResponse, OrderStatus
from lineplanner.schemas.production_line import Line, LineCreate, LineResponse
from lineplanner.schemas.schedule import (
    AttentionItem,
    BlockMove,
    CapacityUsage,
    ScheduledBlock,
    SlotAssignment,
    SyncResult,
)
from lineplanner.schemas.shift import Shift, ShiftCreate, ShiftResponse
from lineplanner.schemas.snapshot import PlannerSnapshot
from lineplanner.schemas.unit import Unit, UnitCreate, UnitResponse

__all__ = [
    "AttentionItem",
    "BlockMove",
    "CalendarBlock",
    "CalendarCell",
    "CalendarMonth",
    "CapacityUsage",
    "Line",
    "LineCreate",
    "LineResponse",
    "Order",
    "OrderCreate",
    "OrderResponse",
    "OrderStatus",
    "PlannerSnapshot",
    "ScheduledBlock",
    "Shift",
    "ShiftCreate",
    "ShiftResponse",
    "SlotAssignment",
    "SyncResult",
    "Unit",
    "UnitCreate",
    "UnitResponse",
]
