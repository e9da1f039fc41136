"""Schedule Pydantic schemas."""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from lineplanner.schemas.order import OrderStatus

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class ScheduledBlock(BaseModel):
    """Part of an order's quantity allocated to one line on one date.

    ``kind`` is ``"split"`` for blocks produced by the multi-day allocator
    and ``"whole"`` for a single-slot assignment of the full quantity.
    """

    block_id: str
    order_id: str
    line_id: str
    date: dt.date
    allocated_quantity: int = Field(..., gt=0)
    style_name: str
    order_no: str
    kind: Literal["split", "whole"] = "split"

    model_config = _CAMEL


class BlockMove(BaseModel):
    """Schema for a drag-and-drop move of a block."""

    new_line_id: str
    new_date: dt.date

    model_config = _CAMEL


class SlotAssignment(BaseModel):
    """Schema for assigning a whole order to one line and date."""

    line_id: str
    date: dt.date

    model_config = _CAMEL


class SyncResult(BaseModel):
    """Outcome of one automatic scheduling pass."""

    created: list[ScheduledBlock] = Field(default_factory=list)
    scheduled_order_ids: list[str] = Field(default_factory=list)
    unschedulable: list[str] = Field(
        default_factory=list, description="Orders whose assigned lines have zero capacity"
    )

    model_config = _CAMEL


class CapacityUsage(BaseModel):
    """Used vs. total capacity for one (line, date) slot."""

    line_id: str
    date: dt.date
    used: int
    total: int
    order_ids: list[str] = Field(default_factory=list)
    conflict: bool = False

    model_config = _CAMEL

    @property
    def overbooked(self) -> bool:
        return self.used > self.total


class AttentionItem(BaseModel):
    """An order the automatic path could not (or no longer does) cover."""

    order_id: str
    order_no: str
    status: OrderStatus
    reason: str

    model_config = _CAMEL
