"""Snapshot Pydantic schemas for exporting the planner collections."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from lineplanner.schemas.order import Order
from lineplanner.schemas.production_line import Line
from lineplanner.schemas.schedule import ScheduledBlock
from lineplanner.schemas.shift import Shift
from lineplanner.schemas.unit import Unit


class PlannerSnapshot(BaseModel):
    """Every persisted collection, in the stored JSON shape."""

    units: list[Unit] = Field(default_factory=list)
    lines: list[Line] = Field(default_factory=list)
    shifts: list[Shift] = Field(default_factory=list)
    orders: list[Order] = Field(default_factory=list)
    scheduled_blocks: list[ScheduledBlock] = Field(default_factory=list)
    processed_order_ids: list[str] = Field(default_factory=list)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
