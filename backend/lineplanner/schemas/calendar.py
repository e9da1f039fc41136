"""Calendar view Pydantic schemas."""

import datetime as dt

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from lineplanner.schemas.schedule import ScheduledBlock

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class CalendarBlock(ScheduledBlock):
    """A block as rendered in a calendar cell."""

    color: str


class CalendarCell(BaseModel):
    """One day of a line's month view."""

    date: dt.date
    is_weekend: bool
    blocks: list[CalendarBlock] = Field(default_factory=list)
    used: int = 0
    total: int = 0
    conflict: bool = False

    model_config = _CAMEL


class CalendarMonth(BaseModel):
    """Month grid for one line; ``None`` cells pad the first week."""

    line_id: str
    line_name: str
    year: int
    month: int
    days: list[CalendarCell | None] = Field(default_factory=list)

    model_config = _CAMEL
