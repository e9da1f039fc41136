"""Shift Pydantic schemas."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# HH:MM on a 24h clock
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ShiftCreate(BaseModel):
    """Schema for creating or updating a shift.

    ``end_time`` earlier than (or equal to) ``start_time`` denotes a shift
    that runs past midnight.
    """

    name: str = Field(..., min_length=1, max_length=100)
    start_time: str = Field(..., pattern=TIME_PATTERN, examples=["08:00"])
    end_time: str = Field(..., pattern=TIME_PATTERN, examples=["16:00"])

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class Shift(ShiftCreate):
    """A shift as held in the entity store."""

    id: str


class ShiftResponse(Shift):
    """Schema for shift responses, with derived duration."""

    duration_hours: float
    overnight: bool
