"""Unit Pydantic schemas."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class UnitCreate(BaseModel):
    """Schema for creating or updating a unit."""

    name: str = Field(..., min_length=1, max_length=100)
    location: str | None = Field(default=None, max_length=200)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class Unit(UnitCreate):
    """A factory unit as held in the entity store."""

    id: str


class UnitResponse(Unit):
    """Schema for unit responses."""

    line_count: int = 0
