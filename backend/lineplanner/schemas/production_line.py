"""Production line Pydantic schemas."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class LineCreate(BaseModel):
    """Schema for creating or updating a production line."""

    name: str = Field(..., min_length=1, max_length=100)
    unit_id: str
    daily_capacity: int = Field(..., ge=0, description="Pieces producible per calendar day")

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class Line(LineCreate):
    """A production line as held in the entity store."""

    id: str


class LineResponse(Line):
    """Schema for production line responses."""

    unit_name: str
