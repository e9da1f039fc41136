"""Order Pydantic schemas."""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class OrderStatus(str, Enum):
    """Scheduling state of an order, derived from blocks and the processed set."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    UNSCHEDULABLE = "unschedulable"
    UNASSIGNED = "unassigned"
    PARTIAL = "partial"


class OrderCreate(BaseModel):
    """Schema for creating or updating an order.

    A blank ``order_no`` is replaced by a generated one on creation.
    """

    order_no: str = Field(default="", max_length=50)
    style_name: str = Field(..., min_length=1, max_length=200)
    quantity: int = Field(..., gt=0)
    delivery_date: dt.date
    unit_id: str
    assigned_line_ids: list[str] = Field(..., min_length=1)
    shift_id: str

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("order_no")
    @classmethod
    def _strip_order_no(cls, value: str) -> str:
        return value.strip()

    @field_validator("assigned_line_ids")
    @classmethod
    def _dedupe_lines(cls, value: list[str]) -> list[str]:
        # Keep first occurrence; list order is the allocation order.
        return list(dict.fromkeys(value))


class Order(OrderCreate):
    """An order as held in the entity store.

    Assigned lines may be empty once every line of the order was deleted;
    such an order is unschedulable until it is edited.
    """

    id: str
    order_no: str = Field(..., min_length=1, max_length=50)
    assigned_line_ids: list[str] = Field(default_factory=list)


class OrderResponse(Order):
    """Schema for order responses with resolved labels and schedule state."""

    status: OrderStatus
    unit_name: str
    shift_name: str
    line_names: list[str] = Field(default_factory=list)
    scheduled_quantity: int = 0
