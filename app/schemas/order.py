# app/schemas/order.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

OrderStatus = Literal["pending", "in_progress", "completed", "cancelled"]
StatusFilter = Literal["all", "pending", "in_progress", "completed", "cancelled"]


class OrderCreate(SQLModel):
    """
    Payload for placing an order.

    User provides:
      - service_id
      - quantity
      - pickup_date
      - special_instructions (optional)

    Backend derives:
      - user_id from token
      - status = 'pending'
      - total_price = service.price * quantity
      - estimated_delivery from service.delivery_days
    """

    model_config = ConfigDict(extra="forbid")

    service_id: uuid.UUID
    quantity: int = Field(ge=1)
    pickup_date: datetime
    special_instructions: str | None = None

    @field_validator("special_instructions")
    @classmethod
    def normalize_instructions(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class OrderRead(SQLModel):
    """
    Order representation returned to clients.
    """

    id: uuid.UUID
    user_id: uuid.UUID
    service_id: uuid.UUID
    status: OrderStatus
    quantity: int
    total_price: float
    pickup_date: datetime
    estimated_delivery: datetime | None
    special_instructions: str | None
    created_at: datetime
    updated_at: datetime


class OrderStatusUpdate(SQLModel):
    """
    Admin payload to change order status.
    """

    model_config = ConfigDict(extra="forbid")

    status: OrderStatus
