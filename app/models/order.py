# app/models/order.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint
from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order for a single service.

    total_price is fixed at creation (service.price * quantity) and stays
    authoritative even if the service price changes later.
    """

    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed', 'cancelled')",
            name="ck_orders_status",
        ),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    service_id: uuid.UUID = Field(
        foreign_key="services.id",
        index=True,
    )

    # pending | in_progress | completed | cancelled
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )

    quantity: int = Field(
        gt=0,
        description="Number of items handed in (>=1)",
    )

    total_price: float = Field(
        ge=0,
        description="Price snapshot at creation time",
    )

    pickup_date: datetime = Field(
        description="Requested pickup instant (may be in the future)",
    )

    estimated_delivery: datetime | None = Field(
        default=None,
        description="pickup_date + service.delivery_days",
    )

    special_instructions: str | None = Field(
        default=None,
        description="Optional note (stains, fabric care...)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last status change (UTC)",
    )
