# app/models/service.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Service(SQLModel, table=True):
    """
    Catalog entry for a cleaning offering (shirt laundering, suit dry-clean...).

    `price` is the *current* price. Orders snapshot their own total_price,
    so changing it never rewrites history.

    Services are never hard-deleted: deactivating one hides it from the
    storefront while old orders keep pointing at it.
    """

    __tablename__ = "services"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=100,
        min_length=3,
        index=True,
        description="Display name of the service",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    price: float = Field(
        ge=0,
        description="Current unit price",
    )

    delivery_days: int = Field(
        default=2,
        ge=0,
        description="Turnaround in days from pickup to delivery",
    )

    is_active: bool = Field(
        default=True,
        index=True,
        description="Whether new orders may use this service",
    )

    image_url: str | None = Field(
        default=None,
        description="Public URL stored in Supabase Storage",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
