# app/models/user.py
import uuid
from datetime import date, datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Persistent customer/admin profile.

    Identity:
      - id: MUST match Supabase auth.users.id (UUID from JWT "sub")

    Role:
      - "customer" | "admin"
      - anonymous visitors have no row and no token.

    Passwords live in Supabase Auth; this table only mirrors identity,
    contact details and the application role.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        primary_key=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    email: str = Field(
        unique=True,
        index=True,
        description="Email from Supabase auth.users",
    )

    name: str = Field(
        max_length=50,
        description="Customer display name; first part of email by default",
    )

    phone: str | None = Field(
        default=None,
        max_length=30,
        description="Optional contact phone for pickups",
    )

    address: str | None = Field(
        default=None,
        description="Optional default pickup address",
    )

    # Profile preferences
    gender: str | None = Field(default=None, max_length=10)
    date_of_birth: date | None = None
    membership_level: str = Field(default="standard", max_length=10)
    preferred_language: str = Field(default="en", max_length=5)
    notification_preferences: bool = True
    promotional_emails: bool = False

    # Application role (not Supabase RLS role)
    role: str = Field(
        default="customer",
        index=True,
        description="Application role: customer | admin",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Sign-up timestamp (UTC)",
    )
