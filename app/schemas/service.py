# app/schemas/service.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ServiceCreate(SQLModel):
    """
    Payload for creating a service (admin only).
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100, min_length=3)
    description: str | None = None
    price: float = Field(ge=0)
    delivery_days: int = Field(default=2, ge=0)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("name must be at least 3 characters")
        return v


class ServiceRead(SQLModel):
    """
    Service representation for clients.
    """

    id: uuid.UUID
    name: str
    description: str | None
    price: float
    delivery_days: int
    is_active: bool
    image_url: str | None
    created_at: datetime


class ServiceUpdate(SQLModel):
    """
    Partial update payload for services.
    All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100, min_length=3)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    delivery_days: int | None = Field(default=None, ge=0)
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 3:
            raise ValueError("name must be at least 3 characters")
        return v
