# app/schemas/user.py
import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

# App-level roles. Anonymous visitors have no token, so no role is stored.
Role = Literal["customer", "admin"]
Gender = Literal["male", "female", "other"]
MembershipLevel = Literal["standard", "premium", "vip"]
Language = Literal["en", "ar"]


def _strip_optional(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    return v or None


def _normalize_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty")
    return v


class UserBase(SQLModel):
    """
    Shared fields for read models.

    Validation rules:
      - email must be a valid EmailStr
      - name cannot be empty or whitespace
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    name: str = Field(max_length=50)
    phone: str | None = None
    address: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return _normalize_name(v)


class UserCreate(SQLModel):
    """
    Payload for first-time profile completion (after Supabase sign-up).

    We allow optional email only for cross-check; it must match token email.
    """

    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    name: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return _normalize_name(v)

    @field_validator("phone", "address")
    @classmethod
    def normalize_contact(cls, v: str | None) -> str | None:
        return _strip_optional(v)


class UserRead(UserBase):
    """Response schema returned to clients."""

    id: uuid.UUID
    role: Role
    gender: Gender | None = None
    date_of_birth: date | None = None
    membership_level: MembershipLevel = "standard"
    preferred_language: Language = "en"
    notification_preferences: bool = True
    promotional_emails: bool = False
    created_at: datetime


class UserUpdate(SQLModel):
    """
    Partial profile update for authenticated users.

    Contact details plus preferences; omitted fields are left untouched.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=50)
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = None
    gender: Gender | None = None
    date_of_birth: date | None = None
    membership_level: MembershipLevel | None = None
    preferred_language: Language | None = None
    notification_preferences: bool | None = None
    promotional_emails: bool | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return _normalize_name(v)

    @field_validator("phone", "address")
    @classmethod
    def normalize_contact(cls, v: str | None) -> str | None:
        return _strip_optional(v)

    @field_validator("date_of_birth")
    @classmethod
    def not_in_future(cls, v: date | None) -> date | None:
        if v is not None and v > date.today():
            raise ValueError("date_of_birth cannot be in the future")
        return v


class UserRoleUpdate(SQLModel):
    """
    Admin-only role update schema.
    """

    model_config = ConfigDict(extra="forbid")
    role: Role
