import uuid
from datetime import datetime, timedelta, timezone

from faker import Faker
from sqlmodel import Session

from app.models.order import Order
from app.models.service import Service
from app.models.user import User

fake = Faker()


def build_user(
    name: str | None = None,
    email: str | None = None,
    role: str = "customer",
    created_at: datetime | None = None,
) -> User:
    """Unsaved User with random identity unless given."""
    return User(
        id=uuid.uuid4(),
        email=email or fake.unique.email(),
        name=name or fake.first_name(),
        role=role,
        created_at=created_at or datetime.now(timezone.utc),
    )


def build_service(
    name: str | None = None,
    description: str | None = None,
    price: float = 20.0,
    is_active: bool = True,
    delivery_days: int = 2,
    created_at: datetime | None = None,
) -> Service:
    return Service(
        id=uuid.uuid4(),
        name=name or f"{fake.word().title()} cleaning",
        description=description,
        price=price,
        is_active=is_active,
        delivery_days=delivery_days,
        created_at=created_at or datetime.now(timezone.utc),
    )


def build_order(
    user_id: uuid.UUID,
    service_id: uuid.UUID,
    status: str = "pending",
    quantity: int = 1,
    total_price: float = 20.0,
    created_at: datetime | None = None,
    pickup_date: datetime | None = None,
) -> Order:
    created_at = created_at or datetime.now(timezone.utc)
    return Order(
        id=uuid.uuid4(),
        user_id=user_id,
        service_id=service_id,
        status=status,
        quantity=quantity,
        total_price=total_price,
        created_at=created_at,
        updated_at=created_at,
        pickup_date=pickup_date or created_at + timedelta(days=1),
    )


def persist(session: Session, *rows):
    """Insert rows, commit, and return them refreshed."""
    for row in rows:
        session.add(row)
    session.commit()
    for row in rows:
        session.refresh(row)
    return rows
