# app/routers/orders.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import require_customer, require_admin
from app.database import get_session
from app.models.user import User
from app.repositories.order_repo import OrderRepository
from app.repositories.service_repo import ServiceRepository
from app.repositories.user_repo import UserRepository
from app.schemas.order import (
    OrderCreate,
    OrderRead,
    OrderStatusUpdate,
    StatusFilter,
)
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
service_repo = ServiceRepository()
user_repo = UserRepository()
service = OrderService(order_repo, service_repo, user_repo)


# -------- Customer endpoints --------


@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
)
def place_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_customer),
):
    """
    Place an order for one service.

    The price is taken from the service at this moment and frozen on the order.
    """
    return service.create_order(session, current_user.id, payload)


@router.get("/me", response_model=list[OrderRead])
def list_my_orders(
    order_status: StatusFilter = Query(default="all", alias="status"),
    skip: int = 0,
    limit: int = 50,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_customer),
):
    """
    Order history of the authenticated customer, newest first.
    """
    return service.list_user_orders(
        session, current_user.id, order_status=order_status, skip=skip, limit=limit
    )


@router.get("/me/{order_id}", response_model=OrderRead)
def get_my_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_customer),
):
    """Get a single order belonging to the current customer."""
    return service.get_user_order(session, current_user.id, order_id)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[OrderRead],
    dependencies=[Depends(require_admin)],
)
def list_all_orders(
    order_status: StatusFilter = Query(default="all", alias="status"),
    search: str = "",
    session: Session = Depends(get_session),
):
    """
    List all orders (admin only), newest first.

    - status: exact status or "all"
    - search: order id, customer name, service name or status (case-insensitive)
    """
    return service.list_all_orders(session, order_status=order_status, search=search)


@router.patch(
    "/{order_id}/status",
    response_model=OrderRead,
    dependencies=[Depends(require_admin)],
)
def update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Update order status (admin only).

      pending     -> in_progress, cancelled

      in_progress -> completed, cancelled

      completed   -> (no change)

      cancelled   -> (no change)
    """
    return service.update_status(session, order_id, payload)
