# app/services/order_service.py
import logging
import uuid
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.order import Order
from app.repositories.order_repo import OrderRepository
from app.repositories.service_repo import ServiceRepository
from app.repositories.user_repo import UserRepository
from app.schemas.order import OrderCreate, OrderStatusUpdate
from app.services.stats_aggregator import filter_orders

logger = logging.getLogger(__name__)

# pending -> in_progress -> completed, cancellable until completed
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"in_progress", "cancelled"},
    "in_progress": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Validate the requested service (exists, active) and pickup date
      - Snapshot total_price and estimate delivery
      - Customer history and admin listing with filter/search
      - Enforce status transitions (admin)
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        service_repo: ServiceRepository,
        user_repo: UserRepository,
    ):
        self.order_repo = order_repo
        self.service_repo = service_repo
        self.user_repo = user_repo

    # -------- Customer operations --------

    def create_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: OrderCreate,
        now: datetime | None = None,
    ) -> Order:
        """
        Place an order for one service.

        Steps:
          1. Pickup date must not be before today (UTC).
          2. Service must exist and be active.
          3. total_price = price * quantity, frozen on the order.
          4. estimated_delivery = pickup_date + delivery_days.
        """
        now = now or datetime.now(timezone.utc)
        pickup = payload.pickup_date
        if pickup.tzinfo is None:
            pickup = pickup.replace(tzinfo=timezone.utc)

        if pickup.astimezone(timezone.utc).date() < now.date():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Pickup date cannot be in the past",
            )

        service = self.service_repo.get_by_id(session, payload.service_id)
        if not service:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Service not found",
            )
        if not service.is_active:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Service is no longer offered",
            )

        order = Order(
            user_id=user_id,
            service_id=service.id,
            status="pending",
            quantity=payload.quantity,
            total_price=round(service.price * payload.quantity, 2),
            pickup_date=pickup,
            estimated_delivery=pickup + timedelta(days=service.delivery_days),
            special_instructions=payload.special_instructions,
        )
        order = self.order_repo.create_order(session, order)
        session.commit()
        session.refresh(order)

        logger.info(
            "Order %s placed by %s for service %s (qty=%d, total=%.2f)",
            order.id,
            user_id,
            service.id,
            order.quantity,
            order.total_price,
        )
        return order

    def list_user_orders(
        self,
        session: Session,
        user_id: uuid.UUID,
        order_status: str = "all",
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        """
        The user's own orders, newest first, optionally by status.
        """
        return self.order_repo.list_for_user(
            session,
            user_id,
            status=None if order_status == "all" else order_status,
            skip=skip,
            limit=limit,
        )

    def get_user_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        order_id: uuid.UUID,
    ) -> Order:
        """
        404 if the order does not exist or belongs to someone else.
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order or order.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return order

    # -------- Admin operations --------

    def list_all_orders(
        self,
        session: Session,
        order_status: str = "all",
        search: str = "",
    ) -> list[Order]:
        """
        All orders, newest first, filtered with the same status/search
        rules as the dashboard.
        """
        orders = self.order_repo.list_all(session)
        if order_status == "all" and not search:
            return orders

        users = self.user_repo.list_by_ids(session, {o.user_id for o in orders})
        services = self.service_repo.list_by_ids(session, {o.service_id for o in orders})
        return filter_orders(
            orders,
            {u.id: u for u in users},
            {s.id: s for s in services},
            status=order_status,
            search=search,
        )

    def update_status(
        self,
        session: Session,
        order_id: uuid.UUID,
        payload: OrderStatusUpdate,
    ) -> Order:
        """
        Admin-only status update with a simple state machine:

          pending     -> in_progress, cancelled
          in_progress -> completed, cancelled
          completed   -> (no change)
          cancelled   -> (no change)

        Any invalid transition raises 400.
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )

        current = order.status
        new = payload.status

        if current == new:
            return order

        if new not in ALLOWED_TRANSITIONS.get(current, set()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status transition: {current} -> {new}",
            )

        order.status = new
        order.updated_at = datetime.now(timezone.utc)
        self.order_repo.update_order(session, order)
        session.commit()
        session.refresh(order)

        logger.info("Order %s moved %s -> %s", order.id, current, new)
        return order
