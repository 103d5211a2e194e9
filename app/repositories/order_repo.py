# app/repositories/order_repo.py
import uuid

from sqlmodel import Session, select

from app.models.order import Order


class OrderRepository:
    """
    Data access layer for orders.

    NOTE:
      - No commits here; the service decides when a change is complete
        and calls session.commit().
    """

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        status: str | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Order]:
        stmt = select(Order).where(Order.user_id == user_id)
        if status is not None:
            stmt = stmt.where(Order.status == status)
        stmt = stmt.order_by(Order.created_at.desc()).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def list_all(self, session: Session) -> list[Order]:
        """
        Every order, newest first. Admin filtering/search runs in memory.
        """
        stmt = select(Order).order_by(Order.created_at.desc())
        return list(session.exec(stmt).all())

    def get_by_id(self, session: Session, order_id: uuid.UUID) -> Order | None:
        return session.get(Order, order_id)

    def create_order(self, session: Session, order: Order) -> Order:
        """
        Insert an Order without committing, but ensure id is populated.
        """
        session.add(order)
        session.flush()  # Assign PK
        session.refresh(order)
        return order

    def update_order(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.flush()
        session.refresh(order)
        return order
