# app/repositories/stats_repo.py
from sqlmodel import Session, select

from app.models.order import Order
from app.models.service import Service
from app.models.user import User


class StatsRepository:
    """
    Read-only bulk loads for the admin dashboard.

    The dashboard aggregates in memory, so these return whole tables in
    insertion-stable order (ranking ties fall back to this order).
    """

    def all_orders(self, session: Session) -> list[Order]:
        stmt = select(Order).order_by(Order.created_at)
        return list(session.exec(stmt).all())

    def all_users(self, session: Session) -> list[User]:
        stmt = select(User).order_by(User.created_at)
        return list(session.exec(stmt).all())

    def all_services(self, session: Session) -> list[Service]:
        """
        Includes inactive services so historical orders still resolve.
        """
        stmt = select(Service).order_by(Service.created_at)
        return list(session.exec(stmt).all())
