# app/repositories/service_repo.py
import uuid

from sqlmodel import Session, col, select

from app.models.service import Service


class ServiceRepository:
    """
    Data access layer for Service.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, service_id: uuid.UUID) -> Service | None:
        return session.get(Service, service_id)

    def list_services(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        only_active: bool = True,
        search: str = "",
    ) -> list[Service]:
        """
        Catalog listing ordered by name. `search` matches name or
        description, case-insensitively.
        """
        stmt = select(Service)
        if only_active:
            stmt = stmt.where(Service.is_active == True)  # noqa: E712
        if search:
            term = f"%{search}%"
            stmt = stmt.where(
                col(Service.name).ilike(term) | col(Service.description).ilike(term)
            )
        stmt = stmt.order_by(Service.name).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def create(self, session: Session, service: Service) -> Service:
        session.add(service)
        session.commit()
        session.refresh(service)
        return service

    def update(self, session: Session, service: Service) -> Service:
        session.add(service)
        session.commit()
        session.refresh(service)
        return service

    def list_by_ids(
        self,
        session: Session,
        service_ids: set[uuid.UUID],
    ) -> list[Service]:
        """Bulk lookup, active or not, used to resolve names on orders."""
        if not service_ids:
            return []
        stmt = select(Service).where(col(Service.id).in_(list(service_ids)))
        return list(session.exec(stmt).all())
