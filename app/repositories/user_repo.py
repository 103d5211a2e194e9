# app/repositories/user_repo.py
import uuid

from sqlmodel import Session, col, select

from app.models.user import User


class UserRepository:
    """
    Queries over customer and admin profiles. Commits on update; no HTTP.
    """

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        return session.get(User, user_id)

    def list_users(
        self,
        session: Session,
        role: str | None = None,
        search: str = "",
        skip: int = 0,
        limit: int = 50,
    ) -> list[User]:
        """
        Admin directory, oldest accounts first.

        `search` is a case-insensitive substring of name or email.
        """
        stmt = select(User)
        if role is not None:
            stmt = stmt.where(User.role == role)
        if search:
            term = f"%{search}%"
            stmt = stmt.where(col(User.name).ilike(term) | col(User.email).ilike(term))
        stmt = stmt.order_by(User.created_at).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def list_by_ids(self, session: Session, user_ids: set[uuid.UUID]) -> list[User]:
        """Resolve the customers behind a batch of orders."""
        if not user_ids:
            return []
        stmt = select(User).where(col(User.id).in_(list(user_ids)))
        return list(session.exec(stmt).all())

    def update(self, session: Session, user: User) -> User:
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
