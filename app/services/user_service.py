# app/services/user_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserCreate, UserUpdate, UserRoleUpdate

logger = logging.getLogger(__name__)


class UserService:
    """
    Customer profiles and the admin user directory.

    Email belongs to Supabase Auth and is never rewritten here; roles
    change only through an admin.
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    @staticmethod
    def _apply_profile(user: User, payload: UserCreate | UserUpdate) -> None:
        # None means "leave as is"; preferences cannot be cleared back to null
        changes = payload.model_dump(exclude_unset=True, exclude={"email"})
        for field, value in changes.items():
            if value is not None:
                setattr(user, field, value)

    # ----- Self profile -----

    def create_me(
        self,
        session: Session,
        current_user: User,
        payload: UserCreate,
    ) -> User:
        """
        First-time profile completion.

        The row already exists (auto-provisioned by the auth dependency);
        this only fills editable fields. A mismatching email is a 400.
        """
        if payload.email and payload.email != current_user.email:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email cannot be changed",
            )

        self._apply_profile(current_user, payload)
        return self.repo.update(session, current_user)

    def update_me(
        self,
        session: Session,
        current_user: User,
        payload: UserUpdate,
    ) -> User:
        self._apply_profile(current_user, payload)
        return self.repo.update(session, current_user)

    # ----- Admin operations -----

    def list_users(
        self,
        session: Session,
        role: str | None = None,
        search: str = "",
        skip: int = 0,
        limit: int = 50,
    ) -> list[User]:
        return self.repo.list_users(
            session, role=role, search=search, skip=skip, limit=limit
        )

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def update_role(
        self,
        session: Session,
        acting_admin: User,
        user_id: uuid.UUID,
        payload: UserRoleUpdate,
    ) -> User:
        """
        Promote or demote a user.

        An admin cannot demote themselves (400).
        """
        if user_id == acting_admin.id and payload.role != "admin":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Admins cannot demote themselves",
            )

        user = self.get_user(session, user_id)
        previous = user.role
        user.role = payload.role
        user = self.repo.update(session, user)
        if previous != user.role:
            logger.info(
                "User %s role changed %s -> %s by %s",
                user.id,
                previous,
                user.role,
                acting_admin.id,
            )
        return user
