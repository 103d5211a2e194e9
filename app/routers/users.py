# app/routers/users.py
import uuid

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.core.auth import require_auth, require_admin
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import Role, UserRead, UserCreate, UserUpdate, UserRoleUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
service = UserService(repo)


# -------- Own profile --------


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """Profile of the caller, provisioned on first sight of their token."""
    return current_user


@router.post("/me", response_model=UserRead)
def complete_profile(
    payload: UserCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Fill in name, phone and pickup address right after sign-up.
    """
    return service.create_me(session, current_user, payload)


@router.patch("/me", response_model=UserRead)
def update_me(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Edit contact details and preferences (gender, date of birth,
    membership level, language, notification and promotional opt-ins).
    """
    return service.update_me(session, current_user, payload)


# -------- Customer directory (admin) --------


@router.get(
    "",
    response_model=list[UserRead],
    dependencies=[Depends(require_admin)],
)
def list_users(
    session: Session = Depends(get_session),
    role: Role | None = None,
    search: str = "",
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
):
    """Filter by role and by a name/email substring."""
    return service.list_users(
        session, role=role, search=search, skip=skip, limit=limit
    )


@router.get(
    "/{user_id}",
    response_model=UserRead,
    dependencies=[Depends(require_admin)],
)
def get_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_user(session, user_id)


@router.patch("/{user_id}/role", response_model=UserRead)
def change_role(
    user_id: uuid.UUID,
    payload: UserRoleUpdate,
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    """
    Switch a user between customer and admin.
    """
    return service.update_role(session, admin, user_id, payload)
