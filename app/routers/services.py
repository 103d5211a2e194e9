# app/routers/services.py
import uuid

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Query,
    UploadFile,
    status,
)
from sqlmodel import Session

from app.core.auth import get_current_user, require_admin
from app.database import get_session
from app.models.user import User
from app.repositories.service_repo import ServiceRepository
from app.schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from app.services.catalog_service import CatalogService

router = APIRouter(prefix="/services", tags=["Services"])

repo = ServiceRepository()
service = CatalogService(repo)


# -------- Public endpoints --------


@router.get("", response_model=list[ServiceRead])
def list_services(
    session: Session = Depends(get_session),
    current_user: User | None = Depends(get_current_user),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    only_active: bool = True,
    search: str = "",
):
    """
    Catalog listing, optionally narrowed by a name/description search.

    Retired services are listed only for admins (`only_active=false`).
    """
    if not only_active and (current_user is None or current_user.role != "admin"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required to list inactive services",
        )

    return service.list_services(
        session, skip=skip, limit=limit, only_active=only_active, search=search
    )


@router.get("/{service_id}", response_model=ServiceRead)
def get_service(
    service_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """Get a single service by id (public)."""
    return service.get_service(session, service_id)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=ServiceRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_service(
    payload: ServiceCreate,
    session: Session = Depends(get_session),
):
    """Create a new service (admin only)."""
    return service.create_service(session, payload)


@router.patch(
    "/{service_id}",
    response_model=ServiceRead,
    dependencies=[Depends(require_admin)],
)
def update_service(
    service_id: uuid.UUID,
    payload: ServiceUpdate,
    session: Session = Depends(get_session),
):
    """
    Update an existing service (admin only).

    Price changes never touch existing orders.
    """
    return service.update_service(session, service_id, payload)


@router.delete(
    "/{service_id}",
    response_model=ServiceRead,
    dependencies=[Depends(require_admin)],
)
def deactivate_service(
    service_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Retire a service (admin only).

    The row is kept with is_active=False so order history still resolves.
    """
    return service.deactivate_service(session, service_id)


@router.post(
    "/{service_id}/image",
    response_model=ServiceRead,
    dependencies=[Depends(require_admin)],
    summary="Upload or replace the cover image of a service",
)
def upload_service_image(
    service_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """
    Upload a cover image.

    - Accepts JPEG, PNG, WEBP up to 5MB.
    - Replaces any previous image.
    """
    if not file.content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing content-type for uploaded file",
        )

    return service.set_image(
        session=session,
        service_id=service_id,
        content_type=file.content_type,
        file_bytes=file.file.read(),
    )
