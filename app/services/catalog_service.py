# app/services/catalog_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.storage_utils import upload_to_storage, delete_public_url
from app.models.service import Service
from app.repositories.service_repo import ServiceRepository
from app.schemas.service import ServiceCreate, ServiceUpdate


# --- Image config ---

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB

ALLOWED_IMAGE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class CatalogService:
    """
    Business logic for the dry-cleaning service catalog.

    Responsibilities:
      - validation beyond pydantic
      - soft deletion (deactivate) so old orders keep resolving
      - cover image upload orchestration with Supabase Storage
    """

    def __init__(self, repo: ServiceRepository):
        self.repo = repo

    @staticmethod
    def _validate_and_get_ext(content_type: str, file_bytes: bytes) -> str:
        if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Unsupported image type. Allowed: JPEG, PNG, WEBP.",
            )

        if len(file_bytes) > MAX_IMAGE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Image too large (max 5MB).",
            )

        return ALLOWED_IMAGE_CONTENT_TYPES[content_type]

    # ----- Services -----

    def list_services(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        only_active: bool = True,
        search: str = "",
    ) -> list[Service]:
        return self.repo.list_services(
            session, skip=skip, limit=limit, only_active=only_active, search=search
        )

    def get_service(self, session: Session, service_id: uuid.UUID) -> Service:
        service = self.repo.get_by_id(session, service_id)
        if not service:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Service not found",
            )
        return service

    def create_service(self, session: Session, payload: ServiceCreate) -> Service:
        service = Service(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            delivery_days=payload.delivery_days,
            is_active=payload.is_active,
        )
        return self.repo.create(session, service)

    def update_service(
        self,
        session: Session,
        service_id: uuid.UUID,
        payload: ServiceUpdate,
    ) -> Service:
        """
        Partial update. A new price only affects future orders.
        """
        service = self.get_service(session, service_id)

        for field, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(service, field, value)

        return self.repo.update(session, service)

    def deactivate_service(self, session: Session, service_id: uuid.UUID) -> Service:
        """
        Hide a service from new orders. Rows are never deleted because
        historical orders reference them.
        """
        service = self.get_service(session, service_id)
        service.is_active = False
        return self.repo.update(session, service)

    # ----- Cover image -----

    def set_image(
        self,
        session: Session,
        service_id: uuid.UUID,
        content_type: str,
        file_bytes: bytes,
    ) -> Service:
        """
        Upload or replace the cover image.

        Path pattern:
            services/<service_id>/cover.<ext>
        """
        service = self.get_service(session, service_id)
        ext = self._validate_and_get_ext(content_type, file_bytes)

        # The old extension may differ, so the previous object is removed first
        if service.image_url:
            delete_public_url(service.image_url)

        path = f"services/{service.id}/cover.{ext}"
        service.image_url = upload_to_storage(path, file_bytes, content_type)
        return self.repo.update(session, service)
