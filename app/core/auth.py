# app/core/auth.py
import logging
import uuid
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from app.core.config import get_settings
from app.database import get_session
from app.models.user import User

settings = get_settings()
logger = logging.getLogger(__name__)

# auto_error=False: a missing Authorization header yields None so public
# routes can share the same dependency chain.
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def _default_name(email: str, metadata: dict[str, Any] | None) -> str:
    """
    Prefer the name given at sign-up (user_metadata.name), else the
    local part of the email.
    """
    name = (metadata or {}).get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()[:50]
    if "@" in email:
        return email.split("@", 1)[0]
    return email


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from a Supabase JWT.

    Flow:
      1. No Authorization header => anonymous => None.
      2. Decode JWT => 'sub', 'email', 'user_metadata'.
      3. Load the profile from public.users, auto-provisioning a
         'customer' row on first sight.

    Raises:
        HTTPException(401): if token is malformed or missing required claims.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    email = payload.get("email")

    if not sub or not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub/email",
        )

    try:
        sub_uuid = uuid.UUID(sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )

    user = session.get(User, sub_uuid)

    # Admins are promoted manually; everyone starts as a customer.
    if user is None:
        user = User(
            id=sub_uuid,
            email=email,
            name=_default_name(email, payload.get("user_metadata")),
            role="customer",
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        logger.info("Provisioned customer profile %s", user.id)

    return user


def require_auth(user: User | None = Depends(get_current_user)) -> User:
    """
    Reject anonymous requests with 401.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Only role='admin' may pass; others get 403.
    """
    if user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


def require_customer(user: User = Depends(require_auth)) -> User:
    """
    Only role='customer' may pass (placing orders, own history).
    Admins are rejected with 403.
    """
    if user.role != "customer":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Customer access required",
        )
    return user
