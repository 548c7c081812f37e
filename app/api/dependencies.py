"""Common request dependencies: database session, tenant, super-admin key."""
import hmac
from typing import Annotated, TypeAlias

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import AdminAccessDeniedError, BusinessIdMissingError
from app.db.session import get_db

DbDep: TypeAlias = Annotated[Session, Depends(get_db)]


def get_business_id(
    x_business_id: Annotated[str | None, Header()] = None,
) -> int:
    """
    Tenant the request acts for.

    The upstream gateway authenticates the user and forwards their default
    business as ``X-Business-ID``; a missing or malformed value means the
    user has no business set up.
    """
    if not x_business_id or not x_business_id.strip().isdigit():
        raise BusinessIdMissingError()
    return int(x_business_id)


BusinessIdDep: TypeAlias = Annotated[int, Depends(get_business_id)]


def require_super_admin(
    x_admin_key: Annotated[str | None, Header()] = None,
) -> str:
    """Gate for the super-admin console endpoints."""
    if not x_admin_key or not hmac.compare_digest(x_admin_key, settings.ADMIN_API_KEY):
        raise AdminAccessDeniedError()
    return "super_admin"


SuperAdminDep: TypeAlias = Annotated[str, Depends(require_super_admin)]
