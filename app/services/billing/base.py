"""
Base billing service with shared tenant scoping.

Every tenant-facing billing service works on behalf of exactly one
business; the business id is injected alongside the session.
"""
from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import BusinessNotFoundError
from app.models.billing_models import Business

logger = logging.getLogger(__name__)


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class BaseBillingService:
    def __init__(self, db: Session, business_id: int):
        """
        Args:
            db: SQLAlchemy database session
            business_id: Tenant the caller acts for
        """
        self._db = db
        self._business_id = business_id

    @property
    def db(self) -> Session:
        return self._db

    @property
    def business_id(self) -> int:
        return self._business_id

    def require_business(self) -> Business:
        business = self._db.get(Business, self._business_id)
        if business is None:
            raise BusinessNotFoundError(self._business_id)
        return business
