from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.db import session as db_session  # noqa: E402
from app.db.base_class import Base  # noqa: E402
from app.db.session import SessionLocal  # noqa: E402
from app.models.billing_models import BankAccount, Business  # noqa: E402

test_engine = db_session.engine

assert settings.ENV == "test", "tests must run with APP_ENV=test"


@pytest.fixture(autouse=True)
def _reset_database_state():
    """Ensure each test sees a fresh database schema."""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def business_factory(db):
    """Factory to create tenant businesses."""
    counter = {"n": 0}

    def _create(**overrides) -> Business:
        counter["n"] += 1
        data = {"name": f"Cafe {counter['n']}", "slug": f"cafe-{counter['n']}", "is_active": False}
        data.update(overrides)
        business = Business(**data)
        db.add(business)
        db.commit()
        db.refresh(business)
        return business

    return _create


@pytest.fixture
def business(business_factory) -> Business:
    return business_factory(name="Abebe Coffee", slug="abebe-coffee")


@pytest.fixture
def bank_account(db) -> BankAccount:
    account = BankAccount(
        bank_name="Commercial Bank of Ethiopia",
        account_number="1000123456789",
        account_name="CafePOS PLC",
        branch="Bole",
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture
def client() -> TestClient:
    from app.api.main import app

    return TestClient(app)


@pytest.fixture
def tenant_headers(business) -> dict[str, str]:
    return {"X-Business-ID": str(business.id)}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Key": settings.ADMIN_API_KEY}
