from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "CafePOS Billing"
    ENV: str = "dev"
    DATABASE_URL: str | None = None

    # Billing
    CURRENCY: str = "ETB"
    FRONTEND_URL: str = "http://localhost:3000"
    BILLING_CHECKOUT_PATH: str = "/dashboard/billing"
    INVOICE_DUE_DAYS: int = 7  # days between invoice creation and due date
    DEFAULT_PLAN: str = "basic"  # plan used when a subscription is auto-created

    # Super-admin console key for payment verification
    ADMIN_API_KEY: str = "change_me_admin"

    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "plain"
    SENTRY_DSN: str | None = None

    RATE_LIMIT_STORAGE_URI: str = "memory://"
    PRICING_RATE_LIMIT: str = "120/minute"

    @field_validator("INVOICE_DUE_DAYS")
    @classmethod
    def _due_days_positive(cls, v: int) -> int:
        if v < 0:
            raise ValueError("INVOICE_DUE_DAYS must not be negative")
        return v

    @field_validator("DEFAULT_PLAN", "CURRENCY", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _validate_required_fields(self) -> BaseAppSettings:
        # Convert Heroku's postgres:// URL to postgresql://
        if self.DATABASE_URL and self.DATABASE_URL.startswith("postgres://"):
            self.DATABASE_URL = self.DATABASE_URL.replace("postgres://", "postgresql://", 1)

        if self.ENV.lower() == "prod":
            if not self.DATABASE_URL:
                raise ValueError("Missing required production settings: DATABASE_URL")
            if self.ADMIN_API_KEY == "change_me_admin":
                raise ValueError("Insecure default secrets in production: ADMIN_API_KEY uses default placeholder")
        return self


class DevSettings(BaseAppSettings):
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite:///./dev.db"


class TestSettings(BaseAppSettings):
    ENV: str = "test"
    DATABASE_URL: str = "sqlite:///:memory:"
    ADMIN_API_KEY: str = "test-admin-key"
    PRICING_RATE_LIMIT: str = "1000/minute"


class ProdSettings(BaseAppSettings):
    ENV: str = "prod"
    CORS_ALLOW_ORIGINS: list[str] = [
        "https://cafepos.et",
        "https://www.cafepos.et",
        "http://localhost:3000",  # Local development
    ]
    FRONTEND_URL: str = "https://cafepos.et"
    LOG_FORMAT: str = "json"


_ENV_TO_SETTINGS: dict[str, type[BaseAppSettings]] = {
    "dev": DevSettings,
    "development": DevSettings,
    "test": TestSettings,
    "testing": TestSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
}


@lru_cache
def get_settings() -> BaseAppSettings:
    env_name = os.getenv("APP_ENV") or os.getenv("ENV") or "dev"
    env = env_name.lower()
    settings_cls = _ENV_TO_SETTINGS.get(env, DevSettings)
    return settings_cls()


settings = get_settings()
