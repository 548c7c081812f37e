import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

_initialized = False


def init_monitoring() -> None:
    """Initialise Sentry once per process when a DSN is configured."""
    global _initialized
    if _initialized:
        return
    dsn = settings.SENTRY_DSN
    if dsn:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration

        try:
            sentry_sdk.init(
                dsn=dsn,
                integrations=[FastApiIntegration()],
                traces_sample_rate=0.1,
                environment=settings.ENV,
                release=f"cafepos-billing@{settings.ENV}",
            )
            logger.info("Sentry initialized")
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to init Sentry: %s", exc)
    _initialized = True
