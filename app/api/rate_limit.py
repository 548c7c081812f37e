import logging

from prometheus_client import Counter
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

logger = logging.getLogger(__name__)

_PROM_RATE_LIMIT = Counter("cafepos_rate_limit_exceeded_events", "Rate limit exceeded events (handler invocations)")

# Public pricing pages are anonymous, so limits key on client address only
limiter = Limiter(key_func=get_remote_address, storage_uri=settings.RATE_LIMIT_STORAGE_URI)
logger.info("Rate limiter storage: %s", settings.RATE_LIMIT_STORAGE_URI.split("://", 1)[0])

RATE_LIMITS = {
    "pricing": settings.PRICING_RATE_LIMIT,
}


def increment_rate_limit_exceeded():
    _PROM_RATE_LIMIT.inc()
    logger.debug("Rate limit exceeded")
