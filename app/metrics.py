"""Metrics facade.

Service code should ONLY call the semantic helpers here so the metrics
backend can change without touching billing logic.

Metrics:
- pricing_quotes_total                 Price quotes served, by plan and interval
- billing_subscriptions_created_total  Subscriptions opened, by plan and cycle
- billing_subscriptions_cancelled_total
- billing_payments_submitted_total     Bank-transfer proofs submitted
- billing_payments_reviewed_total      Super-admin reviews, by outcome
"""

from __future__ import annotations

import logging

from prometheus_client import Counter

logger = logging.getLogger("metrics")

_PRICING_QUOTES = Counter("pricing_quotes_total", "Price quotes served", ["plan", "interval"])
_SUBSCRIPTIONS_CREATED = Counter(
    "billing_subscriptions_created_total", "Subscriptions created", ["plan", "billing_cycle"]
)
_SUBSCRIPTIONS_CANCELLED = Counter("billing_subscriptions_cancelled_total", "Subscriptions cancelled")
_PAYMENTS_SUBMITTED = Counter("billing_payments_submitted_total", "Payment proofs submitted")
_PAYMENTS_REVIEWED = Counter("billing_payments_reviewed_total", "Payment proofs reviewed", ["outcome"])


def pricing_quote(plan: str, interval: str) -> None:
    _PRICING_QUOTES.labels(plan=plan, interval=interval).inc()


def subscription_created(plan: str, billing_cycle: str) -> None:
    _SUBSCRIPTIONS_CREATED.labels(plan=plan, billing_cycle=billing_cycle).inc()
    logger.debug("metric subscription_created plan=%s cycle=%s", plan, billing_cycle)


def subscription_cancelled() -> None:
    _SUBSCRIPTIONS_CANCELLED.inc()


def payment_submitted() -> None:
    _PAYMENTS_SUBMITTED.inc()


def payment_reviewed(outcome: str) -> None:
    _PAYMENTS_REVIEWED.labels(outcome=outcome).inc()
    logger.debug("metric payment_reviewed outcome=%s", outcome)
