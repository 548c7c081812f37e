"""Subscriptions and the billing invoices they generate."""
from __future__ import annotations

import datetime as dt
import logging
from typing import Sequence

from sqlalchemy.exc import IntegrityError

from app import metrics
from app.core.config import settings
from app.core.exceptions import (
    BillingInvoiceNotFoundError,
    InvoiceNumberUnavailableError,
    SubscriptionAlreadyExistsError,
    SubscriptionNotFoundError,
)
from app.models.billing_models import (
    BillingInvoice,
    BillingInvoiceStatus,
    Subscription,
    SubscriptionStatus,
)
from app.services.pricing import BillingInterval, build_breakdown, get_plan, parse_interval
from app.utils.id_generator import generate_invoice_number

from .base import BaseBillingService, utcnow

logger = logging.getLogger(__name__)

_INVOICE_NUMBER_ATTEMPTS = 5


class SubscriptionService(BaseBillingService):
    """Opens, reads and cancels a business's subscriptions."""

    def get_current(self) -> Subscription | None:
        """Most recently created subscription, whatever its status."""
        return (
            self.db.query(Subscription)
            .filter(Subscription.business_id == self.business_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
            .first()
        )

    def create(self, plan_id: str, billing_cycle: str | BillingInterval) -> tuple[Subscription, BillingInvoice]:
        """
        Open a pending subscription and issue its first invoice.

        The invoice total is the quoted price for the plan and interval;
        it is due ``INVOICE_DUE_DAYS`` after creation.

        Raises:
            UnknownPlanError, InvalidBillingIntervalError, BusinessNotFoundError,
            InvoiceNumberUnavailableError
        """
        plan = get_plan(plan_id)
        interval = parse_interval(billing_cycle)
        self.require_business()

        start = utcnow()
        end = start + dt.timedelta(days=interval.days)
        breakdown = build_breakdown(plan, interval).rounded()

        for _ in range(_INVOICE_NUMBER_ATTEMPTS):
            subscription = Subscription(
                business_id=self.business_id,
                plan=plan.id,
                status=SubscriptionStatus.PENDING,
                billing_cycle=interval.value,
                daily_rate=plan.daily_price,
                start_date=start,
                end_date=end,
            )
            self.db.add(subscription)
            self.db.flush()

            invoice = BillingInvoice(
                invoice_number=generate_invoice_number(start),
                business_id=self.business_id,
                subscription_id=subscription.id,
                plan=breakdown.plan,
                billing_cycle=breakdown.billing_cycle,
                days=breakdown.days,
                subtotal=breakdown.subtotal,
                vat_rate=breakdown.vat_rate,
                vat_amount=breakdown.vat_amount,
                discount=breakdown.discount_amount,
                discount_percent=breakdown.discount_percent,
                total=breakdown.total,
                status=BillingInvoiceStatus.PENDING,
                period_start=start,
                period_end=end,
                due_date=start + dt.timedelta(days=settings.INVOICE_DUE_DAYS),
            )
            self.db.add(invoice)
            try:
                self.db.commit()
            except IntegrityError:
                # invoice_number is unique; a concurrent create drew the same one
                self.db.rollback()
                logger.warning("Invoice number %s already taken, retrying", invoice.invoice_number)
                continue
            break
        else:
            raise InvoiceNumberUnavailableError(_INVOICE_NUMBER_ATTEMPTS)

        self.db.refresh(subscription)
        self.db.refresh(invoice)

        metrics.subscription_created(plan.id, interval.value)
        logger.info(
            "Created %s subscription %s for business %s (invoice %s, total %s)",
            interval.value,
            subscription.id,
            self.business_id,
            invoice.invoice_number,
            invoice.total,
        )
        return subscription, invoice

    def auto_create(self) -> tuple[Subscription, BillingInvoice]:
        """Subscribe a new business to the default plan, billed monthly."""
        if self.get_current() is not None:
            raise SubscriptionAlreadyExistsError(self.business_id)
        return self.create(settings.DEFAULT_PLAN, BillingInterval.MONTH)

    def cancel(self, subscription_id: int) -> Subscription:
        subscription = (
            self.db.query(Subscription)
            .filter(
                Subscription.id == subscription_id,
                Subscription.business_id == self.business_id,
            )
            .one_or_none()
        )
        if subscription is None:
            raise SubscriptionNotFoundError(subscription_id)

        subscription.status = SubscriptionStatus.CANCELLED
        self.db.commit()
        self.db.refresh(subscription)

        metrics.subscription_cancelled()
        logger.info("Cancelled subscription %s for business %s", subscription_id, self.business_id)
        return subscription

    def list_invoices(self) -> Sequence[BillingInvoice]:
        return (
            self.db.query(BillingInvoice)
            .filter(BillingInvoice.business_id == self.business_id)
            .order_by(BillingInvoice.created_at.desc(), BillingInvoice.id.desc())
            .all()
        )

    def get_invoice(self, invoice_id: int) -> BillingInvoice:
        invoice = (
            self.db.query(BillingInvoice)
            .filter(
                BillingInvoice.id == invoice_id,
                BillingInvoice.business_id == self.business_id,
            )
            .one_or_none()
        )
        if invoice is None:
            raise BillingInvoiceNotFoundError(invoice_id)
        return invoice

