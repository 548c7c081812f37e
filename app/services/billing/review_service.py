"""Super-admin review of submitted payment proofs."""
from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy.orm import Session

from app import metrics
from app.core.exceptions import (
    InvalidPaymentStatusError,
    InvoiceNotPayableError,
    PaymentAlreadyReviewedError,
    PaymentNotFoundError,
)
from app.models.billing_models import (
    BillingInvoice,
    BillingInvoiceStatus,
    BillingPayment,
    BillingPaymentStatus,
    Business,
    Subscription,
    SubscriptionStatus,
)
from app.services.pricing import parse_interval

from .base import utcnow

logger = logging.getLogger(__name__)

_REVIEW_OUTCOMES = {
    "verified": (BillingPaymentStatus.VERIFIED, BillingInvoiceStatus.PAID),
    "rejected": (BillingPaymentStatus.REJECTED, BillingInvoiceStatus.REJECTED),
}


class PaymentReviewService:
    """Not tenant-scoped: reviewers act across all businesses."""

    def __init__(self, db: Session):
        self.db = db

    def review(self, payment_id: int, status: str, reviewer: str = "super_admin") -> BillingPayment:
        """
        Verify or reject a pending payment proof.

        Verification marks the invoice paid, activates the business and
        starts a full paid period on its subscription. Rejection marks the
        invoice rejected so the business can resubmit.

        Raises:
            InvalidPaymentStatusError: status not verified/rejected
            PaymentNotFoundError: unknown payment id
            PaymentAlreadyReviewedError: payment is no longer pending
            InvoiceNotPayableError: verifying a proof for an invoice that is already paid
        """
        outcome = _REVIEW_OUTCOMES.get((status or "").lower())
        if outcome is None:
            raise InvalidPaymentStatusError(status)
        payment_status, invoice_status = outcome

        payment = self.db.get(BillingPayment, payment_id, with_for_update=True)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        if payment.status is not BillingPaymentStatus.PENDING:
            raise PaymentAlreadyReviewedError(payment_id, payment.status.value)

        invoice = self.db.get(BillingInvoice, payment.invoice_id)
        invoice_paid = invoice is not None and invoice.status is BillingInvoiceStatus.PAID
        if invoice_paid and payment_status is BillingPaymentStatus.VERIFIED:
            raise InvoiceNotPayableError(invoice.id, invoice.status.value)

        now = utcnow()
        payment.status = payment_status
        if payment_status is BillingPaymentStatus.VERIFIED:
            payment.verified_at = now
            payment.verified_by = reviewer

        # A duplicate proof rejected after another one was verified leaves the paid invoice alone
        if invoice is not None and not invoice_paid:
            invoice.status = invoice_status
            if invoice_status is BillingInvoiceStatus.PAID:
                invoice.paid_date = now
                self._activate(payment.business_id, invoice, now)

        self.db.commit()
        self.db.refresh(payment)

        metrics.payment_reviewed(payment_status.value)
        logger.info("Payment %s %s by %s", payment_id, payment_status.value, reviewer)
        return payment

    def _activate(self, business_id: int, invoice: BillingInvoice, now: dt.datetime) -> None:
        business = self.db.get(Business, business_id)
        if business is not None:
            business.is_active = True

        interval = parse_interval(invoice.billing_cycle)
        end = now + dt.timedelta(days=interval.days)
        subscription = invoice.subscription
        if subscription.status is SubscriptionStatus.PENDING:
            # First payment: the pending subscription becomes the paid period
            subscription.status = SubscriptionStatus.ACTIVE
            subscription.start_date = now
            subscription.end_date = end
            return

        # Subscription cancelled or lapsed before payment: open a new paid period on the same terms
        self.db.add(
            Subscription(
                business_id=business_id,
                plan=subscription.plan,
                status=SubscriptionStatus.ACTIVE,
                billing_cycle=subscription.billing_cycle,
                daily_rate=subscription.daily_rate,
                start_date=now,
                end_date=end,
            )
        )
