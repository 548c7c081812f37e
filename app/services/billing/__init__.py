"""
Subscription billing.

Usage:
    from app.services.billing import SubscriptionService, BillingPaymentService

    subscription, invoice = SubscriptionService(db, business_id).create("basic", "yearly")
    payment = BillingPaymentService(db, business_id).submit(invoice_id=invoice.id, ...)
    PaymentReviewService(db).review(payment.id, "verified")
"""
from .base import BaseBillingService
from .payment_service import BillingPaymentService, list_active_bank_accounts
from .review_service import PaymentReviewService
from .subscription_service import SubscriptionService

__all__ = [
    "BaseBillingService",
    "SubscriptionService",
    "BillingPaymentService",
    "PaymentReviewService",
    "list_active_bank_accounts",
]
