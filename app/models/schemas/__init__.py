"""Pydantic schemas for API requests and responses.

Sub-modules:
- pricing: Plan catalogue and price breakdown schemas
- billing: Subscription, invoice and payment schemas
"""
# Pricing schemas
from .pricing import (
    PlanSelectionOut,
    PriceBreakdownOut,
    PricingPlanOut,
    PricingPlansOut,
)

# Billing schemas
from .billing import (
    BankAccountOut,
    BillingInvoiceOut,
    BillingPaymentOut,
    Envelope,
    ListEnvelope,
    PaymentReview,
    PaymentReviewOut,
    PaymentSubmit,
    SubscriptionCreate,
    SubscriptionOut,
    SubscriptionWithInvoice,
)

__all__ = [
    # Pricing
    "PlanSelectionOut",
    "PriceBreakdownOut",
    "PricingPlanOut",
    "PricingPlansOut",
    # Billing
    "BankAccountOut",
    "BillingInvoiceOut",
    "BillingPaymentOut",
    "Envelope",
    "ListEnvelope",
    "PaymentReview",
    "PaymentReviewOut",
    "PaymentSubmit",
    "SubscriptionCreate",
    "SubscriptionOut",
    "SubscriptionWithInvoice",
]
