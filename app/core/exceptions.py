"""Custom exception hierarchy for CafePOS billing.

Every domain error carries a stable code, an HTTP status and optional
details so the API layer can render it without knowing its type.

Error codes follow pattern: [CATEGORY][NUMBER]
- PRC: Pricing errors (001-099)
- BIL: Billing errors (100-199)
- ADM: Admin errors (200-299)
"""

from __future__ import annotations

from typing import Any


class CafePOSException(Exception):
    """Base exception for all CafePOS application errors."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception with user-facing message and metadata.

        Args:
            message: User-facing error message
            code: Unique error code (e.g., "PRC001")
            status_code: HTTP status code (default: 400 Bad Request)
            details: Optional additional context
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response format."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }


# ============================================================================
# PRICING ERRORS (PRC001-099)
# ============================================================================

class PricingError(CafePOSException):
    """Base class for pricing errors."""
    pass


class UnknownPlanError(PricingError):
    """Plan id is not in the pricing catalogue."""

    def __init__(self, plan_id: str):
        super().__init__(
            message=f"Invalid plan: '{plan_id}'",
            code="PRC001",
            status_code=404,
            details={"plan": plan_id},
        )


class InvalidBillingIntervalError(PricingError):
    """Billing interval is neither monthly nor yearly."""

    def __init__(self, interval: str):
        super().__init__(
            message=f"Invalid billing cycle: '{interval}'",
            code="PRC002",
            status_code=400,
            details={"billing_cycle": interval, "allowed": ["month", "year"]},
        )


# ============================================================================
# BILLING ERRORS (BIL100-199)
# ============================================================================

class BillingError(CafePOSException):
    """Base class for subscription, invoice and payment errors."""
    pass


class BusinessIdMissingError(BillingError):
    def __init__(self):
        super().__init__(message="Business ID not found", code="BIL100", status_code=400)


class BusinessNotFoundError(BillingError):
    def __init__(self, business_id: int):
        super().__init__(
            message=f"Business {business_id} not found",
            code="BIL101",
            status_code=404,
            details={"business_id": business_id},
        )


class SubscriptionNotFoundError(BillingError):
    def __init__(self, subscription_id: int | None = None):
        super().__init__(
            message="Subscription not found",
            code="BIL102",
            status_code=404,
            details={"subscription_id": subscription_id} if subscription_id else {},
        )


class SubscriptionAlreadyExistsError(BillingError):
    """Auto-creation refused because the business already has a subscription."""

    def __init__(self, business_id: int):
        super().__init__(
            message="Subscription already exists",
            code="BIL103",
            status_code=409,
            details={"business_id": business_id},
        )


class BillingInvoiceNotFoundError(BillingError):
    def __init__(self, invoice_id: int | None = None):
        super().__init__(
            message="Invoice not found",
            code="BIL104",
            status_code=404,
            details={"invoice_id": invoice_id} if invoice_id else {},
        )


class InvalidBankAccountError(BillingError):
    """Payment references a bank account that is not an active receiving account."""

    def __init__(self, bank_name: str, account_number: str):
        super().__init__(
            message="Invalid bank account selected",
            code="BIL105",
            status_code=400,
            details={"bank_name": bank_name, "account_number": account_number},
        )


class PaymentNotFoundError(BillingError):
    def __init__(self, payment_id: int | None = None):
        super().__init__(
            message="Payment not found",
            code="BIL106",
            status_code=404,
            details={"payment_id": payment_id} if payment_id else {},
        )


class InvalidPaymentStatusError(BillingError):
    def __init__(self, status: str):
        super().__init__(
            message="Invalid status. Must be verified or rejected",
            code="BIL107",
            status_code=400,
            details={"status": status},
        )


class PaymentAlreadyReviewedError(BillingError):
    """Only pending payment proofs can be verified or rejected."""

    def __init__(self, payment_id: int, status: str):
        super().__init__(
            message=f"Payment already {status}",
            code="BIL108",
            status_code=409,
            details={"payment_id": payment_id, "status": status},
        )


class InvoiceNotPayableError(BillingError):
    """Payment proof submitted against a paid or cancelled invoice."""

    def __init__(self, invoice_id: int, status: str):
        super().__init__(
            message=f"Invoice is {status} and cannot accept payments",
            code="BIL109",
            status_code=409,
            details={"invoice_id": invoice_id, "status": status},
        )


class InvoiceNumberUnavailableError(BillingError):
    def __init__(self, attempts: int):
        super().__init__(
            message="Could not allocate a unique invoice number, please retry",
            code="BIL110",
            status_code=503,
            details={"attempts": attempts},
        )


# ============================================================================
# ADMIN ERRORS (ADM200-299)
# ============================================================================

class AdminAccessDeniedError(CafePOSException):
    def __init__(self):
        super().__init__(message="Super admin access required", code="ADM200", status_code=403)
