"""Bank-transfer payment proofs submitted by businesses."""
from __future__ import annotations

import logging
from typing import Sequence

from app import metrics
from app.core.exceptions import InvalidBankAccountError, InvoiceNotPayableError
from app.models.billing_models import (
    BankAccount,
    BillingInvoiceStatus,
    BillingPayment,
    BillingPaymentStatus,
)

from .base import BaseBillingService
from .subscription_service import SubscriptionService

logger = logging.getLogger(__name__)

_CLOSED_INVOICE_STATUSES = frozenset({BillingInvoiceStatus.PAID, BillingInvoiceStatus.CANCELLED})


def list_active_bank_accounts(db) -> Sequence[BankAccount]:
    """Receiving accounts businesses may transfer to, newest first."""
    return (
        db.query(BankAccount)
        .filter(BankAccount.is_active.is_(True))
        .order_by(BankAccount.created_at.desc(), BankAccount.id.desc())
        .all()
    )


class BillingPaymentService(BaseBillingService):

    def submit(
        self,
        *,
        invoice_id: int,
        bank_name: str,
        account_number: str,
        account_name: str,
        transaction_reference: str,
        payer_name: str,
        payer_phone: str | None = None,
        payer_email: str | None = None,
        notes: str | None = None,
    ) -> BillingPayment:
        """
        Record a payment proof against one of the business's invoices.

        The amount is always the invoice total; the transfer must name an
        active platform bank account by bank name and account number.

        Raises:
            BillingInvoiceNotFoundError: invoice missing or owned by another business
            InvoiceNotPayableError: invoice already paid or cancelled
            InvalidBankAccountError: no active account matches
        """
        invoice = SubscriptionService(self.db, self.business_id).get_invoice(invoice_id)
        if invoice.status in _CLOSED_INVOICE_STATUSES:
            raise InvoiceNotPayableError(invoice.id, invoice.status.value)

        selected = next(
            (
                account
                for account in list_active_bank_accounts(self.db)
                if account.bank_name == bank_name and account.account_number == account_number
            ),
            None,
        )
        if selected is None:
            logger.warning(
                "Payment for invoice %s rejected: unknown bank account %s/%s",
                invoice_id,
                bank_name,
                account_number,
            )
            raise InvalidBankAccountError(bank_name, account_number)

        payment = BillingPayment(
            invoice_id=invoice.id,
            business_id=self.business_id,
            amount=invoice.total,
            bank_name=bank_name,
            account_number=account_number,
            account_name=account_name,
            payment_method="bank_transfer",
            transaction_reference=transaction_reference,
            payer_name=payer_name,
            payer_phone=payer_phone,
            payer_email=payer_email,
            notes=notes,
            status=BillingPaymentStatus.PENDING,
        )
        self.db.add(payment)
        # A resubmission after a rejected proof puts the invoice back in review
        if invoice.status is BillingInvoiceStatus.REJECTED:
            invoice.status = BillingInvoiceStatus.PENDING
        self.db.commit()
        self.db.refresh(payment)

        metrics.payment_submitted()
        logger.info(
            "Payment %s submitted for invoice %s by business %s (ref %s)",
            payment.id,
            invoice.invoice_number,
            self.business_id,
            transaction_reference,
        )
        return payment

    def list(self) -> Sequence[BillingPayment]:
        return (
            self.db.query(BillingPayment)
            .filter(BillingPayment.business_id == self.business_id)
            .order_by(BillingPayment.created_at.desc(), BillingPayment.id.desc())
            .all()
        )
