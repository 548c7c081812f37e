"""Payment proof and bank account endpoints."""
import logging

from fastapi import APIRouter

from app.api.dependencies import BusinessIdDep, DbDep
from app.models.schemas.billing import (
    BankAccountOut,
    BillingPaymentOut,
    Envelope,
    ListEnvelope,
    PaymentSubmit,
)
from app.services.billing import list_active_bank_accounts

from .dependencies import PaymentServiceDep

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/payments", response_model=Envelope[BillingPaymentOut], status_code=201)
def submit_payment(payload: PaymentSubmit, service: PaymentServiceDep):
    """
    Submit bank-transfer proof for an invoice.

    The payment amount is taken from the invoice, never from the request.
    """
    payment = service.submit(**payload.model_dump())
    return Envelope[BillingPaymentOut](data=BillingPaymentOut.model_validate(payment))


@router.get("/payments", response_model=ListEnvelope[BillingPaymentOut])
def list_payments(service: PaymentServiceDep):
    payments = [BillingPaymentOut.model_validate(p) for p in service.list()]
    return ListEnvelope[BillingPaymentOut](count=len(payments), data=payments)


@router.get("/bank-accounts", response_model=ListEnvelope[BankAccountOut])
def list_bank_accounts(db: DbDep, _business_id: BusinessIdDep):
    """Active platform accounts a business can transfer its subscription fee to."""
    accounts = [BankAccountOut.model_validate(a) for a in list_active_bank_accounts(db)]
    return ListEnvelope[BankAccountOut](count=len(accounts), data=accounts)
