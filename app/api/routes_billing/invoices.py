"""Billing invoice endpoints."""
from fastapi import APIRouter

from app.models.schemas.billing import BillingInvoiceOut, Envelope, ListEnvelope

from .dependencies import SubscriptionServiceDep

router = APIRouter()


@router.get("/invoices", response_model=ListEnvelope[BillingInvoiceOut])
def list_invoices(service: SubscriptionServiceDep):
    invoices = [BillingInvoiceOut.model_validate(inv) for inv in service.list_invoices()]
    return ListEnvelope[BillingInvoiceOut](count=len(invoices), data=invoices)


@router.get("/invoices/{invoice_id}", response_model=Envelope[BillingInvoiceOut])
def get_invoice(invoice_id: int, service: SubscriptionServiceDep):
    return Envelope[BillingInvoiceOut](data=BillingInvoiceOut.model_validate(service.get_invoice(invoice_id)))
