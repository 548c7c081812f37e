"""Billing request/response schemas.

Responses keep the ``{success, data}`` envelope the dashboard billing page
already consumes.
"""
from __future__ import annotations

import datetime as dt
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.billing_models import (
    BillingInvoiceStatus,
    BillingPaymentStatus,
    SubscriptionStatus,
)

T = TypeVar("T")


class _OrmOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ----------------- Requests -----------------

class SubscriptionCreate(BaseModel):
    plan: str = Field(min_length=1, max_length=40, description="Catalogue plan id, e.g. 'basic'")
    billing_cycle: str = Field(description="month | year (monthly | yearly accepted)")


class PaymentSubmit(BaseModel):
    invoice_id: int
    bank_name: str = Field(min_length=1, max_length=100)
    account_number: str = Field(min_length=1, max_length=40)
    account_name: str = Field(min_length=1, max_length=200)
    transaction_reference: str = Field(min_length=1, max_length=100)
    payer_name: str = Field(min_length=1, max_length=200)
    payer_phone: str | None = Field(None, max_length=30)
    payer_email: EmailStr | None = None
    notes: str | None = None


class PaymentReview(BaseModel):
    status: Literal["verified", "rejected"]


# ----------------- Responses -----------------

class SubscriptionOut(_OrmOut):
    id: int
    business_id: int
    plan: str
    status: SubscriptionStatus
    billing_cycle: str
    daily_rate: float
    start_date: dt.datetime
    end_date: dt.datetime
    created_at: dt.datetime


class BillingInvoiceOut(_OrmOut):
    id: int
    invoice_number: str
    subscription_id: int
    plan: str
    billing_cycle: str
    days: int
    subtotal: float
    vat_rate: float
    vat_amount: float
    discount: float
    discount_percent: float
    total: float
    status: BillingInvoiceStatus
    period_start: dt.datetime
    period_end: dt.datetime
    due_date: dt.datetime
    paid_date: dt.datetime | None = None
    created_at: dt.datetime


class BankAccountOut(_OrmOut):
    id: int
    bank_name: str
    account_number: str
    account_name: str
    branch: str | None = None


class BillingPaymentOut(_OrmOut):
    id: int
    invoice_id: int
    amount: float
    bank_name: str
    account_number: str
    account_name: str
    payment_method: str
    transaction_reference: str
    payer_name: str
    payer_phone: str | None = None
    payer_email: str | None = None
    status: BillingPaymentStatus
    verified_at: dt.datetime | None = None
    created_at: dt.datetime


class SubscriptionWithInvoice(BaseModel):
    subscription: SubscriptionOut
    invoice: BillingInvoiceOut


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T
    message: str | None = None


class ListEnvelope(BaseModel, Generic[T]):
    success: bool = True
    count: int
    data: list[T]


class PaymentReviewOut(BaseModel):
    id: int
    status: BillingPaymentStatus
    invoice_id: int
