"""Tenant and subscription billing models."""
from __future__ import annotations

import datetime as dt
import enum
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.db.base_class import Base


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class SubscriptionStatus(str, enum.Enum):
    PENDING = "pending"       # Created, invoice awaiting payment
    ACTIVE = "active"         # Paid period in progress
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class BillingInvoiceStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"
    REJECTED = "rejected"     # Payment proof rejected by super admin


class BillingPaymentStatus(str, enum.Enum):
    PENDING = "pending"       # Proof submitted, awaiting super-admin review
    VERIFIED = "verified"
    REJECTED = "rejected"
    REFUNDED = "refunded"


class Business(Base):
    """A tenant of the platform; one cafe or restaurant."""
    __tablename__ = "businesses"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), unique=True, nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    subscriptions: Mapped[list["Subscription"]] = relationship(back_populates="business")

    def __repr__(self) -> str:
        return f"<Business(id={self.id}, slug={self.slug}, active={self.is_active})>"


class Subscription(Base):
    __tablename__ = "subscriptions"

    id: Mapped[int] = mapped_column(primary_key=True)
    business_id: Mapped[int] = mapped_column(ForeignKey("businesses.id"), nullable=False, index=True)
    business: Mapped[Business] = relationship(back_populates="subscriptions")

    plan: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[SubscriptionStatus] = mapped_column(
        Enum(SubscriptionStatus), default=SubscriptionStatus.PENDING, nullable=False, index=True
    )
    billing_cycle: Mapped[str] = mapped_column(String(10), nullable=False)
    """``month`` or ``year``"""

    daily_rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    """VAT-inclusive daily price at the time of subscribing"""

    start_date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    invoices: Mapped[list["BillingInvoice"]] = relationship(back_populates="subscription")


class BillingInvoice(Base):
    """Invoice the platform issues to a business for one subscription period."""
    __tablename__ = "billing_invoices"

    id: Mapped[int] = mapped_column(primary_key=True)
    invoice_number: Mapped[str] = mapped_column(String(40), unique=True, nullable=False, index=True)
    business_id: Mapped[int] = mapped_column(ForeignKey("businesses.id"), nullable=False, index=True)
    subscription_id: Mapped[int] = mapped_column(ForeignKey("subscriptions.id"), nullable=False)
    subscription: Mapped[Subscription] = relationship(back_populates="invoices")

    plan: Mapped[str] = mapped_column(String(40), nullable=False)
    billing_cycle: Mapped[str] = mapped_column(String(10), nullable=False)
    days: Mapped[int] = mapped_column(Integer, nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    vat_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    vat_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    discount: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0"), nullable=False)
    discount_percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0"), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    status: Mapped[BillingInvoiceStatus] = mapped_column(
        Enum(BillingInvoiceStatus), default=BillingInvoiceStatus.PENDING, nullable=False, index=True
    )

    period_start: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    period_end: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    due_date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    paid_date: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )


class BankAccount(Base):
    """Platform bank account that businesses transfer subscription fees to."""
    __tablename__ = "bank_accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    bank_name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_number: Mapped[str] = mapped_column(String(40), unique=True, nullable=False)
    account_name: Mapped[str] = mapped_column(String(200), nullable=False)
    branch: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class BillingPayment(Base):
    """Bank-transfer payment proof submitted against a billing invoice."""
    __tablename__ = "billing_payments"

    id: Mapped[int] = mapped_column(primary_key=True)
    invoice_id: Mapped[int] = mapped_column(ForeignKey("billing_invoices.id"), nullable=False, index=True)
    business_id: Mapped[int] = mapped_column(ForeignKey("businesses.id"), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)

    bank_name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_number: Mapped[str] = mapped_column(String(40), nullable=False)
    account_name: Mapped[str] = mapped_column(String(200), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(30), default="bank_transfer", nullable=False)

    transaction_reference: Mapped[str] = mapped_column(String(100), nullable=False)
    payer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    payer_phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    payer_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[BillingPaymentStatus] = mapped_column(
        Enum(BillingPaymentStatus), default=BillingPaymentStatus.PENDING, nullable=False, index=True
    )
    verified_by: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    verified_at: Mapped[Optional[dt.datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<BillingPayment(id={self.id}, invoice_id={self.invoice_id}, status={self.status})>"
