from decimal import Decimal

import pytest

from app.core.exceptions import (
    BillingInvoiceNotFoundError,
    BusinessNotFoundError,
    InvalidBankAccountError,
    InvalidPaymentStatusError,
    InvoiceNotPayableError,
    InvoiceNumberUnavailableError,
    PaymentAlreadyReviewedError,
    PaymentNotFoundError,
    SubscriptionAlreadyExistsError,
    SubscriptionNotFoundError,
    UnknownPlanError,
)
from app.models.billing_models import (
    BillingInvoiceStatus,
    BillingPaymentStatus,
    Subscription,
    SubscriptionStatus,
)
from app.services.billing import (
    BillingPaymentService,
    PaymentReviewService,
    SubscriptionService,
    list_active_bank_accounts,
)


def _submit(db, business_id, invoice_id, **overrides):
    data = {
        "invoice_id": invoice_id,
        "bank_name": "Commercial Bank of Ethiopia",
        "account_number": "1000123456789",
        "account_name": "Abebe Coffee",
        "transaction_reference": "FT2410012345",
        "payer_name": "Abebe Kebede",
    }
    data.update(overrides)
    return BillingPaymentService(db, business_id).submit(**data)


def test_create_monthly_subscription_issues_invoice(db, business):
    subscription, invoice = SubscriptionService(db, business.id).create("basic", "monthly")

    assert subscription.status is SubscriptionStatus.PENDING
    assert subscription.plan == "basic"
    assert subscription.billing_cycle == "month"
    assert subscription.daily_rate == Decimal("100")

    assert invoice.invoice_number.startswith("INV-")
    assert invoice.subscription_id == subscription.id
    assert invoice.status is BillingInvoiceStatus.PENDING
    assert invoice.days == 30
    assert invoice.total == Decimal("3000.00")
    assert invoice.vat_amount == Decimal("391.30")
    assert invoice.discount == Decimal("0")
    assert (invoice.due_date - invoice.created_at).days in (6, 7)


def test_create_yearly_invoice_matches_quoted_total(db, business):
    _, invoice = SubscriptionService(db, business.id).create("basic", "year")
    assert invoice.days == 365
    assert invoice.subtotal == Decimal("31739.13")
    assert invoice.discount == Decimal("6347.83")
    assert invoice.discount_percent == Decimal("20")
    assert invoice.total == Decimal("25391.30")
    assert invoice.vat_amount == Decimal("0.00")


def test_create_rejects_unknown_plan(db, business):
    with pytest.raises(UnknownPlanError):
        SubscriptionService(db, business.id).create("gold", "month")
    assert db.query(Subscription).count() == 0


def test_create_requires_existing_business(db):
    with pytest.raises(BusinessNotFoundError):
        SubscriptionService(db, 999).create("basic", "month")


def test_get_current_returns_latest(db, business):
    service = SubscriptionService(db, business.id)
    assert service.get_current() is None
    service.create("basic", "month")
    latest, _ = service.create("pro", "year")
    assert service.get_current().id == latest.id


def test_auto_create_only_once(db, business):
    service = SubscriptionService(db, business.id)
    subscription, invoice = service.auto_create()
    assert subscription.plan == "basic"
    assert invoice.billing_cycle == "month"
    with pytest.raises(SubscriptionAlreadyExistsError):
        service.auto_create()


def test_cancel_is_tenant_scoped(db, business_factory):
    owner = business_factory()
    other = business_factory()
    subscription, _ = SubscriptionService(db, owner.id).create("basic", "month")

    with pytest.raises(SubscriptionNotFoundError):
        SubscriptionService(db, other.id).cancel(subscription.id)

    cancelled = SubscriptionService(db, owner.id).cancel(subscription.id)
    assert cancelled.status is SubscriptionStatus.CANCELLED


def test_invoices_are_tenant_scoped(db, business_factory):
    owner = business_factory()
    other = business_factory()
    _, invoice = SubscriptionService(db, owner.id).create("basic", "month")

    assert SubscriptionService(db, other.id).list_invoices() == []
    with pytest.raises(BillingInvoiceNotFoundError):
        SubscriptionService(db, other.id).get_invoice(invoice.id)
    assert SubscriptionService(db, owner.id).get_invoice(invoice.id).id == invoice.id


def test_submit_payment_uses_invoice_total(db, business, bank_account):
    _, invoice = SubscriptionService(db, business.id).create("basic", "year")
    payment = _submit(db, business.id, invoice.id)

    assert payment.amount == invoice.total
    assert payment.status is BillingPaymentStatus.PENDING
    assert payment.payment_method == "bank_transfer"
    assert [p.id for p in BillingPaymentService(db, business.id).list()] == [payment.id]


def test_submit_payment_rejects_unknown_or_inactive_account(db, business, bank_account):
    _, invoice = SubscriptionService(db, business.id).create("basic", "month")
    with pytest.raises(InvalidBankAccountError):
        _submit(db, business.id, invoice.id, account_number="999")

    bank_account.is_active = False
    db.commit()
    assert list_active_bank_accounts(db) == []
    with pytest.raises(InvalidBankAccountError):
        _submit(db, business.id, invoice.id)


def test_submit_payment_for_foreign_invoice(db, business_factory, bank_account):
    owner = business_factory()
    other = business_factory()
    _, invoice = SubscriptionService(db, owner.id).create("basic", "month")
    with pytest.raises(BillingInvoiceNotFoundError):
        _submit(db, other.id, invoice.id)


def test_verify_payment_activates_subscription_and_business(db, business, bank_account):
    subscription, invoice = SubscriptionService(db, business.id).create("basic", "month")
    payment = _submit(db, business.id, invoice.id)

    reviewed = PaymentReviewService(db).review(payment.id, "verified", reviewer="admin@cafepos.et")

    assert reviewed.status is BillingPaymentStatus.VERIFIED
    assert reviewed.verified_by == "admin@cafepos.et"
    assert reviewed.verified_at is not None
    db.refresh(invoice)
    db.refresh(subscription)
    db.refresh(business)
    assert invoice.status is BillingInvoiceStatus.PAID
    assert invoice.paid_date is not None
    assert subscription.status is SubscriptionStatus.ACTIVE
    assert (subscription.end_date - subscription.start_date).days == 30
    assert business.is_active is True
    assert db.query(Subscription).count() == 1


def test_paid_invoice_refuses_second_proof(db, business, bank_account):
    _, invoice = SubscriptionService(db, business.id).create("basic", "month")
    PaymentReviewService(db).review(_submit(db, business.id, invoice.id).id, "verified")

    with pytest.raises(InvoiceNotPayableError) as exc_info:
        _submit(db, business.id, invoice.id, transaction_reference="FT2")
    assert exc_info.value.status_code == 409

    db.refresh(invoice)
    assert invoice.status is BillingInvoiceStatus.PAID
    assert db.query(Subscription).filter(Subscription.status == SubscriptionStatus.ACTIVE).count() == 1


def test_cancelled_invoice_refuses_proof(db, business, bank_account):
    _, invoice = SubscriptionService(db, business.id).create("basic", "month")
    invoice.status = BillingInvoiceStatus.CANCELLED
    db.commit()
    with pytest.raises(InvoiceNotPayableError):
        _submit(db, business.id, invoice.id)


def test_verify_after_cancellation_opens_new_period(db, business, bank_account):
    service = SubscriptionService(db, business.id)
    subscription, invoice = service.create("basic", "year")
    service.cancel(subscription.id)

    PaymentReviewService(db).review(_submit(db, business.id, invoice.id).id, "verified")

    subscriptions = db.query(Subscription).order_by(Subscription.id).all()
    assert [s.status for s in subscriptions] == [SubscriptionStatus.CANCELLED, SubscriptionStatus.ACTIVE]
    renewed = subscriptions[1]
    assert renewed.plan == "basic"
    assert renewed.billing_cycle == "year"
    assert (renewed.end_date - renewed.start_date).days == 365


def test_reverify_is_refused(db, business, bank_account):
    _, invoice = SubscriptionService(db, business.id).create("basic", "month")
    payment = _submit(db, business.id, invoice.id)
    review = PaymentReviewService(db)
    review.review(payment.id, "verified")

    for _ in range(2):
        with pytest.raises(PaymentAlreadyReviewedError) as exc_info:
            review.review(payment.id, "verified")
        assert exc_info.value.code == "BIL108"
        assert exc_info.value.status_code == 409
    assert db.query(Subscription).filter(Subscription.status == SubscriptionStatus.ACTIVE).count() == 1


def test_reject_after_verify_is_refused(db, business, bank_account):
    subscription, invoice = SubscriptionService(db, business.id).create("basic", "month")
    payment = _submit(db, business.id, invoice.id)
    PaymentReviewService(db).review(payment.id, "verified")

    with pytest.raises(PaymentAlreadyReviewedError):
        PaymentReviewService(db).review(payment.id, "rejected")

    db.refresh(invoice)
    db.refresh(subscription)
    db.refresh(payment)
    assert payment.status is BillingPaymentStatus.VERIFIED
    assert invoice.status is BillingInvoiceStatus.PAID
    assert invoice.paid_date is not None
    assert subscription.status is SubscriptionStatus.ACTIVE


def test_duplicate_pending_proofs_pay_invoice_once(db, business, bank_account):
    _, invoice = SubscriptionService(db, business.id).create("basic", "month")
    first = _submit(db, business.id, invoice.id)
    second = _submit(db, business.id, invoice.id, transaction_reference="FT-DUP")
    review = PaymentReviewService(db)
    review.review(first.id, "verified")

    with pytest.raises(InvoiceNotPayableError):
        review.review(second.id, "verified")

    rejected = review.review(second.id, "rejected")
    assert rejected.status is BillingPaymentStatus.REJECTED
    db.refresh(invoice)
    assert invoice.status is BillingInvoiceStatus.PAID
    assert db.query(Subscription).filter(Subscription.status == SubscriptionStatus.ACTIVE).count() == 1


def test_reject_payment_allows_resubmission(db, business, bank_account):
    subscription, invoice = SubscriptionService(db, business.id).create("basic", "month")
    payment = _submit(db, business.id, invoice.id)

    PaymentReviewService(db).review(payment.id, "rejected")
    db.refresh(invoice)
    db.refresh(subscription)
    assert invoice.status is BillingInvoiceStatus.REJECTED
    assert subscription.status is SubscriptionStatus.PENDING

    _submit(db, business.id, invoice.id, transaction_reference="FT-RETRY")
    db.refresh(invoice)
    assert invoice.status is BillingInvoiceStatus.PENDING


def test_review_errors(db):
    with pytest.raises(InvalidPaymentStatusError):
        PaymentReviewService(db).review(1, "refunded")
    with pytest.raises(PaymentNotFoundError):
        PaymentReviewService(db).review(12345, "verified")


def test_invoice_number_collision_is_retried(db, business, monkeypatch):
    numbers = iter(["INV-202401-0001", "INV-202401-0001", "INV-202401-0002"])
    monkeypatch.setattr(
        "app.services.billing.subscription_service.generate_invoice_number", lambda now: next(numbers)
    )
    service = SubscriptionService(db, business.id)
    service.create("basic", "month")

    _, invoice = service.create("pro", "month")

    assert invoice.invoice_number == "INV-202401-0002"
    assert db.query(Subscription).count() == 2


def test_invoice_number_exhaustion_raises_domain_error(db, business, monkeypatch):
    monkeypatch.setattr(
        "app.services.billing.subscription_service.generate_invoice_number", lambda now: "INV-202401-0001"
    )
    service = SubscriptionService(db, business.id)
    service.create("basic", "month")

    with pytest.raises(InvoiceNumberUnavailableError) as exc_info:
        service.create("basic", "month")
    assert exc_info.value.code == "BIL110"
    assert db.query(Subscription).count() == 1
