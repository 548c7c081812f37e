from decimal import Decimal

import pytest

from app.core.exceptions import InvalidBillingIntervalError, UnknownPlanError
from app.services.pricing import build_breakdown, get_plan, quote


def test_monthly_breakdown_reconciles():
    breakdown = quote("basic", "month")
    assert breakdown.billing_cycle == "month"
    assert breakdown.days == 30
    assert breakdown.discount_percent == 0
    assert breakdown.discount_amount == 0
    assert breakdown.subtotal_after_discount + breakdown.vat_amount == breakdown.total


def test_monthly_breakdown_rounded():
    rounded = quote("basic", "monthly").rounded()
    assert rounded.subtotal == Decimal("2608.70")
    assert rounded.subtotal_after_discount == Decimal("2608.70")
    assert rounded.vat_amount == Decimal("391.30")
    assert rounded.total == Decimal("3000.00")
    assert rounded.vat_rate == Decimal("15")


def test_yearly_breakdown_rounded():
    rounded = quote("basic", "year").rounded()
    assert rounded.billing_cycle == "year"
    assert rounded.days == 365
    assert rounded.subtotal == Decimal("31739.13")
    assert rounded.discount_percent == Decimal("20")
    assert rounded.discount_amount == Decimal("6347.83")
    assert rounded.subtotal_after_discount == Decimal("25391.30")
    assert rounded.total == Decimal("25391.30")
    assert rounded.vat_amount == Decimal("0.00")


@pytest.mark.parametrize("plan_id", ["basic", "pro", "enterprise"])
@pytest.mark.parametrize("interval", ["month", "year"])
def test_rounded_breakdown_always_reconciles(plan_id, interval):
    rounded = quote(plan_id, interval).rounded()
    assert rounded.subtotal_after_discount + rounded.vat_amount == rounded.total


def test_breakdown_labels_plan():
    breakdown = build_breakdown(get_plan("pro"), "yearly")
    assert breakdown.plan == "Pro"
    assert breakdown.plan_key == "pro"
    assert breakdown.daily_rate == Decimal("250")
    assert set(breakdown.as_dict()) >= {"total", "vat_amount", "subtotal"}


def test_quote_errors():
    with pytest.raises(UnknownPlanError):
        quote("nope", "month")
    with pytest.raises(InvalidBillingIntervalError):
        quote("basic", "weekly")
