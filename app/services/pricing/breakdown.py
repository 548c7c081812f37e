"""
Invoice-style price breakdown for a plan and billing interval.

The total is always the quoted ``total_with_vat``; the remaining lines are
derived so that ``subtotal_after_discount + vat_amount == total`` holds.
On the yearly path this makes ``vat_amount`` zero, because the quoted
yearly price does not re-add VAT after the discount.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal

from .calculator import (
    VAT_RATE_PERCENT,
    BillingInterval,
    discount_percent_for,
    parse_interval,
    period_subtotal,
    total_with_vat,
    yearly_discount_amount,
)
from .plans import PricingPlan, get_plan

CENT = Decimal("0.01")


@dataclass(frozen=True)
class PriceBreakdown:
    plan: str
    plan_key: str
    billing_cycle: str
    days: int
    daily_rate: Decimal
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    subtotal_after_discount: Decimal
    vat_rate: Decimal
    vat_amount: Decimal
    total: Decimal

    def rounded(self) -> PriceBreakdown:
        """Copy with every money line rounded to cents, still reconciling to the total."""
        total = _cents(self.total)
        subtotal_after_discount = _cents(self.subtotal_after_discount)
        return PriceBreakdown(
            plan=self.plan,
            plan_key=self.plan_key,
            billing_cycle=self.billing_cycle,
            days=self.days,
            daily_rate=self.daily_rate,
            subtotal=_cents(self.subtotal),
            discount_percent=self.discount_percent,
            discount_amount=_cents(self.discount_amount),
            subtotal_after_discount=subtotal_after_discount,
            vat_rate=self.vat_rate,
            vat_amount=total - subtotal_after_discount,
            total=total,
        )

    def as_dict(self) -> dict:
        return asdict(self)


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def build_breakdown(plan: PricingPlan, interval: str | BillingInterval) -> PriceBreakdown:
    interval = parse_interval(interval)
    subtotal = period_subtotal(plan.daily_price, interval)
    discount = yearly_discount_amount(plan.daily_price) if interval is BillingInterval.YEAR else Decimal("0")
    after_discount = subtotal - discount
    total = total_with_vat(plan.daily_price, interval)
    return PriceBreakdown(
        plan=plan.name,
        plan_key=plan.id,
        billing_cycle=interval.value,
        days=interval.days,
        daily_rate=plan.daily_price,
        subtotal=subtotal,
        discount_percent=discount_percent_for(interval),
        discount_amount=discount,
        subtotal_after_discount=after_discount,
        vat_rate=VAT_RATE_PERCENT,
        vat_amount=total - after_discount,
        total=total,
    )


def quote(plan_id: str, interval: str | BillingInterval) -> PriceBreakdown:
    """Breakdown for a catalogue plan id.

    Raises:
        UnknownPlanError: plan id not in the catalogue
        InvalidBillingIntervalError: interval not month/year (or monthly/yearly)
    """
    return build_breakdown(get_plan(plan_id), interval)
