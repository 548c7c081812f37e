"""Plan selection surface: every plan with its derived figures for one interval."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from urllib.parse import urlencode

from app.core.config import settings

from .calculator import (
    BillingInterval,
    parse_interval,
    period_subtotal,
    total_with_vat,
    yearly_discount_amount,
)
from .plans import PRICING_PLANS, PricingPlan, get_plan


@dataclass(frozen=True)
class PlanQuote:
    plan: PricingPlan
    interval: BillingInterval
    total_with_vat: Decimal
    monthly_subtotal: Decimal
    yearly_subtotal: Decimal
    yearly_discount_amount: Decimal


def quote_plan(plan: PricingPlan, interval: str | BillingInterval) -> PlanQuote:
    interval = parse_interval(interval)
    return PlanQuote(
        plan=plan,
        interval=interval,
        total_with_vat=total_with_vat(plan.daily_price, interval),
        monthly_subtotal=period_subtotal(plan.daily_price, BillingInterval.MONTH),
        yearly_subtotal=period_subtotal(plan.daily_price, BillingInterval.YEAR),
        yearly_discount_amount=yearly_discount_amount(plan.daily_price),
    )


def renderable_plans(
    interval: str | BillingInterval = BillingInterval.MONTH,
    plans: tuple[PricingPlan, ...] = PRICING_PLANS,
) -> tuple[PlanQuote, ...]:
    """Derive the figures shown for each plan under the selected interval."""
    interval = parse_interval(interval)
    return tuple(quote_plan(plan, interval) for plan in plans)


def checkout_path(plan_id: str) -> str:
    """Billing page the customer is sent to after picking a plan."""
    plan = get_plan(plan_id)
    return f"{settings.BILLING_CHECKOUT_PATH}?{urlencode({'plan': plan.id})}"
