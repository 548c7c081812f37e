"""Public pricing endpoints backing the marketing pricing page."""

import logging

from fastapi import APIRouter, Query, Request

from app import metrics
from app.api.rate_limit import RATE_LIMITS, limiter
from app.core.config import settings
from app.models.schemas.pricing import (
    PriceBreakdownOut,
    PricingPlanOut,
    PricingPlansOut,
    PlanSelectionOut,
)
from app.services.pricing import (
    VAT_RATE_PERCENT,
    YEARLY_DISCOUNT_PERCENT,
    PlanQuote,
    PriceBreakdown,
    checkout_path,
    get_plan,
    parse_interval,
    quote,
    quote_plan,
    renderable_plans,
)
from app.utils.currency_fmt import fmt_money

logger = logging.getLogger(__name__)
router = APIRouter()


def plan_quote_to_out(item: PlanQuote) -> PricingPlanOut:
    plan = item.plan
    return PricingPlanOut(
        id=plan.id,
        name=plan.name,
        description=plan.description,
        daily_price=float(plan.daily_price),
        features=list(plan.features),
        limitations=list(plan.limitations),
        recommended=plan.recommended,
        interval=item.interval.value,
        total_with_vat=float(item.total_with_vat),
        total_display=fmt_money(item.total_with_vat),
        monthly_subtotal=float(item.monthly_subtotal),
        yearly_subtotal=float(item.yearly_subtotal),
        yearly_discount_amount=float(item.yearly_discount_amount),
    )


def breakdown_to_out(breakdown: PriceBreakdown) -> PriceBreakdownOut:
    return PriceBreakdownOut(**{
        key: float(value) if key not in ("plan", "plan_key", "billing_cycle", "days") else value
        for key, value in breakdown.as_dict().items()
    })


def build_quote_response(plan: str, billing_cycle: str) -> PriceBreakdownOut:
    """Rounded breakdown for one plan; shared with the billing calculate-price alias."""
    breakdown = quote(plan, billing_cycle).rounded()
    metrics.pricing_quote(breakdown.plan_key, breakdown.billing_cycle)
    return breakdown_to_out(breakdown)


@router.get("/plans", response_model=PricingPlansOut)
@limiter.limit(RATE_LIMITS["pricing"])
def list_plans(
    request: Request,
    interval: str = Query("month", description="month | year"),
):
    """All plans with totals for the selected billing interval."""
    selected = parse_interval(interval)
    return PricingPlansOut(
        interval=selected.value,
        currency=settings.CURRENCY,
        vat_rate=float(VAT_RATE_PERCENT),
        yearly_discount_percent=float(YEARLY_DISCOUNT_PERCENT),
        plans=[plan_quote_to_out(item) for item in renderable_plans(selected)],
    )


@router.get("/plans/{plan_id}", response_model=PricingPlanOut)
@limiter.limit(RATE_LIMITS["pricing"])
def get_plan_detail(
    request: Request,
    plan_id: str,
    interval: str = Query("month", description="month | year"),
):
    return plan_quote_to_out(quote_plan(get_plan(plan_id), interval))


@router.get("/quote", response_model=PriceBreakdownOut)
@limiter.limit(RATE_LIMITS["pricing"])
def get_quote(
    request: Request,
    plan: str = Query(..., description="Plan id"),
    billing_cycle: str = Query(..., description="month | year (monthly | yearly accepted)"),
):
    """Invoice-style price breakdown, rounded to cents."""
    return build_quote_response(plan, billing_cycle)


@router.post("/plans/{plan_id}/select", response_model=PlanSelectionOut)
def select_plan(plan_id: str):
    """Hand off to the dashboard billing page; nothing is persisted here."""
    plan = get_plan(plan_id)
    logger.info("Plan %s selected, redirecting to checkout", plan.id)
    return PlanSelectionOut(plan=plan.id, checkout_url=checkout_path(plan.id))
