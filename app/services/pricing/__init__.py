"""
Subscription pricing.

Usage:
    from app.services.pricing import quote, renderable_plans, total_with_vat

    total_with_vat(100, "month")          # Decimal("3000.00...")
    renderable_plans("year")              # one PlanQuote per catalogue plan
    quote("basic", "yearly").rounded()    # invoice-style PriceBreakdown
"""
from .breakdown import PriceBreakdown, build_breakdown, quote
from .calculator import (
    DAYS_PER_INTERVAL,
    VAT_RATE_PERCENT,
    YEARLY_DISCOUNT_PERCENT,
    BillingInterval,
    parse_interval,
    period_subtotal,
    subtotal,
    total_with_vat,
    yearly_discount_amount,
)
from .plans import PRICING_PLANS, PricingPlan, get_plan, plan_ids
from .surface import PlanQuote, checkout_path, quote_plan, renderable_plans

__all__ = [
    "BillingInterval",
    "DAYS_PER_INTERVAL",
    "VAT_RATE_PERCENT",
    "YEARLY_DISCOUNT_PERCENT",
    "parse_interval",
    "subtotal",
    "period_subtotal",
    "total_with_vat",
    "yearly_discount_amount",
    "PricingPlan",
    "PRICING_PLANS",
    "get_plan",
    "plan_ids",
    "PlanQuote",
    "quote_plan",
    "renderable_plans",
    "checkout_path",
    "PriceBreakdown",
    "build_breakdown",
    "quote",
]
