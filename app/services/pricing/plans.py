"""Subscription plan catalogue.

Plans are defined once at import time and never mutated; per-interval
figures are derived on demand by ``surface.renderable_plans``.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from app.core.exceptions import UnknownPlanError


@dataclass(frozen=True)
class PricingPlan:
    id: str
    name: str
    description: str
    daily_price: Decimal  # VAT-inclusive, ETB
    features: tuple[str, ...] = ()
    limitations: tuple[str, ...] = ()
    recommended: bool = False

    def __post_init__(self) -> None:
        if self.daily_price <= 0:
            raise ValueError(f"Plan {self.id!r} must have a positive daily price")


PRICING_PLANS: tuple[PricingPlan, ...] = (
    PricingPlan(
        id="basic",
        name="Basic",
        description="Everything you need to run your cafe or restaurant",
        daily_price=Decimal("100"),
        features=(
            "Unlimited staff accounts",
            "Full POS system",
            "Inventory management",
            "Order tracking & history",
            "Analytics & reports",
            "Customer database",
            "Table management",
            "Recipe & menu builder",
            "Multi-payment support",
            "Email & chat support",
            "Daily cloud backup",
            "Auto updates",
        ),
        limitations=("Single branch",),
        recommended=True,
    ),
    PricingPlan(
        id="pro",
        name="Pro",
        description="For growing restaurants with several branches",
        daily_price=Decimal("250"),
        features=(
            "Everything in Basic",
            "Up to 5 branches",
            "Branch-level menu availability",
            "Shift & task management",
            "Priority support",
        ),
        limitations=("Up to 5 branches",),
    ),
    PricingPlan(
        id="enterprise",
        name="Enterprise",
        description="For chains that need scale and a dedicated contact",
        daily_price=Decimal("500"),
        features=(
            "Everything in Pro",
            "Unlimited branches",
            "Dedicated account manager",
            "Custom onboarding",
        ),
    ),
)

_PLANS_BY_ID: dict[str, PricingPlan] = {plan.id: plan for plan in PRICING_PLANS}


def get_plan(plan_id: str) -> PricingPlan:
    """Look up a plan by id (case-insensitive)."""
    plan = _PLANS_BY_ID.get((plan_id or "").strip().lower())
    if plan is None:
        raise UnknownPlanError(plan_id)
    return plan


def plan_ids() -> tuple[str, ...]:
    return tuple(_PLANS_BY_ID)
