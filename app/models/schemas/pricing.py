"""Pricing catalogue and quote schemas."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PricingPlanOut(BaseModel):
    id: str
    name: str
    description: str
    daily_price: float = Field(description="VAT-inclusive daily price")
    features: list[str]
    limitations: list[str]
    recommended: bool
    interval: Literal["month", "year"]
    total_with_vat: float = Field(description="Payable amount for the selected interval")
    total_display: str
    monthly_subtotal: float
    yearly_subtotal: float
    yearly_discount_amount: float


class PricingPlansOut(BaseModel):
    interval: Literal["month", "year"]
    currency: str
    vat_rate: float
    yearly_discount_percent: float
    plans: list[PricingPlanOut]


class PriceBreakdownOut(BaseModel):
    plan: str
    plan_key: str
    billing_cycle: Literal["month", "year"]
    days: int
    daily_rate: float
    subtotal: float
    discount_percent: float
    discount_amount: float
    subtotal_after_discount: float
    vat_rate: float
    vat_amount: float
    total: float


class PlanSelectionOut(BaseModel):
    plan: str
    checkout_url: str
