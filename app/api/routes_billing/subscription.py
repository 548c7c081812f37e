"""Subscription endpoints."""
import logging

from fastapi import APIRouter, Query

from app.api.routes_pricing import build_quote_response
from app.models.schemas.billing import (
    BillingInvoiceOut,
    Envelope,
    SubscriptionCreate,
    SubscriptionOut,
    SubscriptionWithInvoice,
)
from app.models.schemas.pricing import PriceBreakdownOut

from .dependencies import SubscriptionServiceDep

logger = logging.getLogger(__name__)
router = APIRouter()


def _created(subscription, invoice) -> Envelope[SubscriptionWithInvoice]:
    return Envelope[SubscriptionWithInvoice](
        data=SubscriptionWithInvoice(
            subscription=SubscriptionOut.model_validate(subscription),
            invoice=BillingInvoiceOut.model_validate(invoice),
        )
    )


@router.get("/subscription", response_model=Envelope[SubscriptionOut | None])
def get_current_subscription(service: SubscriptionServiceDep):
    """Latest subscription of the business, or ``null`` when it never subscribed."""
    subscription = service.get_current()
    return Envelope[SubscriptionOut | None](
        data=SubscriptionOut.model_validate(subscription) if subscription else None
    )


@router.post("/subscription", response_model=Envelope[SubscriptionWithInvoice], status_code=201)
def create_subscription(payload: SubscriptionCreate, service: SubscriptionServiceDep):
    """Open a pending subscription and issue its invoice."""
    subscription, invoice = service.create(payload.plan, payload.billing_cycle)
    return _created(subscription, invoice)


@router.post("/subscription/auto", response_model=Envelope[SubscriptionWithInvoice], status_code=201)
def auto_create_subscription(service: SubscriptionServiceDep):
    """Default monthly subscription for a business that has none yet."""
    subscription, invoice = service.auto_create()
    return _created(subscription, invoice)


@router.delete("/subscription/{subscription_id}", response_model=Envelope[SubscriptionOut])
def cancel_subscription(subscription_id: int, service: SubscriptionServiceDep):
    subscription = service.cancel(subscription_id)
    return Envelope[SubscriptionOut](data=SubscriptionOut.model_validate(subscription))


@router.get("/calculate-price", response_model=Envelope[PriceBreakdownOut])
def calculate_price(
    plan: str = Query(..., description="Plan id"),
    billing_cycle: str = Query(..., description="month | year (monthly | yearly accepted)"),
):
    """Same breakdown as ``/pricing/quote``, in the billing envelope."""
    return Envelope[PriceBreakdownOut](data=build_quote_response(plan, billing_cycle))
