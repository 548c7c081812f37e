"""Billing service dependencies scoped to the requesting business."""
from typing import Annotated, TypeAlias

from fastapi import Depends

from app.api.dependencies import BusinessIdDep, DbDep
from app.services.billing import BillingPaymentService, SubscriptionService


def get_subscription_service(db: DbDep, business_id: BusinessIdDep) -> SubscriptionService:
    return SubscriptionService(db, business_id)


def get_payment_service(db: DbDep, business_id: BusinessIdDep) -> BillingPaymentService:
    return BillingPaymentService(db, business_id)


SubscriptionServiceDep: TypeAlias = Annotated[SubscriptionService, Depends(get_subscription_service)]
PaymentServiceDep: TypeAlias = Annotated[BillingPaymentService, Depends(get_payment_service)]
