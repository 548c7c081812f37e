"""Tenant billing: subscriptions, invoices, bank-transfer payments.

Sub-modules:
- subscription: current/create/auto-create/cancel, price calculation
- invoices: invoice listing and detail
- payments: payment proof submission, payment listing, bank accounts
"""
from fastapi import APIRouter

from .invoices import router as invoices_router
from .payments import router as payments_router
from .subscription import router as subscription_router

router = APIRouter()
router.include_router(subscription_router)
router.include_router(invoices_router)
router.include_router(payments_router)

__all__ = ["router"]
