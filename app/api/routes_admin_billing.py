"""Super-admin console: payment proof review."""
import logging

from fastapi import APIRouter

from app.api.dependencies import DbDep, SuperAdminDep
from app.models.schemas.billing import Envelope, PaymentReview, PaymentReviewOut
from app.services.billing import PaymentReviewService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin/billing", tags=["admin-billing"])


@router.post("/payments/{payment_id}/verify", response_model=Envelope[PaymentReviewOut])
def verify_payment(payment_id: int, payload: PaymentReview, db: DbDep, reviewer: SuperAdminDep):
    """
    Verify or reject a submitted payment.

    **verified**: invoice marked paid, business activated, paid period started.
    **rejected**: invoice marked rejected; the business may resubmit proof.
    """
    payment = PaymentReviewService(db).review(payment_id, payload.status, reviewer=reviewer)
    return Envelope[PaymentReviewOut](
        data=PaymentReviewOut(id=payment.id, status=payment.status, invoice_id=payment.invoice_id),
        message=f"Payment {payment.status.value} successfully",
    )
