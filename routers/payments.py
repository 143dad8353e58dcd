# routers/payments.py
"""
Payment API routes addressed by payment id: delete and receipt view.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import can_access_student, require_admin, verify_token
from schemas.payment import PaymentDeleteResponse, ReceiptResponse
from services.payment_service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.delete(
     "/{payment_id}",
     response_model=PaymentDeleteResponse,
     summary="Delete a payment"
)
def delete_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(require_admin),
):
     """
     Delete a payment. The receipt number it carried is never handed out again.
     """
     PaymentService.delete_payment(db, payment_id)
     return PaymentDeleteResponse()


@router.get(
     "/{payment_id}/receipt",
     response_model=ReceiptResponse,
     summary="Receipt for a payment"
)
def get_receipt(
     payment_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     receipt = PaymentService.get_receipt(db, payment_id)
     if not can_access_student(token, receipt["student"].id):
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="You can only view your own receipts"
          )
     return receipt
