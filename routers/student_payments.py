# routers/student_payments.py
"""
Payment API routes nested under a student.

- Admin: record payments for any student, read any history
- Student: read own payment history and monthly status only
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import can_access_student, require_admin, verify_token
from schemas.payment import (
     MonthlyStatusResponse,
     PaymentCreate,
     PaymentListResponse,
     PaymentResponse,
)
from services.payment_service import PaymentService

router = APIRouter(prefix="/api/students", tags=["payments"])


def _ensure_student_access(token: dict, student_id: int) -> None:
     if not can_access_student(token, student_id):
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="You can only view your own payments"
          )


@router.get(
     "/{student_id}/payments",
     response_model=PaymentListResponse,
     summary="List a student's payments"
)
def list_student_payments(
     student_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     """
     Payments sorted by applies-to month (newest first), then by payment time.
     """
     _ensure_student_access(token, student_id)
     payments = PaymentService.list_student_payments(db, student_id)
     return {"payments": payments}


@router.post(
     "/{student_id}/payments",
     response_model=PaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a payment and issue its receipt"
)
def create_student_payment(
     student_id: int,
     body: PaymentCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_admin)
):
     """
     Record a payment for a student.

     - **amount**: Positive whole amount
     - **category**: ADMISSION, MONTHLY, MODEL_TEST or OTHER
     - **applies_to_month**: Billing month (YYYY-MM)
     - **note**: Optional free text

     The response carries the issued **receipt_no** (MA-YYYYMM-####).
     """
     payment = PaymentService.create_payment(
          db,
          student_id=student_id,
          amount=body.amount,
          category=body.category.value,
          applies_to_month=body.applies_to_month,
          created_by_user_id=token.get("id"),
          note=body.note,
     )
     return payment


@router.get(
     "/{student_id}/monthly-status",
     response_model=MonthlyStatusResponse,
     summary="Paid / Partial / Unpaid for recent months"
)
def get_monthly_status(
     student_id: int,
     months: int = Query(6, ge=1, le=24, description="How many months back, current month first"),
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token)
):
     _ensure_student_access(token, student_id)
     return PaymentService.monthly_status(db, student_id, months=months)
