# services/payment_service.py
"""
Payment Service - recording, listing and deleting student payments.

create_payment is the only writer of receipt numbers: the counter increment
and the payment insert are flushed and committed in one transaction, so a
failed insert never leaves the month's counter advanced.
"""
import logging
import os
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from exceptions import (
     PaymentNotFound,
     PaymentValidationError,
     StudentNotFound,
     TransactionAborted,
)
from models import Payment, PaymentCategory, Student
from models.payment import MAX_AMOUNT
from services.receipt_service import issue_receipt_number, parse_year_month

logger = logging.getLogger(__name__)

MONTHLY_STATUS_PAID = "Paid"
MONTHLY_STATUS_PARTIAL = "Partial"
MONTHLY_STATUS_UNPAID = "Unpaid"


def institution_info() -> dict:
     """Letterhead printed on receipts."""
     return {
          "name": os.getenv("INSTITUTION_NAME", "Math Academy"),
          "address": os.getenv("INSTITUTION_ADDRESS", ""),
          "phone": os.getenv("INSTITUTION_PHONE", ""),
          "email": os.getenv("INSTITUTION_EMAIL", ""),
     }


def _shift_month(year: int, month: int, delta: int) -> tuple:
     index = year * 12 + (month - 1) + delta
     return index // 12, index % 12 + 1


class PaymentService:
     """Service class for payment-related business logic."""

     @staticmethod
     def _get_student(db: Session, student_id: int) -> Student:
          student = db.query(Student).filter(Student.id == student_id).first()
          if not student:
               raise StudentNotFound("Student not found")
          return student

     @staticmethod
     def create_payment(
          db: Session,
          student_id: int,
          amount: int,
          category,
          applies_to_month: str,
          created_by_user_id: int,
          note: Optional[str] = None,
     ) -> Payment:
          """
          Record a payment and issue its receipt number.

          Args:
               db: SQLAlchemy database session
               student_id: ID of the paying student
               amount: Positive whole amount
               category: PaymentCategory or its name
               applies_to_month: Billing month as YYYY-MM
               created_by_user_id: Staff account recording the payment
               note: Optional free text

          Returns:
               Committed Payment with receipt_no and receipt_issued_at set

          Raises:
               PaymentValidationError: Bad amount, category or month (nothing written)
               StudentNotFound: Student doesn't exist (nothing written)
               CounterUnavailable: Receipt counter could not be advanced (rolled back)
               TransactionAborted: Insert/commit failed after the increment (rolled back)
          """
          if isinstance(amount, bool) or not isinstance(amount, int) or not 0 < amount <= MAX_AMOUNT:
               raise PaymentValidationError(f"Amount must be a positive integer up to {MAX_AMOUNT}")
          try:
               category = PaymentCategory(category)
          except ValueError:
               raise PaymentValidationError(f"Unknown payment category: {category}")
          year, month = parse_year_month(applies_to_month)

          PaymentService._get_student(db, student_id)

          try:
               receipt_no = issue_receipt_number(db, year, month)
               now = datetime.now(timezone.utc).replace(tzinfo=None)  # columns are naive UTC
               payment = Payment(
                    student_id=student_id,
                    amount=amount,
                    category=category,
                    applies_to_month=date(year, month, 1),
                    paid_at=now,
                    note=(note or "").strip() or None,
                    created_by_user_id=created_by_user_id,
                    receipt_no=receipt_no,
                    receipt_issued_at=now,
               )
               db.add(payment)
               db.flush()
               db.commit()
          except SQLAlchemyError as exc:
               db.rollback()
               logger.exception("Payment for student %s (%s) rolled back", student_id, applies_to_month)
               raise TransactionAborted("An error occurred while creating the payment") from exc
          except Exception:
               # CounterUnavailable and anything else: leave the session usable
               db.rollback()
               raise

          logger.info("Recorded payment %s for student %s: %s", payment.id, student_id, receipt_no)
          return payment

     @staticmethod
     def list_student_payments(db: Session, student_id: int) -> list[Payment]:
          """Payments of a student, newest billing month first, then newest payment first."""
          PaymentService._get_student(db, student_id)
          return (
               db.query(Payment)
               .options(joinedload(Payment.created_by_user))
               .filter(Payment.student_id == student_id)
               .order_by(Payment.applies_to_month.desc(), Payment.paid_at.desc(), Payment.id.desc())
               .all()
          )

     @staticmethod
     def get_payment(db: Session, payment_id: int) -> Payment:
          payment = (
               db.query(Payment)
               .options(joinedload(Payment.student), joinedload(Payment.created_by_user))
               .filter(Payment.id == payment_id)
               .first()
          )
          if not payment:
               raise PaymentNotFound("Payment not found")
          return payment

     @staticmethod
     def delete_payment(db: Session, payment_id: int) -> None:
          """
          Delete a payment. Its receipt number is retired, not reclaimed:
          the month's counter is left untouched.
          """
          payment = db.query(Payment).filter(Payment.id == payment_id).first()
          if not payment:
               raise PaymentNotFound("Payment not found")
          receipt_no = payment.receipt_no
          db.delete(payment)
          db.commit()
          logger.info("Deleted payment %s (receipt %s)", payment_id, receipt_no)

     @staticmethod
     def get_receipt(db: Session, payment_id: int) -> dict:
          payment = PaymentService.get_payment(db, payment_id)
          return {
               "payment": payment,
               "student": payment.student,
               "issued_by": payment.created_by_user,
               "institution": institution_info(),
          }

     @staticmethod
     def monthly_status(
          db: Session,
          student_id: int,
          months: int = 6,
          today: Optional[date] = None
     ) -> dict:
          """
          Paid / Partial / Unpaid for the student's last `months` billing months.

          Only MONTHLY payments count toward a month. Students without a
          monthly fee get an empty month list.
          """
          student = PaymentService._get_student(db, student_id)
          result = {"student_id": student.id, "monthly_fee": student.monthly_fee, "months": []}
          if not student.monthly_fee:
               return result

          today = today or date.today()
          totals: dict[str, int] = {}
          monthly_payments = (
               db.query(Payment)
               .filter(Payment.student_id == student_id, Payment.category == PaymentCategory.MONTHLY)
               .all()
          )
          for payment in monthly_payments:
               totals[payment.month_key] = totals.get(payment.month_key, 0) + payment.amount

          for offset in range(months):
               year, month = _shift_month(today.year, today.month, -offset)
               key = f"{year:04d}-{month:02d}"
               total = totals.get(key, 0)
               if total >= student.monthly_fee:
                    status = MONTHLY_STATUS_PAID
               elif total > 0:
                    status = MONTHLY_STATUS_PARTIAL
               else:
                    status = MONTHLY_STATUS_UNPAID
               result["months"].append({"month": key, "total": total, "status": status})
          return result
