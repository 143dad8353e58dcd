# models/payment.py
import enum
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, Enum, Index, func
from sqlalchemy.orm import relationship
from .base import Base


# Largest value the INTEGER amount column holds on every supported store
MAX_AMOUNT = 2_147_483_647


class PaymentCategory(str, enum.Enum):
     """What the money was paid for."""
     ADMISSION = "ADMISSION"
     MONTHLY = "MONTHLY"
     MODEL_TEST = "MODEL_TEST"
     OTHER = "OTHER"


class Payment(Base):
     """
     Payment model - money received from a student.

     Every payment recorded through the API carries a receipt number
     MA-YYYYMM-#### issued from the ReceiptCounter of its applies-to month.
     receipt_no is NULL only for rows that predate receipts.
     """
     __tablename__ = "payments"
     __table_args__ = (
          Index("ix_payments_student_month", "student_id", "applies_to_month"),
          {"sqlite_autoincrement": True},  # ids of deleted payments are never handed out again
     )

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     student_id = Column(
          Integer,
          ForeignKey("students.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     created_by_user_id = Column(
          Integer,
          ForeignKey("users.id"),
          nullable=False
     )

     # Payment details
     amount = Column(Integer, nullable=False)
     category = Column(
          Enum(PaymentCategory, name="payment_category", create_constraint=True),
          nullable=False
     )
     applies_to_month = Column(Date, nullable=False)  # Always the 1st of the month
     paid_at = Column(DateTime, server_default=func.now(), nullable=False)
     note = Column(Text, nullable=True)

     # Receipt
     receipt_no = Column(String(20), unique=True, nullable=True)
     receipt_issued_at = Column(DateTime, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     student = relationship("Student", back_populates="payments")
     created_by_user = relationship("User", back_populates="issued_payments")

     def __repr__(self):
          return f"<Payment(id={self.id}, amount={self.amount}, receipt_no='{self.receipt_no}')>"

     @property
     def month_key(self) -> str:
          """YYYY-MM of the month this payment is credited against."""
          return self.applies_to_month.strftime("%Y-%m")
