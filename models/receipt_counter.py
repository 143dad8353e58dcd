# models/receipt_counter.py
"""
ReceiptCounter model - last receipt sequence handed out per calendar month.

Rows are created on the first receipt of a month and then only ever
incremented by services.receipt_service; they are never deleted.
"""
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint, func
from .base import Base


class ReceiptCounter(Base):
     __tablename__ = "receipt_counters"
     __table_args__ = (
          CheckConstraint("last_number >= 1", name="ck_receipt_counters_last_number_positive"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     month_key = Column(String(7), nullable=False, unique=True, index=True)  # YYYY-MM
     last_number = Column(Integer, nullable=False, default=1)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     def __repr__(self):
          return f"<ReceiptCounter(month_key='{self.month_key}', last_number={self.last_number})>"
