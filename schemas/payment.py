# schemas/payment.py
"""
Pydantic schemas for payment recording and receipt API.
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from models.payment import MAX_AMOUNT


class PaymentCategoryEnum(str, Enum):
     """Payment category options."""
     ADMISSION = "ADMISSION"
     MONTHLY = "MONTHLY"
     MODEL_TEST = "MODEL_TEST"
     OTHER = "OTHER"


class PaymentCreate(BaseModel):
     """Request body for POST /api/students/{student_id}/payments."""

     amount: int = Field(..., gt=0, le=MAX_AMOUNT, description="Amount paid, whole currency units")
     category: PaymentCategoryEnum = Field(..., description="What the payment is for")
     applies_to_month: str = Field(
          ...,
          pattern=r"^\d{4}-(0[1-9]|1[0-2])$",
          description="Billing month the payment is credited against (YYYY-MM)",
     )
     note: Optional[str] = Field(None, max_length=500)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "amount": 1500,
                    "category": "MONTHLY",
                    "applies_to_month": "2026-01",
                    "note": "Paid in cash",
               }
          }
     )


class IssuedByResponse(BaseModel):
     id: int
     username: str
     phone: str

     model_config = ConfigDict(from_attributes=True)


class PaymentResponse(BaseModel):
     """A recorded payment."""
     id: int
     student_id: int
     amount: int
     category: PaymentCategoryEnum
     applies_to_month: date
     paid_at: datetime
     receipt_no: Optional[str] = None
     receipt_issued_at: Optional[datetime] = None
     note: Optional[str] = None
     created_by_user_id: int
     created_by_user: Optional[IssuedByResponse] = None

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 12,
                    "student_id": 3,
                    "amount": 1500,
                    "category": "MONTHLY",
                    "applies_to_month": "2026-01-01",
                    "paid_at": "2026-01-05T10:30:00",
                    "receipt_no": "MA-202601-0007",
                    "receipt_issued_at": "2026-01-05T10:30:00",
                    "note": None,
                    "created_by_user_id": 1,
               }
          }
     )


class PaymentListResponse(BaseModel):
     payments: List[PaymentResponse]


class PaymentDeleteResponse(BaseModel):
     success: bool = True
     message: str = "Payment deleted successfully"


class MonthStatus(BaseModel):
     month: str
     total: int
     status: str  # Paid, Partial, Unpaid


class MonthlyStatusResponse(BaseModel):
     student_id: int
     monthly_fee: Optional[int] = None
     months: List[MonthStatus]


class ReceiptStudent(BaseModel):
     id: int
     full_name: str
     phone: Optional[str] = None
     guardian_phone: Optional[str] = None

     model_config = ConfigDict(from_attributes=True)


class InstitutionInfo(BaseModel):
     name: str
     address: str = ""
     phone: str = ""
     email: str = ""


class ReceiptResponse(BaseModel):
     """Everything a printable receipt shows."""
     payment: PaymentResponse
     student: ReceiptStudent
     issued_by: Optional[IssuedByResponse] = None
     institution: InstitutionInfo
