# models/__init__.py
from .base import Base
from .user import User, UserRole
from .student import Student
from .payment import Payment, PaymentCategory
from .receipt_counter import ReceiptCounter

__all__ = [
     "Base",
     "User",
     "UserRole",
     "Student",
     "Payment",
     "PaymentCategory",
     "ReceiptCounter",
]
