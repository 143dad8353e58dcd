# schemas/__init__.py
from .auth import LoginRequest, LoginResponse, LoginUser
from .payment import (
     PaymentCategoryEnum,
     PaymentCreate,
     PaymentResponse,
     PaymentListResponse,
     PaymentDeleteResponse,
     MonthlyStatusResponse,
     ReceiptResponse,
)

__all__ = [
     "LoginRequest",
     "LoginResponse",
     "LoginUser",
     "PaymentCategoryEnum",
     "PaymentCreate",
     "PaymentResponse",
     "PaymentListResponse",
     "PaymentDeleteResponse",
     "MonthlyStatusResponse",
     "ReceiptResponse",
]
