# services/__init__.py
from .payment_service import PaymentService
from .receipt_service import (
     issue_receipt_number,
     format_receipt_code,
     month_key,
     parse_year_month,
     RECEIPT_PREFIX,
)

__all__ = [
     "PaymentService",
     "issue_receipt_number",
     "format_receipt_code",
     "month_key",
     "parse_year_month",
     "RECEIPT_PREFIX",
]
