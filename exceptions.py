# exceptions.py
"""
Typed errors raised by the service layer.

Each error carries the HTTP status the API should answer with; main.py
renders any ServiceError as {"detail": message}.
"""
from typing import Optional


class ServiceError(Exception):
     status_code = 500

     def __init__(self, message: str, status_code: Optional[int] = None):
          super().__init__(message)
          self.message = message
          if status_code is not None:
               self.status_code = status_code


class PaymentValidationError(ServiceError):
     """Malformed amount, category or month. Raised before any write."""
     status_code = 400


class StudentNotFound(ServiceError):
     status_code = 404


class PaymentNotFound(ServiceError):
     status_code = 404


class ConflictRetryable(ServiceError):
     """
     A concurrent writer created the counter row for the same month first.
     Handled inside the receipt generator; never reaches an API caller.
     """
     status_code = 409


class CounterUnavailable(ServiceError):
     """The receipt counter could not be advanced within the retry budget."""
     status_code = 503


class TransactionAborted(ServiceError):
     """The payment insert failed after the counter moved; everything was rolled back."""
     status_code = 500
