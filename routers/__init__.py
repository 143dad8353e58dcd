# routers/__init__.py
from . import auth, payments, student_payments

__all__ = ["auth", "payments", "student_payments"]
