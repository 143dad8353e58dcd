# services/receipt_service.py
"""
Receipt Number Service - per-month sequential receipt codes.

Every payment gets a code MA-{YYYY}{MM}-{####} (e.g. MA-202601-0007) from
the ReceiptCounter row of the month it applies to:

1. UPDATE the month's row with last_number = last_number + 1 (atomic, row-locked)
2. If no row exists yet, INSERT it with last_number = 1 inside a SAVEPOINT
3. If that INSERT loses a race (unique month_key), roll back the savepoint
   and go back to step 1

The caller owns the transaction: the increment commits or rolls back
together with the payment row written in the same session.
"""
import logging
import os
import re
from typing import Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from exceptions import ConflictRetryable, CounterUnavailable, PaymentValidationError
from models import ReceiptCounter

logger = logging.getLogger(__name__)

RECEIPT_PREFIX = "MA"
MAX_ATTEMPTS = int(os.getenv("RECEIPT_COUNTER_MAX_ATTEMPTS", "5"))

_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_year_month(value: str) -> Tuple[int, int]:
     """Split a YYYY-MM string into (year, month), rejecting impossible months."""
     match = _YEAR_MONTH_RE.match(value or "")
     if not match:
          raise PaymentValidationError("appliesToMonth must be in YYYY-MM format")
     year, month = int(match.group(1)), int(match.group(2))
     _check_year_month(year, month)
     return year, month


def _check_year_month(year: int, month: int) -> None:
     if not 1 <= year <= 9999:
          raise PaymentValidationError(f"Invalid year: {year}")
     if not 1 <= month <= 12:
          raise PaymentValidationError(f"Invalid month: {month}")


def month_key(year: int, month: int) -> str:
     return f"{year:04d}-{month:02d}"


def format_receipt_code(year: int, month: int, sequence: int) -> str:
     return f"{RECEIPT_PREFIX}-{year:04d}{month:02d}-{sequence:04d}"


def _try_increment(db: Session, key: str) -> Optional[int]:
     """Bump an existing counter row. Returns the new value, or None if the month has no row yet."""
     result = db.execute(
          update(ReceiptCounter)
          .where(ReceiptCounter.month_key == key)
          .values(last_number=ReceiptCounter.last_number + 1)
          .execution_options(synchronize_session=False)
     )
     if result.rowcount == 0:
          return None
     # Our UPDATE holds the row lock until commit, so this is our number
     return db.execute(
          select(ReceiptCounter.last_number).where(ReceiptCounter.month_key == key)
     ).scalar_one()


def _try_create(db: Session, key: str) -> int:
     """Create the month's counter at 1. Raises ConflictRetryable if another writer got there first."""
     try:
          with db.begin_nested():
               db.add(ReceiptCounter(month_key=key, last_number=1))
     except IntegrityError as exc:
          raise ConflictRetryable(f"Receipt counter {key} was created concurrently") from exc
     return 1


def issue_receipt_number(db: Session, year: int, month: int) -> str:
     """
     Take the next receipt number for (year, month) inside the caller's transaction.

     Args:
          db: SQLAlchemy session whose transaction also writes the payment
          year: Calendar year of the applies-to month
          month: Calendar month (1-12)

     Returns:
          Receipt code, e.g. "MA-202601-0007"

     Raises:
          PaymentValidationError: year/month out of range
          CounterUnavailable: counter could not be advanced within MAX_ATTEMPTS,
               or the database refused the write
     """
     _check_year_month(year, month)
     key = month_key(year, month)

     for attempt in range(1, MAX_ATTEMPTS + 1):
          try:
               sequence = _try_increment(db, key)
               if sequence is None:
                    sequence = _try_create(db, key)
          except ConflictRetryable:
               logger.info("Receipt counter %s created by another writer, retrying as increment (attempt %d)", key, attempt)
               continue
          except OperationalError as exc:
               logger.error("Receipt counter %s could not be updated: %s", key, exc)
               raise CounterUnavailable("Receipt counter is unavailable, please retry") from exc

          receipt_no = format_receipt_code(year, month, sequence)
          logger.debug("Issued receipt %s", receipt_no)
          return receipt_no

     logger.error("Receipt counter %s still conflicting after %d attempts", key, MAX_ATTEMPTS)
     raise CounterUnavailable("Receipt counter is unavailable, please retry")
