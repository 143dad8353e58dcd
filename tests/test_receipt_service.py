# tests/test_receipt_service.py
import threading

import pytest
from sqlalchemy.exc import OperationalError

from exceptions import ConflictRetryable, CounterUnavailable, PaymentValidationError
from models import ReceiptCounter
from services import receipt_service
from services.receipt_service import (
     format_receipt_code,
     issue_receipt_number,
     month_key,
     parse_year_month,
)
from tests.factories import counter_rows, counter_value


def _sequence(code):
     return int(code.rsplit("-", 1)[1])


def test_format_receipt_code_pads_month_and_sequence():
     assert format_receipt_code(2026, 1, 7) == "MA-202601-0007"
     assert format_receipt_code(2026, 12, 1234) == "MA-202612-1234"
     assert month_key(2026, 1) == "2026-01"


@pytest.mark.parametrize("value", ["2026-13", "2026-00", "2026-1", "26-01", "", "2026/01"])
def test_parse_year_month_rejects_malformed(value):
     with pytest.raises(PaymentValidationError):
          parse_year_month(value)


def test_parse_year_month():
     assert parse_year_month("2026-02") == (2026, 2)


def test_first_receipt_of_month_creates_counter(db, session_factory):
     assert issue_receipt_number(db, 2026, 1) == "MA-202601-0001"
     db.commit()
     assert counter_value(session_factory, "2026-01") == 1


def test_second_receipt_increments(db, session_factory):
     issue_receipt_number(db, 2026, 1)
     db.commit()
     assert issue_receipt_number(db, 2026, 1) == "MA-202601-0002"
     db.commit()
     assert counter_value(session_factory, "2026-01") == 2


def test_months_are_independent(db, session_factory):
     issue_receipt_number(db, 2026, 1)
     issue_receipt_number(db, 2026, 1)
     db.commit()

     assert issue_receipt_number(db, 2026, 2) == "MA-202602-0001"
     db.commit()
     assert counter_value(session_factory, "2026-01") == 2
     assert counter_value(session_factory, "2026-02") == 1


def test_invalid_month_touches_nothing(db, session_factory):
     with pytest.raises(PaymentValidationError):
          issue_receipt_number(db, 2026, 13)
     assert counter_rows(session_factory) == 0


def test_rollback_undoes_increment(db, session_factory):
     issue_receipt_number(db, 2026, 5)
     db.commit()

     assert issue_receipt_number(db, 2026, 5) == "MA-202605-0002"
     db.rollback()

     assert counter_value(session_factory, "2026-05") == 1
     assert issue_receipt_number(db, 2026, 5) == "MA-202605-0002"
     db.commit()


def test_lost_creation_race_retries_as_increment(db, session_factory, monkeypatch):
     # Another writer created the month's row after our UPDATE saw nothing
     db.add(ReceiptCounter(month_key="2026-04", last_number=1))
     db.commit()

     real_increment = receipt_service._try_increment
     calls = []

     def increment_missing_row_once(session, key):
          calls.append(key)
          if len(calls) == 1:
               return None
          return real_increment(session, key)

     monkeypatch.setattr(receipt_service, "_try_increment", increment_missing_row_once)

     assert issue_receipt_number(db, 2026, 4) == "MA-202604-0002"
     db.commit()

     assert len(calls) == 2
     assert counter_rows(session_factory) == 1
     assert counter_value(session_factory, "2026-04") == 2


def test_persistent_conflict_raises_counter_unavailable(db, session_factory, monkeypatch):
     def always_conflict(session, key):
          raise ConflictRetryable(f"Receipt counter {key} was created concurrently")

     monkeypatch.setattr(receipt_service, "_try_increment", lambda session, key: None)
     monkeypatch.setattr(receipt_service, "_try_create", always_conflict)

     with pytest.raises(CounterUnavailable):
          issue_receipt_number(db, 2026, 6)
     db.rollback()
     assert counter_rows(session_factory) == 0


def test_store_failure_raises_counter_unavailable(db, monkeypatch):
     def locked(session, key):
          raise OperationalError("UPDATE receipt_counters", {}, Exception("database is locked"))

     monkeypatch.setattr(receipt_service, "_try_increment", locked)

     with pytest.raises(CounterUnavailable):
          issue_receipt_number(db, 2026, 6)


@pytest.mark.parametrize("writers", [2, 10])
def test_concurrent_issuance_is_gap_free_and_unique(session_factory, writers):
     barrier = threading.Barrier(writers)
     codes = []
     errors = []

     def issue():
          session = session_factory()
          try:
               barrier.wait()
               code = issue_receipt_number(session, 2026, 3)
               session.commit()
               codes.append(code)
          except Exception as exc:
               session.rollback()
               errors.append(exc)
          finally:
               session.close()

     threads = [threading.Thread(target=issue) for _ in range(writers)]
     for thread in threads:
          thread.start()
     for thread in threads:
          thread.join(timeout=60)

     assert errors == []
     assert sorted(_sequence(code) for code in codes) == list(range(1, writers + 1))
     assert counter_rows(session_factory) == 1
     assert counter_value(session_factory, "2026-03") == writers
