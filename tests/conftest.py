# tests/conftest.py
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from database import get_session
from dependencies import create_access_token
from main import app
from models import Base
from tests.factories import make_student, make_user


@pytest.fixture
def engine(tmp_path):
     # File-backed so that several threads can hold their own connections
     engine = create_engine(
          f"sqlite:///{tmp_path / 'portal.db'}",
          connect_args={"check_same_thread": False, "timeout": 30},
     )
     Base.metadata.create_all(engine)
     yield engine
     engine.dispose()


@pytest.fixture
def session_factory(engine):
     return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
     session = session_factory()
     yield session
     session.close()


@pytest.fixture
def client(session_factory):
     def override_get_session():
          session = session_factory()
          try:
               yield session
               session.commit()
          except Exception:
               session.rollback()
               raise
          finally:
               session.close()

     app.dependency_overrides[get_session] = override_get_session
     with TestClient(app) as test_client:
          yield test_client
     app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
     return make_user(db)


@pytest.fixture
def student(db):
     return make_student(db, monthly_fee=1000)


@pytest.fixture
def admin_headers(admin):
     return {"Authorization": f"Bearer {create_access_token(admin.id, 'ADMIN')}"}
