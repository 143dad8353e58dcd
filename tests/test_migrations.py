# tests/test_migrations.py
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from models import Base

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


def _upgrade(tmp_path, monkeypatch):
     url = f"sqlite:///{tmp_path / 'migrated.db'}"
     monkeypatch.setenv("DATABASE_URL", url)
     config = Config()
     config.set_main_option("script_location", str(ALEMBIC_DIR))
     command.upgrade(config, "head")
     return create_engine(url)


def _check_sql(inspector, table):
     return " ".join(check["sqltext"] for check in inspector.get_check_constraints(table))


def test_migrations_create_every_model_table(tmp_path, monkeypatch):
     engine = _upgrade(tmp_path, monkeypatch)
     try:
          tables = set(inspect(engine).get_table_names())
     finally:
          engine.dispose()

     assert set(Base.metadata.tables) <= tables


def test_migrations_constrain_enums_like_the_models(tmp_path, monkeypatch):
     engine = _upgrade(tmp_path, monkeypatch)
     try:
          inspector = inspect(engine)
          assert "MODEL_TEST" in _check_sql(inspector, "payments")
          assert "STUDENT" in _check_sql(inspector, "users")
          assert "last_number" in _check_sql(inspector, "receipt_counters")
     finally:
          engine.dispose()
