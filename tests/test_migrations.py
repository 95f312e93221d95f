"""
Tests for the Alembic migration of the accounts schema.
"""
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

from clinic_accounts.database import enable_sqlite_foreign_keys

ROOT = Path(__file__).resolve().parent.parent
DOCTOR_ID = "0b7c3f8e-4a1d-4e4b-9a55-1d2f3c4b5a69"
PATIENT_ID = "5e0e2b4c-7d6a-4c1f-8b3e-2a9d8c7f6e51"


@pytest.fixture
def alembic_config(tmp_path):
    config = Config(str(ROOT / "alembic.ini"))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{tmp_path / 'migrated.db'}")
    return config


def test_upgrade_creates_accounts_table(alembic_config):
    command.upgrade(alembic_config, "head")

    engine = create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    inspector = inspect(engine)
    assert "accounts" in inspector.get_table_names()

    foreign_keys = inspector.get_foreign_keys("accounts")
    assert len(foreign_keys) == 1
    assert foreign_keys[0]["referred_table"] == "accounts"
    assert foreign_keys[0]["constrained_columns"] == ["assigned_doctor_id"]

    unique_indexes = [i["column_names"] for i in inspector.get_indexes("accounts") if i["unique"]]
    assert ["email"] in unique_indexes
    engine.dispose()


def test_migrated_schema_restricts_doctor_deletion(alembic_config):
    command.upgrade(alembic_config, "head")

    engine = create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    enable_sqlite_foreign_keys(engine)
    insert = text(
        "INSERT INTO accounts (id, email, password_hash, role, assigned_doctor_id) "
        "VALUES (:id, :email, 'x', :role, :doctor_id)"
    )
    with engine.begin() as connection:
        connection.execute(insert, {"id": DOCTOR_ID, "email": "d@x.com", "role": "DOCTOR", "doctor_id": None})
        connection.execute(insert, {"id": PATIENT_ID, "email": "p@x.com", "role": "PATIENT", "doctor_id": DOCTOR_ID})

    with pytest.raises(IntegrityError):
        with engine.begin() as connection:
            connection.execute(text("DELETE FROM accounts WHERE id = :id"), {"id": DOCTOR_ID})
    engine.dispose()


def test_downgrade_drops_accounts_table(alembic_config):
    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")

    engine = create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    assert "accounts" not in inspect(engine).get_table_names()
    engine.dispose()
