"""
Test configuration for the clinic accounts service.
"""
import os

# Settings are read at import time, so the environment must be prepared first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("BOOTSTRAP_SUPER_ADMIN_EMAIL", None)
os.environ.pop("BOOTSTRAP_SUPER_ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_accounts.database import Base, enable_sqlite_foreign_keys, get_db
from clinic_accounts.main import app
from clinic_accounts.accounts.directory import AccountDirectory
from clinic_accounts.accounts.models import AccountRole
from clinic_accounts.core.security import TokenCodec

TEST_SECRET_KEY = "test-secret-key"
DEFAULT_PASSWORD = "secret123"

# In-memory database shared by every session through a single connection
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test; SQLite's implicit DELETE on DROP TABLE would
    # otherwise trip the self-referencing RESTRICT foreign key
    with engine.connect() as connection:
        connection.exec_driver_sql("PRAGMA foreign_keys=OFF")
        Base.metadata.drop_all(bind=connection)
        connection.commit()
        connection.exec_driver_sql("PRAGMA foreign_keys=ON")


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the get_db dependency
    app.dependency_overrides[get_db] = override_get_db

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency override
    app.dependency_overrides = {}


@pytest.fixture
def directory(db):
    return AccountDirectory(db)


@pytest.fixture
def codec():
    return TokenCodec(TEST_SECRET_KEY)


@pytest.fixture
def make_account(directory):
    """
    Factory creating accounts directly through the directory.

    Usage: make_account(AccountRole.DOCTOR, "doc@clinic.org", first_name="Ann")
    """
    def _make(role: AccountRole, email: str, password: str = DEFAULT_PASSWORD, **profile):
        return directory.create(email, password, role, profile)
    return _make


@pytest.fixture
def auth_headers(codec):
    """
    Factory returning an Authorization header for an account.
    """
    def _headers(account):
        return {"Authorization": f"Bearer {codec.issue(account.id, account.role)}"}
    return _headers


@pytest.fixture
def super_admin(make_account):
    return make_account(AccountRole.SUPER_ADMIN, "root@clinic.org", first_name="System")


@pytest.fixture
def admin(make_account):
    return make_account(AccountRole.ADMIN, "admin@clinic.org", department="Operations")


@pytest.fixture
def doctor(make_account):
    return make_account(
        AccountRole.DOCTOR, "doctor@clinic.org",
        first_name="Gregory", last_name="House", specialization="Diagnostics",
    )


@pytest.fixture
def patient(make_account):
    return make_account(AccountRole.PATIENT, "patient@clinic.org", first_name="Pat")
