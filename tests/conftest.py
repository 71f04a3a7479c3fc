"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, jobs and users
"""

import os

# Keep bcrypt fast in tests; must be set before settings are loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.config import settings
from jobly.core.database import Base, get_db
from jobly.crud import company as company_crud, job as job_crud, user as user_crud
import jobly.models  # noqa: F401  registers tables on Base.metadata
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
    dbapi_connection.execute("PRAGMA foreign_keys=ON")


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def api_prefix():
    return settings.API_V1_STR


@pytest.fixture
def seeded_db(db_session):
    """
    Three companies, two jobs and two users.

    c1 (1 employee) posts "walmart" (50000, equity 0)
    c2 (2 employees) posts "target" (100000, equity 1)
    c3 (3 employees) posts nothing
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "description": f"Desc{n}",
            "numEmployees": n,
            "logoUrl": f"http://c{n}.img",
        })

    job_crud.create(db_session, {"title": "walmart", "salary": 50000, "equity": 0, "companyHandle": "c1"})
    job_crud.create(db_session, {"title": "target", "salary": 100000, "equity": 1, "companyHandle": "c2"})

    for n in (1, 2):
        user_crud.register(db_session, {
            "username": f"u{n}",
            "password": f"password{n}",
            "firstName": f"U{n}F",
            "lastName": f"U{n}L",
            "email": f"user{n}@user.com",
            "isAdmin": False,
        })

    return db_session


@pytest.fixture
def filter_settings(monkeypatch):
    """Restore filter settings after a test changes them."""
    monkeypatch.setattr(settings, "FILTER_ALLOW_ZERO", settings.FILTER_ALLOW_ZERO)
    monkeypatch.setattr(settings, "FILTER_EMPTY_AS_NOT_FOUND", settings.FILTER_EMPTY_AS_NOT_FOUND)
    return settings
