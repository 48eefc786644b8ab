"""Root conftest for all tests.

Provides an in-memory database, settings that do not depend on the
environment, and FastAPI test clients (anonymous, admin, and one whose
database was never connected).
"""

import pytest
from fastapi.testclient import TestClient

from jaimetro.config.settings import Settings
from jaimetro.db.session import Database
from jaimetro.main import create_app

ADMIN_USER = "admin"
ADMIN_PASS = "test-pass"


@pytest.fixture
def test_settings() -> Settings:
    """Settings fixture with fixed credentials and secret."""
    return Settings(
        database_url="sqlite://",
        jwt_secret="test-secret",
        admin_user=ADMIN_USER,
        admin_pass=ADMIN_PASS,
        business_day_utc_offset_minutes=330,
        business_day_rollover_hour=1,
    )


@pytest.fixture
def db():
    """Connected in-memory SQLite database, fresh per test."""
    database = Database("sqlite://")
    database.connect()
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def client(test_settings, db) -> TestClient:
    """Anonymous API client.

    The database is connected before the app is built, so the client is used
    without entering the lifespan.
    """
    return TestClient(create_app(test_settings, db))


@pytest.fixture
def admin_client(client) -> TestClient:
    """API client holding a valid admin cookie."""
    response = client.post("/api/login", json={"username": ADMIN_USER, "password": ADMIN_PASS})
    assert response.status_code == 200
    return client


@pytest.fixture
def offline_client(test_settings) -> TestClient:
    """API client whose database was never connected."""
    return TestClient(create_app(test_settings, Database("sqlite://")))
