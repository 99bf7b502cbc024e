"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- wage_config: Wage configuration with general and weekday bonuses
- test_db: In-memory SQLite database for isolated testing
- test_client: FastAPI TestClient wired to test_db and wage_config
"""

import json
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep the test run away from the real database and log directory
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SHIFTPAY_LOG_DIR", str(Path(tempfile.gettempdir()) / "shiftpay-test-logs"))

# ruff: noqa: E402
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shiftpay.core.storage import clear_configuration_cache, parse_wage_configuration
from shiftpay.database.database import Base, get_db
from shiftpay.main import app
from shiftpay.routes.shared import wage_configuration_or_500

WAGE_CONFIG_DATA = {
    "base_rate_per_hour": 120.0,
    "period": {"kind": "custom", "start_day": 15, "end_day": 14},
    "general_bonuses": [
        {"rate_per_hour": 20.0, "start": "18:00", "end": "24:00"},
        {"rate_per_hour": 30.0, "start": "00:00", "end": "06:00"},
    ],
    "weekday_bonuses": [
        {"rate_per_hour": 40.0, "start": "06:00", "end": "24:00", "days": ["sunday"]},
    ],
}


@pytest.fixture
def wage_config_data():
    """Raw configuration dict (deep copy, safe to modify)."""
    return json.loads(json.dumps(WAGE_CONFIG_DATA))


@pytest.fixture
def wage_config(wage_config_data):
    """Validated WageConfiguration built from wage_config_data."""
    return parse_wage_configuration(wage_config_data)


@pytest.fixture
def wage_config_file(tmp_path, wage_config_data, monkeypatch):
    """Write the configuration to a temp file and point WAGE_CONFIG_PATH at it."""
    path = tmp_path / "wage_bonuses.json"
    path.write_text(json.dumps(wage_config_data), encoding="utf-8")
    monkeypatch.setenv("WAGE_CONFIG_PATH", str(path))
    clear_configuration_cache()
    yield path
    clear_configuration_cache()


@pytest.fixture(scope="function")
def test_db():
    """
    Create an in-memory SQLite database for testing.

    A fresh database for each test function; destroyed afterwards.

    Yields:
        SQLAlchemy Session: Database session for test use
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_client(test_db, wage_config, wage_config_file):
    """
    Create FastAPI TestClient with test database and configuration overrides.

    Args:
        test_db: Test database session fixture
        wage_config: Configuration served to the routes
        wage_config_file: Same configuration on disk, for the startup check

    Yields:
        TestClient: FastAPI test client for API testing
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[wage_configuration_or_500] = lambda: wage_config

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
