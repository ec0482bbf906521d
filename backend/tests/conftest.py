# File: backend/tests/conftest.py
# Version: v0.2.0
"""
Test bootstrap: ensure project root is on sys.path so 'backend.*' imports work,
and provide an app wired to a private in-memory SQLite database.

This avoids requiring editable installs or extra plugins. It keeps tests hermetic
to the repo layout (works in CI and locally).
"""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]  # repo root (../.. from this file)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from backend.app.core.config import Settings  # noqa: E402
from backend.app.db.maintenance import ensure_schema  # noqa: E402
from backend.app.db.session import build_engine, build_session_factory  # noqa: E402
from backend.app.main import create_app  # noqa: E402
from backend.app.services.test_run_store import TestRunStore  # noqa: E402


@pytest.fixture()
def engine():
    eng = build_engine("sqlite://")
    ensure_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db):
    return TestRunStore(db)


@pytest.fixture()
def client(session_factory):
    app = create_app(Settings(SCHEMA_AUTOHEAL=False), session_factory=session_factory)
    return TestClient(app)


@pytest.fixture()
def run_payload():
    """A test run with two suites; the first has a passed and a failed spec."""
    return {
        "TestProjectName": "project 123",
        "TestSeed": 1234567890123,
        "StartTime": "2024-05-01T10:00:00",
        "EndTime": "2024-05-01T10:01:30",
        "SuiteRuns": [
            {
                "SuiteName": "Login",
                "StartTime": "2024-05-01T10:00:00",
                "EndTime": "2024-05-01T10:00:45",
                "SpecRuns": [
                    {
                        "SpecDescription": "accepts valid credentials",
                        "Status": "Passed",
                        "StartTime": "2024-05-01T10:00:00",
                        "EndTime": "2024-05-01T10:00:00.250000",
                    },
                    {
                        "SpecDescription": "rejects a wrong password",
                        "Status": "failed",
                        "Message": "expected 401, got 500",
                        "StartTime": "2024-05-01T10:00:01",
                        "EndTime": "2024-05-01T10:00:03.500000",
                    },
                ],
            },
            {
                "SuiteName": "Checkout",
                "StartTime": "2024-05-01T10:00:45",
                "EndTime": "2024-05-01T10:01:30",
                "SpecRuns": [],
            },
        ],
    }
