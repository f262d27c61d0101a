"""
Shared test configuration.

Environment variables are set before anything from applyflow is imported,
since applyflow.core.config reads them at import time.
"""
import os
import tempfile

_TEST_ROOT = tempfile.mkdtemp(prefix="applyflow-tests-")

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_JWT_SECRET"] = "test-secret"
os.environ.pop("AUTH_JWT_AUDIENCE", None)
os.environ["LOG_DIR"] = os.path.join(_TEST_ROOT, "logs")
os.environ["STORAGE_DIR"] = os.path.join(_TEST_ROOT, "storage")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from applyflow.core import config
from applyflow.core.security import create_access_token
from applyflow.db.base import Base
from applyflow.db.session import get_db
import applyflow.db.models  # noqa: F401


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def storage_dir(tmp_path, monkeypatch):
    """Point resume storage at a per-test directory."""
    path = tmp_path / "storage"
    monkeypatch.setattr(config, "STORAGE_DIR", str(path))
    return path


@pytest.fixture
def client(db, storage_dir):
    """Test client bound to the test database."""
    from applyflow.main import app

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(user_id: str = "user-1") -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


@pytest.fixture
def headers():
    return auth_headers("user-1")


@pytest.fixture
def other_headers():
    return auth_headers("user-2")
