"""Test fixtures: a fresh SQLite database per test and a TestClient bound to it.

The module-level environment must be set before fitness_api.config is
imported, so the app never picks up a real DATABASE_URL or Firebase account.
"""
import os

os.environ["DATABASE_URL"] = ""
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ.pop("FIREBASE_SERVICE_ACCOUNT_JSON", None)

import jwt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from fitness_api.database import connection  # noqa: E402
from fitness_api.main import app  # noqa: E402


@pytest.fixture
def client(tmp_path):
    """TestClient against an empty database; tables are created by the lifespan hook."""
    assert connection.init_database(f"sqlite:///{tmp_path / 'fitness.db'}")
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def unconfigured_client():
    """TestClient with no database engine at all."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def bearer():
    """Build an Authorization header whose token carries the given email claim."""
    def _bearer(email: str) -> dict:
        token = jwt.encode({"email": email, "sub": email}, "fitness-api-test-signing-key-0123456789", algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}
    return _bearer


@pytest.fixture
def make_user(client):
    def _make_user(name="Sarah Johnson", email="sarah.j@fitness.com", **extra):
        response = client.post("/api/users", json={"name": name, "email": email, **extra})
        assert response.status_code == 201, response.text
        return response.json()
    return _make_user
