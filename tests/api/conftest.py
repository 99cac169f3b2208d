"""Test fixtures for API tests."""
import pytest
from fastapi.testclient import TestClient

from kimi_kitchen.database import Database, get_db
from kimi_kitchen.main import app
from kimi_kitchen.services.auth import create_access_token
from kimi_kitchen.services.roles import Role


@pytest.fixture
def client(engine, db):
    """Create a TestClient with overridden database dependency.

    Requires both engine (to ensure tables are created) and db (the session).
    """

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.state.database = Database(engine=engine)
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clean up
    app.dependency_overrides.clear()
    app.state.database = None


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user."""
    def _headers(user):
        token = create_access_token(user.id, user.username, user.role)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def admin(user_factory):
    return user_factory(username="admin", role=Role.ADMIN)


@pytest.fixture
def manager(user_factory):
    return user_factory(username="manager", role=Role.MANAGER)


@pytest.fixture
def chef(user_factory):
    return user_factory(username="chef", role=Role.CHEF)


@pytest.fixture
def customer(user_factory):
    return user_factory(username="customer", role=Role.CUSTOMER)


@pytest.fixture
def headers(chef, auth_headers):
    """Headers for an ordinary signed-in user."""
    return auth_headers(chef)
