"""
BizDesk Test Configuration

Shared fixtures for all tests.
"""
import pytest
from fastapi.testclient import TestClient

from bizdesk.config import AuthConfig, Settings
from bizdesk.main import create_app
from bizdesk.storage import MemStorage
from tests.fixtures.records import SAMPLE_USER


# =============================================================================
# FIXTURES: Configuration
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings with a fixed secret and the cheapest bcrypt cost."""
    return Settings(auth=AuthConfig(jwt_secret="test-secret", bcrypt_rounds=4))


@pytest.fixture
def auth_config(settings) -> AuthConfig:
    return settings.auth


# =============================================================================
# FIXTURES: Store
# =============================================================================

@pytest.fixture
def store() -> MemStorage:
    return MemStorage()


# =============================================================================
# FIXTURES: API
# =============================================================================

@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with the app lifespan (and so a fresh store) running."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def registered_user(client) -> dict:
    """Register SAMPLE_USER and return the {token, user} response."""
    resp = client.post("/api/auth/register", json=SAMPLE_USER)
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def auth_headers(registered_user) -> dict:
    return {"Authorization": f"Bearer {registered_user['token']}"}
