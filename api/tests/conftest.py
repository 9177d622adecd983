"""
Pytest configuration for API tests

Fixtures and configuration for FastAPI endpoint testing against a fresh
in-process chain per test.
"""

import os
import time

import pytest

os.environ.setdefault("API_KEY_DEV", "test_api_key")

from fastapi.testclient import TestClient

from api.dependencies.chain import reset_contract_manager
from api.main import app
from api.tests.factories import PrincipalFactory


@pytest.fixture(autouse=True)
def fresh_chain():
    """Every test starts without deployments"""
    reset_contract_manager()
    yield
    reset_contract_manager()


@pytest.fixture
def client():
    """Create FastAPI test client"""
    with TestClient(app) as test_client:
        yield test_client


# Auth fixtures
@pytest.fixture
def api_key():
    """Get API key from environment"""
    return os.getenv("API_KEY_DEV", "test_api_key")


@pytest.fixture
def auth_headers(api_key):
    """Get authentication headers"""
    return {"X-API-Key": api_key}


# Principal fixtures
@pytest.fixture
def owner():
    return PrincipalFactory.create("owner")


@pytest.fixture
def buyer():
    return PrincipalFactory.create("buyer")


@pytest.fixture
def seller():
    return PrincipalFactory.create("seller")


@pytest.fixture
def now():
    return int(time.time())


@pytest.fixture
def unique_registry(client, auth_headers, owner, seller):
    """A deployed unique registry with its claimable module installed"""
    response = client.post(
        "/api/v1/registries/",
        json={"kind": "unique", "name": "drops", "symbol": "DROP", "owner": owner, "primary_recipient": seller},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def semi_fungible_registry(client, auth_headers, owner, seller):
    """A deployed semi-fungible registry with its claimable module installed"""
    response = client.post(
        "/api/v1/registries/",
        json={"kind": "semi_fungible", "name": "editions", "owner": owner, "primary_recipient": seller},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
