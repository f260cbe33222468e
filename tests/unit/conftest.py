"""
Shared fixtures for the unit suite.
Endpoint tests never reach Consul or Vault: the client is swapped out via
FastAPI dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from hashistack_hello.app import app, get_upstream_client
from hashistack_hello.config import Settings, get_settings
from hashistack_hello.upstream import UpstreamError


class FakeUpstreamClient:
    """Records every call and answers from a url -> result table."""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []

    def get(self, url, headers=None):
        self.calls.append((url, headers))
        return self.results.get(url, UpstreamError(f"no route to {url}"))


@pytest.fixture
def fake_upstream():
    return FakeUpstreamClient()


@pytest.fixture
def settings():
    return Settings(VAULT_TOKEN="test-token")


@pytest.fixture
def client(fake_upstream, settings):
    """
    Create isolated test client for each test.
    Overrides are cleared afterwards so tests stay independent.
    """
    app.dependency_overrides[get_upstream_client] = lambda: fake_upstream
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
