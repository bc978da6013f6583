"""
API Test Fixtures.

The TestClient is created without entering its context, so the lifespan
(and the background worker) does not run; tests drive the worker directly.
"""

import pytest
from fastapi.testclient import TestClient

from diff_voyager.api import create_app


@pytest.fixture
def client(application) -> TestClient:
    return TestClient(create_app(application=application))


@pytest.fixture
def api_project(client):
    """Factory fixture: create a project through the API and return its JSON."""

    def _create(name: str = "site", url: str = "https://example.com") -> dict:
        response = client.post("/api/projects", json={"name": name, "url": url})
        assert response.status_code == 201
        return response.json()

    return _create
