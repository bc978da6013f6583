"""
Tests for the application factory: health, CORS, lifespan, error format, rate limits.
"""

from dataclasses import replace

from fastapi.testclient import TestClient

from diff_voyager import __version__
from diff_voyager.api import create_app
from diff_voyager.app import Application
from diff_voyager.infra.settings import Settings
from diff_voyager.scheduler import WorkerState


class TestHealthEndpoint:

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__
        assert "timestamp" in data


class TestCors:

    def test_allows_any_origin(self, client):
        response = client.get("/health", headers={"Origin": "http://dashboard.local"})
        assert response.headers["access-control-allow-origin"] == "*"

    def test_preflight(self, client):
        response = client.options(
            "/api/projects",
            headers={
                "Origin": "http://dashboard.local",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200


class TestRequestValidation:

    def test_malformed_body_is_400(self, client):
        response = client.post("/api/snapshots", json={"full_scan": True})

        assert response.status_code == 400
        assert isinstance(response.json()["detail"], list)


class TestLifespan:

    def test_worker_runs_for_app_lifetime(self, data_dir):
        settings = Settings(
            data_dir=data_dir, poll_interval_ms=10, worker_enabled=True, log_dir=None
        )
        application = Application.create(settings)

        with TestClient(create_app(application=application)) as client:
            assert client.get("/health").status_code == 200
            assert application.worker.is_running()

        assert application.worker.state == WorkerState.STOPPED

    def test_worker_disabled(self, application):
        with TestClient(create_app(application=application)):
            assert application.worker.state == WorkerState.STOPPED

    def test_builds_application_from_settings(self, settings):
        app = create_app(settings)
        assert app.state.application.settings is settings


class TestRateLimit:

    def _client(self, settings, rate_limit):
        application = Application.create(replace(settings, rate_limit=rate_limit))
        return TestClient(create_app(application=application))

    def test_exceeding_limit_returns_429(self, settings):
        client = self._client(settings, "2/minute")

        assert client.get("/health").status_code == 200
        assert client.get("/api/projects").status_code == 200

        response = client.get("/health", headers={"Origin": "http://dashboard.local"})
        assert response.status_code == 429
        assert response.headers["access-control-allow-origin"] == "*"

    def test_disabled_limit_allows_everything(self, settings):
        client = self._client(settings, None)

        for _ in range(5):
            assert client.get("/health").status_code == 200

    def test_apps_do_not_share_counters(self, settings):
        first = self._client(settings, "1/minute")
        second = self._client(settings, "1/minute")

        assert first.get("/health").status_code == 200
        assert second.get("/health").status_code == 200
        assert first.get("/health").status_code == 429
