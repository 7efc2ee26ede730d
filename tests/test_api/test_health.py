"""
Test suite for the FastAPI surface: lifespan-driven initialization,
the health endpoint and error mapping.

Version: 1.0
"""

# External imports
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

# Internal imports
from platform_services.bootstrap import ServiceBootstrap
from platform_services.client import PlatformClient
from platform_services.main import create_application


@pytest.fixture
def healthy(mocker):
    return mocker.patch.object(
        PlatformClient, "check_health",
        AsyncMock(return_value={"database": True, "storage": True})
    )


@pytest.mark.api
class TestLifespan:

    def test_startup_initializes_and_shutdown_releases(self, bootstrap, platform_config, healthy):
        app = create_application(bootstrap=bootstrap, config=platform_config)

        with TestClient(app):
            assert bootstrap.is_initialized()
            client = bootstrap.get_platform_client()

        assert bootstrap.is_initialized() is False
        assert client.closed is True

    def test_preinitialized_bootstrap_is_left_running(self, bootstrap, platform_config, healthy):
        client = bootstrap.initialize(platform_config)
        app = create_application(bootstrap=bootstrap)

        with TestClient(app):
            assert bootstrap.get_platform_client() is client

        assert bootstrap.is_initialized()
        assert client.closed is False

    def test_startup_reads_environment(self, bootstrap, monkeypatch, healthy):
        monkeypatch.setenv("PLATFORM_PROJECT_ID", "env-project")
        monkeypatch.setenv("PLATFORM_API_KEY", "env-key")
        monkeypatch.setenv("PLATFORM_AUTH_DOMAIN", "auth.example.com")
        monkeypatch.setenv("PLATFORM_STORAGE_BUCKET", "env-bucket")
        monkeypatch.setenv("PLATFORM_ENVIRONMENT", "test")
        app = create_application(bootstrap=bootstrap)

        with TestClient(app) as http:
            response = http.get("/health")

        assert response.json()["project_id"] == "env-project"


@pytest.mark.api
class TestHealthEndpoint:

    def test_healthy(self, bootstrap, platform_config, healthy):
        app = create_application(bootstrap=bootstrap, config=platform_config)

        with TestClient(app) as http:
            response = http.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "project_id": "rdsgestion-b3ec6",
            "services": {"database": True, "storage": True},
        }

    def test_degraded(self, bootstrap, platform_config, mocker):
        mocker.patch.object(
            PlatformClient, "check_health",
            AsyncMock(return_value={"database": True, "storage": False})
        )
        app = create_application(bootstrap=bootstrap, config=platform_config)

        with TestClient(app) as http:
            response = http.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"

    def test_not_initialized_maps_to_503(self):
        # No lifespan run: the bootstrap never initializes
        app = create_application(bootstrap=ServiceBootstrap())
        http = TestClient(app)

        response = http.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["error_type"] == "NotInitialized"
        assert body["detail"] == "Platform client not initialized"
