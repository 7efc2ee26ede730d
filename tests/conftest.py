"""
PyTest configuration for the platform services test suite.
Provides configuration fixtures, isolated bootstraps and a clean environment
for every test.

Version: 1.0
"""

# External imports
import pytest  # pytest v7.3+
import os
from typing import Any, Dict

# Internal imports
from platform_services import bootstrap as bootstrap_module
from platform_services.bootstrap import ServiceBootstrap
from platform_services.config.settings import PlatformConfiguration
from platform_services.core.constants import ENV_PREFIX

TEST_MARKERS = [
    'unit: marks unit tests for isolated component testing',
    'integration: marks tests that exercise several components together',
    'api: marks API tests for endpoint validation',
    'security: marks security-related tests',
]


def pytest_configure(config):
    """Register custom markers."""
    for marker in TEST_MARKERS:
        config.addinivalue_line("markers", marker)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """
    Strip PLATFORM_* variables and run from an empty directory so no
    stray .env file is picked up.
    """
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config_values() -> Dict[str, Any]:
    """Valid configuration values for a test project."""
    return {
        "project_id": "rdsgestion-b3ec6",
        "api_key": "test-api-key-0123456789abcdef",
        "auth_domain": "rdsgestion-b3ec6.example.com",
        "storage_bucket": "rdsgestion-b3ec6-files",
        "storage_endpoint_url": "http://localhost:9000",
        "storage_access_key_id": "test-access-key",
        "storage_secret_access_key": "test-secret-key",
        "messaging_sender_id": "302693543482",
        "app_id": "1:302693543482:web:e11edce2a238c368cc4f03",
        "environment": "test",
    }


@pytest.fixture
def platform_config(config_values) -> PlatformConfiguration:
    return PlatformConfiguration(**config_values)


@pytest.fixture
def bootstrap():
    """Fresh bootstrap, shut down after the test."""
    instance = ServiceBootstrap()
    yield instance
    instance.shutdown()


@pytest.fixture
def default_bootstrap(monkeypatch):
    """Replace the process-wide bootstrap with a fresh one for the test."""
    instance = ServiceBootstrap()
    monkeypatch.setattr(bootstrap_module, "_default_bootstrap", instance)
    yield instance
    instance.shutdown()
