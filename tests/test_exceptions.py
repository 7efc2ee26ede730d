"""
Test suite for the bootstrap error taxonomy.

Version: 1.0
"""

import pytest

from platform_services.core.exceptions import (
    AlreadyInitialized,
    BootstrapError,
    ConfigurationError,
    NotInitialized,
    TokenVerificationError,
    handle_bootstrap_exception,
)


@pytest.mark.parametrize("exc_class,status_code", [
    (ConfigurationError, 500),
    (AlreadyInitialized, 409),
    (NotInitialized, 503),
    (TokenVerificationError, 401),
])
def test_status_codes(exc_class, status_code):
    exc = exc_class("message")

    assert isinstance(exc, BootstrapError)
    assert exc.status_code == status_code
    assert exc.details == {}


def test_handle_bootstrap_exception():
    payload = handle_bootstrap_exception(AlreadyInitialized(details={"project_id": "p1"}))

    assert payload == {
        "status_code": 409,
        "detail": "Platform client already initialized",
        "error_type": "AlreadyInitialized",
        "error_details": {"project_id": "p1"},
    }


def test_handle_unexpected_exception():
    payload = handle_bootstrap_exception(RuntimeError("internal detail"))

    assert payload["status_code"] == 500
    assert payload["detail"] == "Internal server error"
    assert "internal detail" not in str(payload)
