"""
Error taxonomy for the platform bootstrap.

Version: 1.0
"""

from fastapi import status
from pydantic import ValidationError
from typing import Dict, List, Optional, Any


class BootstrapError(Exception):
    """Base exception class for bootstrap errors."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ConfigurationError(BootstrapError):
    """Raised when the platform configuration is missing or malformed."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "ConfigurationError":
        """
        Build a ConfigurationError from a pydantic ValidationError.

        Input values are dropped so secrets never end up in error details.

        Args:
            exc: The validation error raised by the configuration model

        Returns:
            ConfigurationError: Error listing every offending field
        """
        errors: List[Dict[str, str]] = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
            errors.append({"field": field, "message": error.get("msg", "invalid value")})

        fields = ", ".join(e["field"] for e in errors)
        return cls(
            f"Invalid platform configuration ({fields})",
            details={"errors": errors}
        )


class AlreadyInitialized(BootstrapError):
    """Raised when initialize is called on a bootstrap that already ran."""
    def __init__(self, message: str = "Platform client already initialized",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details
        )


class NotInitialized(BootstrapError):
    """Raised when a handle is requested before initialize or after shutdown."""
    def __init__(self, message: str = "Platform client not initialized",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details
        )


class TokenVerificationError(BootstrapError):
    """Raised when the auth handle cannot verify a token."""
    def __init__(self, message: str = "Could not validate credentials",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details
        )


def handle_bootstrap_exception(exc: Exception) -> Dict[str, Any]:
    """
    Map an exception to the error payload returned by the HTTP layer.

    Args:
        exc: The exception to handle

    Returns:
        Dict containing error details
    """
    if isinstance(exc, BootstrapError):
        return {
            "status_code": exc.status_code,
            "detail": exc.message,
            "error_type": type(exc).__name__,
            "error_details": exc.details
        }
    return {
        "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
        "detail": "Internal server error",
        "error_type": type(exc).__name__,
        "error_details": {}
    }
