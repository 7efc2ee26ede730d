"""
Service bootstrap: one-time platform initialization and process-wide handle access.

Nothing is initialized at import time. Call ``initialize()`` once at program
start (or let the FastAPI lifespan do it), then use the accessors anywhere.

A second ``initialize()`` raises ``AlreadyInitialized``; the first client is
kept. ``shutdown()`` releases network resources and is terminal: afterwards
accessors raise ``NotInitialized`` and ``initialize()`` raises
``AlreadyInitialized``.

Version: 1.0
"""

import logging
from threading import Lock
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from platform_services.client import PlatformClient
from platform_services.config.settings import ConfigurationSource, load_configuration
from platform_services.core.exceptions import AlreadyInitialized, NotInitialized
from platform_services.services.auth_service import AuthClient

logger = logging.getLogger(__name__)


class ServiceBootstrap:
    """
    Singleton holder with guarded one-time construction of the platform client.

    ``initialize`` holds the lock for the whole build. Accessors take a lock-free
    fast path once the client is published; a caller that races an in-progress
    ``initialize`` falls through to the lock, waits, and sees the finished client.
    """

    def __init__(self):
        self._lock = Lock()
        self._client: Optional[PlatformClient] = None
        self._shut_down = False

    def initialize(self, config: ConfigurationSource = None) -> PlatformClient:
        """
        Construct the platform client exactly once.

        Args:
            config: PlatformConfiguration, mapping of field values, or None to
                read PLATFORM_* environment variables

        Returns:
            PlatformClient: The newly created client

        Raises:
            AlreadyInitialized: If this bootstrap already created a client
            ConfigurationError: If the configuration is missing or malformed
        """
        with self._lock:
            if self._client is not None or self._shut_down:
                logger.warning("Rejected repeated platform initialization")
                raise AlreadyInitialized(
                    details={"project_id": self._client.config.project_id} if self._client else {}
                )

            configuration = load_configuration(config)
            client = PlatformClient.create(configuration)

            # Publish only after every handle exists
            self._client = client
            logger.info(
                "Platform client initialized",
                extra={"data": configuration.redacted()}
            )
            return client

    def _require_client(self) -> PlatformClient:
        client = self._client
        if client is not None:
            return client

        with self._lock:
            if self._client is None:
                if self._shut_down:
                    raise NotInitialized("Platform client has been shut down")
                raise NotInitialized()
            return self._client

    def get_platform_client(self) -> PlatformClient:
        return self._require_client()

    def get_database_handle(self) -> AsyncIOMotorDatabase:
        """Returns the shared database handle."""
        return self._require_client().database

    def get_storage_handle(self) -> Any:
        """Returns the shared storage bucket handle."""
        return self._require_client().storage

    def get_auth_handle(self) -> AuthClient:
        """Returns the shared auth handle."""
        return self._require_client().auth

    def is_initialized(self) -> bool:
        return self._client is not None

    def shutdown(self) -> None:
        """
        Release network resources held by the platform client.

        Idempotent. A no-op before initialization.
        """
        with self._lock:
            client = self._client
            if client is None:
                return
            self._client = None
            self._shut_down = True
        client.close()
        logger.info("Platform bootstrap shut down")


# Process-wide default bootstrap
_default_bootstrap = ServiceBootstrap()


def get_default_bootstrap() -> ServiceBootstrap:
    return _default_bootstrap


def initialize(config: ConfigurationSource = None) -> PlatformClient:
    """Initialize the process-wide platform client. See ``ServiceBootstrap.initialize``."""
    return _default_bootstrap.initialize(config)


def get_platform_client() -> PlatformClient:
    return _default_bootstrap.get_platform_client()


def get_database_handle() -> AsyncIOMotorDatabase:
    return _default_bootstrap.get_database_handle()


def get_storage_handle() -> Any:
    return _default_bootstrap.get_storage_handle()


def get_auth_handle() -> AuthClient:
    return _default_bootstrap.get_auth_handle()


def is_initialized() -> bool:
    return _default_bootstrap.is_initialized()


def shutdown() -> None:
    _default_bootstrap.shutdown()


__all__ = [
    'ServiceBootstrap',
    'get_default_bootstrap',
    'initialize',
    'get_platform_client',
    'get_database_handle',
    'get_storage_handle',
    'get_auth_handle',
    'is_initialized',
    'shutdown',
]
