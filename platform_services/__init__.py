"""
Platform services bootstrap.

Builds one platform client per process and exposes the database, storage
and auth handles derived from it.

    from platform_services import initialize, get_database_handle

    initialize()                 # reads PLATFORM_* environment variables
    db = get_database_handle()   # same instance on every call
"""

from platform_services.bootstrap import (
    ServiceBootstrap,
    get_auth_handle,
    get_database_handle,
    get_default_bootstrap,
    get_platform_client,
    get_storage_handle,
    initialize,
    is_initialized,
    shutdown,
)
from platform_services.client import PlatformClient
from platform_services.config.settings import PlatformConfiguration, load_configuration
from platform_services.core.exceptions import (
    AlreadyInitialized,
    BootstrapError,
    ConfigurationError,
    NotInitialized,
    TokenVerificationError,
)

__version__ = "1.0.0"

__all__ = [
    "ServiceBootstrap",
    "PlatformClient",
    "PlatformConfiguration",
    "load_configuration",
    "initialize",
    "get_platform_client",
    "get_database_handle",
    "get_storage_handle",
    "get_auth_handle",
    "get_default_bootstrap",
    "is_initialized",
    "shutdown",
    "BootstrapError",
    "ConfigurationError",
    "AlreadyInitialized",
    "NotInitialized",
    "TokenVerificationError",
]
