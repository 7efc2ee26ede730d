"""
Dependency injection module for FastAPI application.

Version: 1.0
"""

from fastapi import Depends, Request
from typing import Any
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from platform_services.bootstrap import ServiceBootstrap, get_default_bootstrap
from platform_services.client import PlatformClient
from platform_services.services.auth_service import AuthClient

# Configure logging
logger = logging.getLogger(__name__)


def get_bootstrap(request: Request) -> ServiceBootstrap:
    """Bootstrap attached to the application, or the process-wide default."""
    return getattr(request.app.state, "bootstrap", None) or get_default_bootstrap()


def get_client(bootstrap: ServiceBootstrap = Depends(get_bootstrap)) -> PlatformClient:
    return bootstrap.get_platform_client()


def get_database(bootstrap: ServiceBootstrap = Depends(get_bootstrap)) -> AsyncIOMotorDatabase:
    """Shared database handle. NotInitialized is rendered as 503 by the app."""
    return bootstrap.get_database_handle()


def get_storage(bootstrap: ServiceBootstrap = Depends(get_bootstrap)) -> Any:
    """Shared storage bucket handle."""
    return bootstrap.get_storage_handle()


def get_auth(bootstrap: ServiceBootstrap = Depends(get_bootstrap)) -> AuthClient:
    """Shared auth handle."""
    return bootstrap.get_auth_handle()


__all__ = ['get_bootstrap', 'get_client', 'get_database', 'get_storage', 'get_auth']
