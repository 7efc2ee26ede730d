"""
Platform client: the single owner of the SDK clients and the handles derived from them.

Version: 1.0
"""

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from botocore.exceptions import InvalidRegionError
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError as PyMongoConfigurationError

from platform_services.config.settings import PlatformConfiguration
from platform_services.core.exceptions import ConfigurationError
from platform_services.db.mongodb import (
    close_mongodb_client,
    create_mongodb_client,
    get_database_handle,
    ping_mongodb,
)
from platform_services.services.auth_service import AuthClient
from platform_services.services.s3_service import (
    check_bucket_access,
    close_s3_resource,
    create_s3_resource,
    get_bucket_handle,
)

logger = logging.getLogger(__name__)


@contextmanager
def _rejected_settings(*fields: str) -> Iterator[None]:
    """Report settings an SDK refuses to build a client from as ConfigurationError."""
    try:
        yield
    except (PyMongoConfigurationError, InvalidRegionError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid platform configuration ({', '.join(fields)})",
            details={"errors": [
                {"field": field, "message": f"rejected by client library ({type(e).__name__})"}
                for field in fields
            ]}
        ) from e


class PlatformClient:
    """
    Authenticated session with the backend platform.

    Owns the MongoDB client and the S3 resource. The database, storage and
    auth handles are derived once in ``create`` and hold non-owning
    references to them.
    """

    def __init__(
        self,
        config: PlatformConfiguration,
        mongo_client: AsyncIOMotorClient,
        s3_resource: Any,
        database: AsyncIOMotorDatabase,
        storage: Any,
        auth: AuthClient,
    ):
        self._config = config
        self._mongo_client = mongo_client
        self._s3_resource = s3_resource
        self._database = database
        self._storage = storage
        self._auth = auth
        self._closed = False

    @classmethod
    def create(cls, config: PlatformConfiguration) -> "PlatformClient":
        """
        Build the SDK clients and derive every handle.

        Anything built before a failure is closed again, so a failed call
        leaves no live connections behind.

        Args:
            config: Validated platform configuration

        Returns:
            PlatformClient: Fully constructed client

        Raises:
            ConfigurationError: If an SDK rejects a configured value
        """
        mongo_client: Optional[AsyncIOMotorClient] = None
        s3_resource: Any = None
        try:
            with _rejected_settings("database_url"):
                mongo_client = create_mongodb_client(config)
            with _rejected_settings("storage_region", "storage_endpoint_url"):
                s3_resource = create_s3_resource(config)
            return cls(
                config=config,
                mongo_client=mongo_client,
                s3_resource=s3_resource,
                database=get_database_handle(mongo_client, config),
                storage=get_bucket_handle(s3_resource, config),
                auth=AuthClient.from_config(config),
            )
        except Exception:
            logger.exception("Platform client construction failed for project %s", config.project_id)
            if s3_resource is not None:
                close_s3_resource(s3_resource)
            if mongo_client is not None:
                close_mongodb_client(mongo_client)
            raise

    @property
    def config(self) -> PlatformConfiguration:
        return self._config

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self._database

    @property
    def storage(self) -> Any:
        return self._storage

    @property
    def auth(self) -> AuthClient:
        return self._auth

    @property
    def closed(self) -> bool:
        return self._closed

    async def check_health(self) -> Dict[str, bool]:
        """
        Probe each backing service.

        Returns:
            Dict mapping service name to reachability
        """
        database_ok = await ping_mongodb(self._mongo_client)
        storage_ok = await asyncio.to_thread(check_bucket_access, self._storage)
        return {"database": database_ok, "storage": storage_ok}

    def close(self) -> None:
        """Release network resources. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        close_s3_resource(self._s3_resource)
        close_mongodb_client(self._mongo_client)
        logger.info("Platform client for project %s closed", self._config.project_id)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"PlatformClient(project_id={self._config.project_id!r}, {state})"


__all__ = ["PlatformClient"]
