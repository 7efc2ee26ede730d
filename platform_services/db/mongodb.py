"""
MongoDB client construction and database handle derivation.

Version: 1.0
"""

import logging
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from platform_services.config.settings import PlatformConfiguration
from platform_services.core.constants import (
    MONGODB_MAX_POOL_SIZE,
    MONGODB_MIN_POOL_SIZE,
    MONGODB_SERVER_SELECTION_TIMEOUT_MS,
)

# Configure module logger
logger = logging.getLogger(__name__)


def create_mongodb_client(config: PlatformConfiguration) -> AsyncIOMotorClient:
    """
    Create the MongoDB client with connection pooling.

    Construction does not contact the server; connections are opened lazily
    by the driver on first use.

    Args:
        config: Validated platform configuration

    Returns:
        AsyncIOMotorClient: MongoDB client owned by the platform client
    """
    client = AsyncIOMotorClient(
        config.database_url.get_secret_value(),
        maxPoolSize=MONGODB_MAX_POOL_SIZE,
        minPoolSize=MONGODB_MIN_POOL_SIZE,
        serverSelectionTimeoutMS=MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        appname=config.app_id or config.project_id,
    )
    logger.info("MongoDB client created for project %s", config.project_id)
    return client


def get_database_handle(client: AsyncIOMotorClient, config: PlatformConfiguration) -> AsyncIOMotorDatabase:
    """Derive the database handle for the configured project."""
    return client[config.effective_database_name]


async def ping_mongodb(client: AsyncIOMotorClient) -> bool:
    """
    Check MongoDB connection health.

    Returns:
        bool: True if the server answered the ping
    """
    try:
        await client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.error(f"Database health check failed: {str(e)}")
        return False


def close_mongodb_client(client: AsyncIOMotorClient) -> None:
    """Close MongoDB connection gracefully."""
    client.close()
    logger.info("MongoDB connection closed")


__all__ = [
    'create_mongodb_client',
    'get_database_handle',
    'ping_mongodb',
    'close_mongodb_client',
]
