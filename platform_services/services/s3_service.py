"""
S3 storage resource construction and bucket handle derivation.

Version: 1.0
"""

# External imports
import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from typing import Any, Dict
import logging

# Internal imports
from platform_services.config.settings import PlatformConfiguration
from platform_services.core.constants import MAX_RETRIES

# Configure logging
logger = logging.getLogger(__name__)


def _session_kwargs(config: PlatformConfiguration) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {"region_name": config.storage_region}
    # Without explicit keys boto3 falls back to its default credential chain
    if config.storage_access_key_id is not None:
        kwargs["aws_access_key_id"] = config.storage_access_key_id.get_secret_value()
        kwargs["aws_secret_access_key"] = config.storage_secret_access_key.get_secret_value()
    return kwargs


def create_s3_resource(config: PlatformConfiguration) -> Any:
    """
    Create the S3 service resource for the configured storage endpoint.

    Retry and backoff are left to botocore's adaptive retry mode.

    Args:
        config: Validated platform configuration

    Returns:
        boto3 S3 ServiceResource
    """
    session = boto3.session.Session(**_session_kwargs(config))
    resource = session.resource(
        's3',
        endpoint_url=config.storage_endpoint_url,
        config=Config(
            signature_version='s3v4',
            retries={
                'max_attempts': MAX_RETRIES,
                'mode': 'adaptive'
            }
        )
    )
    logger.info(
        "S3 resource created (region=%s, endpoint=%s)",
        config.storage_region,
        config.storage_endpoint_url or "default",
    )
    return resource


def get_bucket_handle(resource: Any, config: PlatformConfiguration) -> Any:
    """Derive the bucket handle for the configured storage bucket."""
    return resource.Bucket(config.storage_bucket)


def check_bucket_access(bucket: Any) -> bool:
    """
    Validate that the bucket exists and is reachable with the configured credentials.

    Blocking; call it from a worker thread in async code.
    """
    try:
        bucket.meta.client.head_bucket(Bucket=bucket.name)
        return True
    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', '')
        logger.error(f"Storage health check failed for bucket {bucket.name} ({error_code}): {str(e)}")
        return False
    except BotoCoreError as e:
        logger.error(f"Storage health check failed for bucket {bucket.name}: {str(e)}")
        return False


def close_s3_resource(resource: Any) -> None:
    """Release the HTTP connection pool held by the resource's client."""
    resource.meta.client.close()
    logger.info("S3 client closed")


__all__ = [
    'create_s3_resource',
    'get_bucket_handle',
    'check_bucket_access',
    'close_s3_resource',
]
