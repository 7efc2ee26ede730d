# settings.py
# Version: 1.0
# Purpose: Platform connection settings loaded once at process start using Pydantic

import logging
import re
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlsplit

from botocore.exceptions import InvalidRegionError
from botocore.utils import validate_region_name
from pydantic import SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pymongo.errors import PyMongoError
from pymongo.uri_parser import parse_uri

from platform_services.core.constants import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALLOWED_ENVIRONMENTS,
    DEFAULT_STORAGE_REGION,
    ENV_PREFIX,
)
from platform_services.core.exceptions import ConfigurationError

# Configure logger
logger = logging.getLogger(__name__)

PROJECT_ID_PATTERN = re.compile(r"^[a-z]([a-z0-9-]{0,28}[a-z0-9])?$")
API_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
HOSTNAME_PATTERN = re.compile(
    r"^(?=.{1,253}$)([a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?)(\.[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?)*$"
)
BUCKET_PATTERN = re.compile(r"^[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$")
APP_ID_PATTERN = re.compile(r"^\d+:(\d+):[a-z]+:[0-9a-f]+$")
LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]
REDACTED = "**********"


class PlatformConfiguration(BaseSettings):
    """
    Immutable record describing how to reach the backend platform.
    Values come from explicit arguments first, then PLATFORM_* environment
    variables, then a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Project identity
    project_id: str
    api_key: SecretStr
    auth_domain: str
    messaging_sender_id: Optional[str] = None
    app_id: Optional[str] = None

    # Document database
    database_url: SecretStr = SecretStr("mongodb://localhost:27017")
    database_name: Optional[str] = None

    # Blob storage
    storage_bucket: str
    storage_region: str = DEFAULT_STORAGE_REGION
    storage_endpoint_url: Optional[str] = None
    storage_access_key_id: Optional[SecretStr] = None
    storage_secret_access_key: Optional[SecretStr] = None

    # Auth tokens
    token_expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES

    # Runtime
    environment: str = "development"
    log_level: str = "INFO"

    @field_validator("project_id")
    @classmethod
    def validate_project_id(cls, v: str) -> str:
        """Validate project identifier format."""
        v = v.strip()
        if not PROJECT_ID_PATTERN.match(v):
            raise ValueError(
                "project_id must be at most 30 lowercase letters, digits or hyphens, "
                "start with a letter and not end with a hyphen"
            )
        return v

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: SecretStr) -> SecretStr:
        """Validate API key shape without echoing it."""
        if not API_KEY_PATTERN.match(v.get_secret_value()):
            raise ValueError("api_key must be a non-empty string of URL-safe characters")
        return v

    @field_validator("auth_domain")
    @classmethod
    def validate_auth_domain(cls, v: str) -> str:
        """Validate auth domain is a bare hostname."""
        v = v.strip().lower()
        if not HOSTNAME_PATTERN.match(v):
            raise ValueError("auth_domain must be a hostname without scheme or path")
        return v

    @field_validator("storage_bucket")
    @classmethod
    def validate_storage_bucket(cls, v: str) -> str:
        """Validate bucket name against S3 naming rules."""
        v = v.strip()
        if not BUCKET_PATTERN.match(v) or ".." in v:
            raise ValueError("storage_bucket is not a valid bucket name")
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: SecretStr) -> SecretStr:
        """Validate MongoDB URL format without echoing it."""
        url = v.get_secret_value()
        if url.startswith("mongodb+srv://"):
            # SRV records are resolved at connect time; only the host is checked here
            hosts = url[len("mongodb+srv://"):].split("/", 1)[0].split("?", 1)[0]
            host = hosts.rpartition("@")[2].lower()
            if not HOSTNAME_PATTERN.match(host):
                raise ValueError("mongodb+srv URL must name exactly one host without a port")
            return v
        if not url.startswith("mongodb://"):
            raise ValueError("Invalid MongoDB URL format")
        try:
            parse_uri(url)
        except (PyMongoError, ValueError):
            raise ValueError("database_url is not a valid MongoDB connection string") from None
        return v

    @field_validator("database_name")
    @classmethod
    def validate_database_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v or any(c in v for c in '/\\. "$'):
            raise ValueError("database_name contains characters MongoDB does not allow")
        return v

    @field_validator("storage_region")
    @classmethod
    def validate_storage_region(cls, v: str) -> str:
        """Validate region name the way botocore does."""
        v = v.strip()
        try:
            validate_region_name(v)
        except InvalidRegionError:
            raise ValueError("storage_region is not a valid region name") from None
        return v

    @field_validator("storage_endpoint_url")
    @classmethod
    def validate_storage_endpoint(cls, v: Optional[str]) -> Optional[str]:
        """Validate storage endpoint URL format."""
        if v is not None:
            if not v.startswith(("http://", "https://")):
                raise ValueError("storage_endpoint_url must start with http:// or https://")
            # Remove trailing slash if present
            v = v.rstrip('/')
            parts = urlsplit(v)
            try:
                parts.port
            except ValueError:
                raise ValueError("storage_endpoint_url has an invalid port") from None
            if not parts.hostname:
                raise ValueError("storage_endpoint_url must include a host")
        return v

    @field_validator("messaging_sender_id")
    @classmethod
    def validate_sender_id(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.isdigit():
            raise ValueError("messaging_sender_id must contain digits only")
        return v

    @field_validator("app_id")
    @classmethod
    def validate_app_id(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not APP_ID_PATTERN.match(v):
            raise ValueError("app_id must look like '<n>:<sender id>:<platform>:<hex>'")
        return v

    @field_validator("token_expire_minutes")
    @classmethod
    def validate_token_expiry(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("token_expire_minutes must be positive")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment setting."""
        if v not in ALLOWED_ENVIRONMENTS:
            raise ValueError(f"Environment must be one of {ALLOWED_ENVIRONMENTS}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}")
        return v

    @model_validator(mode="after")
    def validate_cross_fields(self) -> "PlatformConfiguration":
        """Check fields that only make sense together."""
        if (self.storage_access_key_id is None) != (self.storage_secret_access_key is None):
            raise ValueError(
                "storage_access_key_id and storage_secret_access_key must be set together"
            )
        if self.app_id and self.messaging_sender_id:
            sender = APP_ID_PATTERN.match(self.app_id).group(1)
            if sender != self.messaging_sender_id:
                raise ValueError("app_id does not belong to messaging_sender_id")
        return self

    @property
    def effective_database_name(self) -> str:
        """Database name, falling back to the project identifier."""
        return self.database_name or self.project_id

    @property
    def token_issuer(self) -> str:
        return f"https://{self.auth_domain}"

    def redacted(self) -> Dict[str, Any]:
        """
        Returns the configuration as a dict that is safe to log.
        """
        return {
            name: (REDACTED if isinstance(value, SecretStr) else value)
            for name, value in self.model_dump().items()
        }


def _to_field_name(key: str) -> str:
    """Accept web-config style camelCase keys (projectId -> project_id)."""
    if not any(c.islower() for c in key):
        # Environment style keys (PROJECT_ID)
        return key.lower()
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


ConfigurationSource = Union[PlatformConfiguration, Mapping[str, Any], None]


def load_configuration(source: ConfigurationSource = None) -> PlatformConfiguration:
    """
    Turn a configuration source into a validated PlatformConfiguration.

    Args:
        source: A ready configuration, a mapping of field values (snake_case or
            camelCase keys) or None to read PLATFORM_* environment variables

    Returns:
        PlatformConfiguration: Validated, immutable configuration

    Raises:
        ConfigurationError: If a field is missing or malformed
    """
    if isinstance(source, PlatformConfiguration):
        return source

    if source is not None and not isinstance(source, Mapping):
        raise ConfigurationError(
            f"Unsupported configuration source: {type(source).__name__}"
        )

    values = {_to_field_name(str(k)): v for k, v in (source or {}).items()}
    try:
        return PlatformConfiguration(**values)
    except ValidationError as e:
        error = ConfigurationError.from_validation_error(e)
        logger.error(error.message, extra={"data": error.details})
        raise error from e


__all__ = ["PlatformConfiguration", "ConfigurationSource", "load_configuration"]
