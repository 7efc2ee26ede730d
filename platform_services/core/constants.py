"""
Shared constants for the core module.

Version: 1.0
"""

# Environment
ENV_PREFIX = "PLATFORM_"
ALLOWED_ENVIRONMENTS = ["development", "staging", "production", "test"]

# Token configuration
DEFAULT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
MAX_UID_LENGTH = 128
RESERVED_CLAIMS = frozenset([
    "acr", "amr", "at_hash", "aud", "auth_time", "azp", "cnf", "c_hash",
    "exp", "iat", "iss", "jti", "nbf", "nonce", "sub", "type",
])

# MongoDB connection pool
MONGODB_MAX_POOL_SIZE = 10
MONGODB_MIN_POOL_SIZE = 1
MONGODB_SERVER_SELECTION_TIMEOUT_MS = 5000

# S3 client
DEFAULT_STORAGE_REGION = "us-east-1"
MAX_RETRIES = 3
