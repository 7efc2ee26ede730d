"""
Auth handle bound to the platform project.

Mints and verifies HS256 tokens scoped to the project (audience) and the
configured auth domain (issuer). Sign-in flows, user records and sessions
are not handled here.

Version: 1.0
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import logging

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from pydantic import SecretStr

from platform_services.config.settings import PlatformConfiguration
from platform_services.core.constants import (
    DEFAULT_ALGORITHM,
    MAX_UID_LENGTH,
    RESERVED_CLAIMS,
)
from platform_services.core.exceptions import TokenVerificationError

logger = logging.getLogger(__name__)


class AuthClient:
    """
    Token service for one platform project.

    Instances are created by the platform client; application code obtains
    the shared instance through ``get_auth_handle()``.
    """

    def __init__(
        self,
        project_id: str,
        issuer: str,
        signing_key: SecretStr,
        expire_minutes: int,
        algorithm: str = DEFAULT_ALGORITHM,
    ):
        self._project_id = project_id
        self._issuer = issuer
        self._signing_key = signing_key
        self._expire_minutes = expire_minutes
        self._algorithm = algorithm

    @classmethod
    def from_config(cls, config: PlatformConfiguration) -> "AuthClient":
        return cls(
            project_id=config.project_id,
            issuer=config.token_issuer,
            signing_key=config.api_key,
            expire_minutes=config.token_expire_minutes,
        )

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def issuer(self) -> str:
        return self._issuer

    def create_custom_token(
        self,
        uid: str,
        claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a signed token for a user.

        Args:
            uid: User identifier, 1-128 characters
            claims: Optional developer claims to embed in the token
            expires_delta: Optional custom expiration time

        Returns:
            str: Encoded JWT token

        Raises:
            ValueError: If uid is invalid or claims use reserved names
        """
        if not isinstance(uid, str) or not uid or len(uid) > MAX_UID_LENGTH:
            raise ValueError(f"uid must be a non-empty string of at most {MAX_UID_LENGTH} characters")

        claims = dict(claims or {})
        reserved = sorted(RESERVED_CLAIMS.intersection(claims))
        if reserved:
            raise ValueError(f"Developer claims use reserved names: {', '.join(reserved)}")

        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self._expire_minutes))

        to_encode = claims
        to_encode.update({
            "sub": uid,
            "aud": self._project_id,
            "iss": self._issuer,
            "iat": now,
            "exp": expire,
            "type": "custom",
        })

        encoded_jwt = jwt.encode(
            to_encode,
            self._signing_key.get_secret_value(),
            algorithm=self._algorithm
        )
        logger.debug("Custom token created for uid %s (expires %s)", uid, expire.isoformat())
        return encoded_jwt

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify a token minted for this project.

        Args:
            token: Encoded JWT token

        Returns:
            Dict: Decoded claims

        Raises:
            TokenVerificationError: If the token is expired, malformed, forged
                or issued for another project
        """
        try:
            return jwt.decode(
                token,
                self._signing_key.get_secret_value(),
                algorithms=[self._algorithm],
                audience=self._project_id,
                issuer=self._issuer,
            )
        except ExpiredSignatureError as e:
            raise TokenVerificationError("Token has expired") from e
        except JWTClaimsError as e:
            raise TokenVerificationError(
                "Token claims are not valid for this project",
                details={"reason": str(e)}
            ) from e
        except JWTError as e:
            raise TokenVerificationError(
                "Could not validate credentials",
                details={"reason": str(e)}
            ) from e

    def __repr__(self) -> str:
        return f"AuthClient(project_id={self._project_id!r}, issuer={self._issuer!r})"


__all__ = ["AuthClient"]
