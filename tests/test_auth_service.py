"""
Test suite for the auth handle: token minting and verification.

Version: 1.0
"""

# External imports
import pytest  # pytest v7.3+
from freezegun import freeze_time  # freezegun v1.2+
from datetime import timedelta
from jose import jwt
from pydantic import SecretStr

# Internal imports
from platform_services.core.exceptions import TokenVerificationError
from platform_services.services.auth_service import AuthClient


@pytest.fixture
def auth_client(platform_config) -> AuthClient:
    return AuthClient.from_config(platform_config)


@pytest.mark.security
class TestAuthClient:

    def test_from_config(self, auth_client):
        assert auth_client.project_id == "rdsgestion-b3ec6"
        assert auth_client.issuer == "https://rdsgestion-b3ec6.example.com"
        assert "test-api-key" not in repr(auth_client)

    def test_token_round_trip(self, auth_client):
        token = auth_client.create_custom_token("user-123", {"role": "admin"})

        claims = auth_client.verify_token(token)

        assert claims["sub"] == "user-123"
        assert claims["aud"] == "rdsgestion-b3ec6"
        assert claims["iss"] == "https://rdsgestion-b3ec6.example.com"
        assert claims["role"] == "admin"
        assert claims["type"] == "custom"

    def test_default_expiry_uses_configured_minutes(self, auth_client):
        with freeze_time("2026-01-01 12:00:00"):
            claims = auth_client.verify_token(auth_client.create_custom_token("user-123"))

        assert claims["exp"] - claims["iat"] == 60 * 60

    def test_does_not_mutate_claims(self, auth_client):
        claims = {"role": "admin"}
        auth_client.create_custom_token("user-123", claims)
        assert claims == {"role": "admin"}

    @pytest.mark.parametrize("uid", ["", "x" * 129, None])
    def test_invalid_uid(self, auth_client, uid):
        with pytest.raises(ValueError, match="uid"):
            auth_client.create_custom_token(uid)

    @pytest.mark.parametrize("claim", ["sub", "aud", "exp", "iss", "type"])
    def test_reserved_claims_rejected(self, auth_client, claim):
        with pytest.raises(ValueError, match="reserved"):
            auth_client.create_custom_token("user-123", {claim: "x"})

    def test_expired_token(self, auth_client):
        with freeze_time("2026-01-01 12:00:00"):
            token = auth_client.create_custom_token("user-123", expires_delta=timedelta(minutes=5))

        with freeze_time("2026-01-01 12:10:00"):
            with pytest.raises(TokenVerificationError, match="expired"):
                auth_client.verify_token(token)

    def test_token_for_other_project(self, auth_client):
        other = AuthClient(
            project_id="other-project",
            issuer=auth_client.issuer,
            signing_key=SecretStr("test-api-key-0123456789abcdef"),
            expire_minutes=60,
        )
        token = other.create_custom_token("user-123")

        with pytest.raises(TokenVerificationError) as exc_info:
            auth_client.verify_token(token)

        assert exc_info.value.status_code == 401

    def test_token_signed_with_other_key(self, auth_client):
        forged = jwt.encode(
            {"sub": "user-123", "aud": auth_client.project_id, "iss": auth_client.issuer},
            "not-the-api-key",
            algorithm="HS256",
        )

        with pytest.raises(TokenVerificationError):
            auth_client.verify_token(forged)

    def test_tampered_token(self, auth_client):
        token = auth_client.create_custom_token("user-123")
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(TokenVerificationError):
            auth_client.verify_token(tampered)

    def test_garbage_token(self, auth_client):
        with pytest.raises(TokenVerificationError):
            auth_client.verify_token("not-a-token")
