"""Unit tests for JWTAuthProvider."""

from uuid import uuid4

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_token(payload: dict, secret: str = "test-secret") -> str:
    """Create an HS256-signed JWT with a given payload."""
    return jose_jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


# ---------------------------------------------------------------------------
# Tests: round trip
# ---------------------------------------------------------------------------


class TestCreateAndValidate:
    async def test_should_round_trip_user_claims(self, provider: JWTAuthProvider):
        user = TokenUser(id=uuid4(), email="jane@example.com", name="Jane")

        result = await provider.validate_token(provider.create_token(user))

        assert result == user

    async def test_should_reject_token_signed_with_other_secret(self, provider: JWTAuthProvider):
        token = _make_token(
            {"sub": str(uuid4()), "email": "a@example.com", "exp": 9999999999},
            secret="other-secret",
        )

        assert await provider.validate_token(token) is None

    async def test_should_reject_expired_token(self):
        user = TokenUser(id=uuid4(), email="jane@example.com")
        expired = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=-1)
        provider = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)

        assert await provider.validate_token(expired.create_token(user)) is None

    async def test_should_reject_garbage(self, provider: JWTAuthProvider):
        assert await provider.validate_token("not.a.jwt") is None


# ---------------------------------------------------------------------------
# Tests: validate_token returns None for missing claims
# ---------------------------------------------------------------------------


class TestValidateTokenMissingClaims:
    """validate_token should return None when the decoded payload is missing
    the required 'sub' or 'email' claims."""

    async def test_should_return_none_when_token_has_no_sub_claim(
        self, provider: JWTAuthProvider
    ):
        token = _make_token({"email": "user@example.com", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_should_return_none_when_token_has_no_email_claim(
        self, provider: JWTAuthProvider
    ):
        token = _make_token({"sub": str(uuid4()), "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_should_return_none_when_sub_is_not_a_uuid(self, provider: JWTAuthProvider):
        token = _make_token({"sub": "user-42", "email": "a@example.com", "exp": 9999999999})

        assert await provider.validate_token(token) is None


class TestTokenUserClaims:
    def test_from_claims_keeps_optional_name(self):
        user_id = uuid4()

        user = TokenUser.from_claims({"sub": str(user_id), "email": "a@example.com"})

        assert user == TokenUser(id=user_id, email="a@example.com", name=None)

    def test_to_claims_is_what_from_claims_reads(self):
        user = TokenUser(id=uuid4(), email="a@example.com", name="A")

        assert TokenUser.from_claims(user.to_claims()) == user
