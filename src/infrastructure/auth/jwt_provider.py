"""JWT authentication provider implementation.

Tokens are HS256-signed with the shared ``JWT_SECRET_KEY``. Payload::

    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "name": "Jane",
        "exp": 1234567890
    }
"""

from datetime import datetime, timedelta
from typing import Optional

import structlog
from jose import ExpiredSignatureError, JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWTAuthProvider:
    """Verifies and issues shared-secret JWTs."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Verify signature and expiry, then read the identity claims.

        Returns:
            TokenUser if valid; None if the token is expired, forged,
            malformed or missing ``sub``/``email``
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except ExpiredSignatureError:
            logger.info("token_expired")
            return None
        except JWTError as e:
            logger.info("token_rejected", reason=type(e).__name__)
            return None

        user = TokenUser.from_claims(payload)
        if user is None:
            logger.info("token_missing_identity_claims")
        return user

    def create_token(self, user: TokenUser) -> str:
        """Sign a token for ``user`` that expires after ``expire_minutes``."""
        payload = user.to_claims()
        payload["exp"] = datetime.utcnow() + timedelta(minutes=self._expire_minutes)
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
