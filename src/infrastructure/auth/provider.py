"""Authentication provider protocol and the identity carried by a token."""

from dataclasses import dataclass
from typing import Any, Optional, Protocol
from uuid import UUID


@dataclass(frozen=True)
class TokenUser:
    """Identity claims of a verified bearer token.

    Not a stored account: ``get_active_user`` turns it into a ``User``,
    provisioning the account on first sight.
    """

    id: UUID
    email: str
    name: Optional[str] = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Optional["TokenUser"]:
        """Build from a decoded payload. None unless ``sub`` is a UUID and ``email`` is set."""
        subject = claims.get("sub")
        email = claims.get("email")
        if not subject or not email:
            return None
        try:
            user_id = UUID(str(subject))
        except ValueError:
            return None
        return cls(id=user_id, email=str(email), name=claims.get("name"))

    def to_claims(self) -> dict[str, Any]:
        return {"sub": str(self.id), "email": self.email, "name": self.name}


class IAuthProvider(Protocol):
    """Protocol for bearer token providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """Return the token's identity, or None when the token is unusable."""
        ...

    def create_token(self, user: TokenUser) -> str:
        """Issue a signed token for ``user``. Used by tests and local tooling."""
        ...
