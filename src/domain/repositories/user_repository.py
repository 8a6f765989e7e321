"""User repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.user import SystemRole, User


class IUserRepository(Protocol):
    """Repository interface for User entities (the Identity Store)."""

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by (normalised) email."""
        ...

    async def create(self, user: User) -> User:
        """Create a new user."""
        ...

    async def update(self, user: User) -> User:
        """Persist profile fields of an existing user."""
        ...

    async def search(self, query: str, exclude_id: UUID, limit: int = 20) -> list[User]:
        """Find users whose name or email contains ``query``."""
        ...

    async def list_all(
        self, role: SystemRole | None = None, is_active: bool | None = None
    ) -> list[User]:
        """List users, newest first, optionally filtered."""
        ...

    async def count_active_admins(self) -> int:
        """Count users with the admin role that are active."""
        ...

    async def lock_active_admin_ids(self) -> list[UUID]:
        """Return active admin IDs, row-locking them until the transaction ends."""
        ...

    async def set_active(self, id: UUID, active: bool) -> User | None:
        """Set the active flag. Returns None when the user does not exist."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a user, remember the identity, and return success status."""
        ...

    async def is_deleted(self, id: UUID, email: str) -> bool:
        """Whether the ID or email belongs to a previously deleted account."""
        ...
