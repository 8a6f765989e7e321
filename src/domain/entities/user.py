"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class SystemRole(StrEnum):
    """System-wide role of a user account.

    Unrelated to the per-project collaborator roles in
    ``domain.entities.collaboration``.
    """

    USER = "user"
    ADMIN = "admin"


@dataclass
class User:
    """Domain entity for a user account in the Identity Store."""

    email: str
    name: str = ""
    id: UUID = field(default_factory=uuid4)
    role: SystemRole = SystemRole.USER
    is_active: bool = True
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Normalise the email and keep timestamps ordered."""
        self.email = normalize_email(self.email)
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_admin(self) -> bool:
        return self.role == SystemRole.ADMIN

    @property
    def is_active_admin(self) -> bool:
        return self.is_admin and self.is_active


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively; store them lowercased."""
    return email.strip().lower()
