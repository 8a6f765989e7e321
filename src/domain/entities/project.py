"""Project domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class ProjectStatus(StrEnum):
    """Lifecycle status of a project."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    PENDING = "pending"


@dataclass
class Project:
    """Domain entity for a Project.

    ``owner_id`` is fixed at creation; ownership is never transferred.
    """

    name: str
    owner_id: UUID
    id: UUID = field(default_factory=uuid4)
    description: str = ""
    category: str = "General"
    status: ProjectStatus = ProjectStatus.ACTIVE
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.owner_id == user_id
