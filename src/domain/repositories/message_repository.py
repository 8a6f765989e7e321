"""Project message repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.message import ProjectMessage


class IMessageRepository(Protocol):
    """Repository interface for ProjectMessage entities."""

    async def create(self, message: ProjectMessage) -> ProjectMessage:
        """Create a new message."""
        ...

    async def list_for_project(self, project_id: UUID, limit: int = 50) -> list[ProjectMessage]:
        """Most recent messages of a project, newest first."""
        ...
