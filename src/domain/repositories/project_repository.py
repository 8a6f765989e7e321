"""Project repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.project import Project


class IProjectRepository(Protocol):
    """Repository interface for Project entities."""

    async def get(self, id: UUID) -> Project | None:
        """Get a project by ID."""
        ...

    async def get_many(self, ids: list[UUID]) -> list[Project]:
        """Get projects by a list of IDs."""
        ...

    async def get_owned_by(self, owner_id: UUID) -> list[Project]:
        """Get all projects owned by a user, most recently updated first."""
        ...

    async def is_owner(self, project_id: UUID, user_id: UUID) -> bool:
        """Check whether the user owns the project."""
        ...

    async def create(self, project: Project) -> Project:
        """Create a new project."""
        ...

    async def update(self, project: Project) -> Project:
        """Update an existing project."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a project and return success status."""
        ...
