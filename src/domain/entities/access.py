"""Derived project access."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from domain.entities.collaboration import CollaborationPermissions, CollaboratorRole


class ProjectRole(StrEnum):
    """Effective role of a user on a project: the owner or a collaborator role."""

    OWNER = "owner"
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"

    @classmethod
    def from_collaborator(cls, role: CollaboratorRole) -> "ProjectRole":
        return cls(role.value)


@dataclass(frozen=True)
class ProjectAccess:
    """Result of resolving a user's access to a project.

    Never persisted; computed from ownership and accepted collaborations on
    every request.
    """

    project_id: UUID
    user_id: UUID
    role: ProjectRole
    permissions: CollaborationPermissions
    collaboration_id: UUID | None = None

    @property
    def is_owner(self) -> bool:
        return self.role == ProjectRole.OWNER
