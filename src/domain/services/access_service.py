"""Project access resolution."""

from collections.abc import Callable
from uuid import UUID

from core.exceptions import (
    InsufficientProjectPermissionError,
    ProjectAccessDeniedError,
    ProjectNotFoundError,
)
from domain.entities.access import ProjectAccess, ProjectRole
from domain.entities.collaboration import CollaborationPermissions
from domain.entities.project import Project
from domain.repositories.unit_of_work import IUnitOfWork


async def resolve_project_access(
    uow: IUnitOfWork,
    user_id: UUID,
    project_id: UUID,
    project: Project | None = None,
) -> ProjectAccess:
    """Compute a user's effective role on a project inside an open unit of work.

    The owner gets full permissions. Anyone else needs an accepted
    collaboration request for the project; the ledger allows at most one.

    Raises:
        ProjectNotFoundError: If the project does not exist.
        ProjectAccessDeniedError: If the user is neither owner nor collaborator.
    """
    if project is None:
        project = await uow.projects.get(project_id)
    if not project:
        raise ProjectNotFoundError(str(project_id))

    if project.is_owned_by(user_id):
        return ProjectAccess(
            project_id=project.id,
            user_id=user_id,
            role=ProjectRole.OWNER,
            permissions=CollaborationPermissions.full(),
        )

    collaboration = await uow.collaborations.get_accepted(project.id, user_id)
    if not collaboration:
        raise ProjectAccessDeniedError(str(project.id))

    return ProjectAccess(
        project_id=project.id,
        user_id=user_id,
        role=ProjectRole.from_collaborator(collaboration.role),
        permissions=collaboration.permissions or CollaborationPermissions.for_role(
            collaboration.role
        ),
        collaboration_id=collaboration.id,
    )


def require_permission(access: ProjectAccess, permission: str) -> None:
    """Raise unless the resolved access carries ``permission`` (e.g. ``can_edit``)."""
    if not access.permissions.allows(permission):
        raise InsufficientProjectPermissionError(permission)


class AccessService:
    """Service exposing the access resolver to callers outside a unit of work."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def resolve_access(self, user_id: UUID, project_id: UUID) -> ProjectAccess:
        """Resolve the user's role and permissions on a project. Pure read."""
        async with self._uow_factory() as uow:
            return await resolve_project_access(uow, user_id, project_id)

    async def has_access(self, user_id: UUID, project_id: UUID) -> bool:
        """Check access without raising on denial.

        Still raises ProjectNotFoundError for a missing project.
        """
        try:
            await self.resolve_access(user_id, project_id)
        except ProjectAccessDeniedError:
            return False
        return True
