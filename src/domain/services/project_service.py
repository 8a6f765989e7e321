"""Project service layer with business logic."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import NotProjectOwnerError
from domain.entities.access import ProjectAccess
from domain.entities.collaboration import CollaborationRequest
from domain.entities.project import Project, ProjectStatus
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_service import require_permission, resolve_project_access

logger = structlog.get_logger()


@dataclass
class ProjectView:
    """A project together with the caller's resolved access."""

    project: Project
    access: ProjectAccess
    collaborators: list[CollaborationRequest] = field(default_factory=list)


class ProjectService:
    """Service layer for Project business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(
        self,
        owner_id: UUID,
        name: str,
        description: str = "",
        category: str = "General",
        status: ProjectStatus = ProjectStatus.ACTIVE,
    ) -> Project:
        async with self._uow_factory() as uow:
            project = Project(
                name=name.strip(),
                owner_id=owner_id,
                description=description.strip(),
                category=category.strip() or "General",
                status=status,
            )
            created = await uow.projects.create(project)
            await uow.commit()

            logger.info("project_created", project_id=str(created.id), owner_id=str(owner_id))
            return created

    async def list_for_user(self, user_id: UUID) -> list[ProjectView]:
        """Owned projects first, then projects the user collaborates on."""
        async with self._uow_factory() as uow:
            owned = await uow.projects.get_owned_by(user_id)
            views = [
                ProjectView(project=p, access=await resolve_project_access(uow, user_id, p.id, p))
                for p in owned
            ]

            accepted = await uow.collaborations.list_accepted_for_receiver(user_id)
            projects = {
                p.id: p for p in await uow.projects.get_many([c.project_id for c in accepted])
            }
            for collaboration in accepted:
                project = projects.get(collaboration.project_id)
                if project is None:
                    continue
                access = await resolve_project_access(uow, user_id, project.id, project)
                views.append(ProjectView(project=project, access=access))
            return views

    async def get(self, project_id: UUID, user_id: UUID) -> ProjectView:
        """Project detail with caller access and accepted collaborators."""
        async with self._uow_factory() as uow:
            access = await resolve_project_access(uow, user_id, project_id)
            project = await uow.projects.get(project_id)
            collaborators = await uow.collaborations.list_accepted_for_project(project_id)
            return ProjectView(project=project, access=access, collaborators=collaborators)

    async def update(
        self,
        project_id: UUID,
        user_id: UUID,
        name: str | None = None,
        description: str | None = None,
        category: str | None = None,
        status: ProjectStatus | None = None,
    ) -> Project:
        """Update project fields. Requires ``can_edit``."""
        async with self._uow_factory() as uow:
            project = await uow.projects.get(project_id)
            access = await resolve_project_access(uow, user_id, project_id, project)
            require_permission(access, "can_edit")

            if name is not None:
                project.name = name.strip()
            if description is not None:
                project.description = description.strip()
            if category is not None:
                project.category = category.strip() or "General"
            if status is not None:
                project.status = status
            project.updated_at = datetime.utcnow()

            updated = await uow.projects.update(project)
            await uow.commit()
            return updated

    async def delete(self, project_id: UUID, user_id: UUID) -> None:
        """Delete a project. Owner only; requests and messages cascade."""
        async with self._uow_factory() as uow:
            access = await resolve_project_access(uow, user_id, project_id)
            if not access.is_owner:
                raise NotProjectOwnerError(str(project_id), "delete this project")

            await uow.projects.delete(project_id)
            await uow.commit()

            logger.info("project_deleted", project_id=str(project_id), owner_id=str(user_id))

    async def get_collaborators(
        self, project_id: UUID, user_id: UUID
    ) -> list[CollaborationRequest]:
        """Accepted collaborators, visible to anyone with access."""
        async with self._uow_factory() as uow:
            await resolve_project_access(uow, user_id, project_id)
            return await uow.collaborations.list_accepted_for_project(project_id)  # type: ignore[no-any-return]
