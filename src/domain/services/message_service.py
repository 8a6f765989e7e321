"""Project message service."""

from collections.abc import Callable
from uuid import UUID

from domain.entities.message import ProjectMessage
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_service import resolve_project_access


class MessageService:
    """Messages posted to a project's thread. Owner and collaborators only."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def send(self, project_id: UUID, sender_id: UUID, content: str) -> ProjectMessage:
        async with self._uow_factory() as uow:
            await resolve_project_access(uow, sender_id, project_id)

            message = ProjectMessage(
                project_id=project_id, sender_id=sender_id, content=content.strip()
            )
            created = await uow.messages.create(message)
            await uow.commit()
            return created

    async def list(self, project_id: UUID, user_id: UUID, limit: int = 50) -> list[ProjectMessage]:
        async with self._uow_factory() as uow:
            await resolve_project_access(uow, user_id, project_id)
            return await uow.messages.list_for_project(project_id, limit=limit)  # type: ignore[no-any-return]
