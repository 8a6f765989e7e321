"""SQLAlchemy implementation of the project message repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.message import ProjectMessage
from infrastructure.database.models import ProjectMessageModel


class SQLAlchemyMessageRepository:
    """SQLAlchemy implementation of IMessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, message: ProjectMessage) -> ProjectMessage:
        model = ProjectMessageModel(
            id=message.id,
            project_id=message.project_id,
            sender_id=message.sender_id,
            content=message.content,
            created_at=message.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def list_for_project(self, project_id: UUID, limit: int = 50) -> list[ProjectMessage]:
        stmt = (
            select(ProjectMessageModel)
            .where(ProjectMessageModel.project_id == project_id)
            .order_by(ProjectMessageModel.created_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: ProjectMessageModel) -> ProjectMessage:
        return ProjectMessage(
            id=model.id,
            project_id=model.project_id,
            sender_id=model.sender_id,
            content=model.content,
            created_at=model.created_at,
        )
