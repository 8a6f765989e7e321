"""SQLAlchemy implementation of the collaboration request repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.collaboration import (
    ACTIVE_STATUSES,
    CollaborationPermissions,
    CollaborationRequest,
    CollaborationStatus,
    CollaboratorRole,
)
from infrastructure.database.models import CollaborationRequestModel

_ACTIVE_VALUES = [status.value for status in ACTIVE_STATUSES]


class SQLAlchemyCollaborationRepository:
    """SQLAlchemy implementation of ICollaborationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, request: CollaborationRequest) -> CollaborationRequest:
        """Insert a request.

        The flush raises IntegrityError when the partial unique index already
        holds an active row for this project and receiver.
        """
        model = self._to_model(request)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get(self, id: UUID) -> CollaborationRequest | None:
        """Get a request by ID."""
        stmt = select(CollaborationRequestModel).where(CollaborationRequestModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_active(
        self, project_id: UUID, receiver_id: UUID
    ) -> CollaborationRequest | None:
        """Get the pending or accepted request for a project and receiver."""
        stmt = select(CollaborationRequestModel).where(
            CollaborationRequestModel.project_id == project_id,
            CollaborationRequestModel.receiver_id == receiver_id,
            CollaborationRequestModel.status.in_(_ACTIVE_VALUES),
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_accepted(
        self, project_id: UUID, receiver_id: UUID
    ) -> CollaborationRequest | None:
        """Get the accepted request for a project and receiver."""
        stmt = select(CollaborationRequestModel).where(
            CollaborationRequestModel.project_id == project_id,
            CollaborationRequestModel.receiver_id == receiver_id,
            CollaborationRequestModel.status == CollaborationStatus.ACCEPTED.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def transition_status(
        self,
        id: UUID,
        expected: CollaborationStatus,
        target: CollaborationStatus,
    ) -> CollaborationRequest | None:
        """Conditional update: only rows still in ``expected`` move to ``target``."""
        stmt = (
            update(CollaborationRequestModel)
            .where(
                CollaborationRequestModel.id == id,
                CollaborationRequestModel.status == expected.value,
            )
            .values(status=target.value, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return None

        await self._session.flush()
        refreshed = await self._session.execute(
            select(CollaborationRequestModel)
            .where(CollaborationRequestModel.id == id)
            .execution_options(populate_existing=True)
        )
        return self._to_entity(refreshed.scalar_one())

    async def list_pending_for_receiver(self, receiver_id: UUID) -> list[CollaborationRequest]:
        """Pending requests addressed to a user, newest first."""
        stmt = (
            select(CollaborationRequestModel)
            .where(
                CollaborationRequestModel.receiver_id == receiver_id,
                CollaborationRequestModel.status == CollaborationStatus.PENDING.value,
            )
            .order_by(CollaborationRequestModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_accepted_for_project(self, project_id: UUID) -> list[CollaborationRequest]:
        """Accepted requests of a project, newest first."""
        stmt = (
            select(CollaborationRequestModel)
            .where(
                CollaborationRequestModel.project_id == project_id,
                CollaborationRequestModel.status == CollaborationStatus.ACCEPTED.value,
            )
            .order_by(CollaborationRequestModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_accepted_for_receiver(self, receiver_id: UUID) -> list[CollaborationRequest]:
        """Accepted requests where the user is the receiver, newest first."""
        stmt = (
            select(CollaborationRequestModel)
            .where(
                CollaborationRequestModel.receiver_id == receiver_id,
                CollaborationRequestModel.status == CollaborationStatus.ACCEPTED.value,
            )
            .order_by(CollaborationRequestModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_all(
        self, status: CollaborationStatus | None = None
    ) -> list[CollaborationRequest]:
        """All requests, newest first."""
        stmt = select(CollaborationRequestModel).order_by(
            CollaborationRequestModel.created_at.desc()
        )
        if status is not None:
            stmt = stmt.where(CollaborationRequestModel.status == status.value)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: CollaborationRequestModel) -> CollaborationRequest:
        """Convert ORM model to domain entity."""
        return CollaborationRequest(
            id=model.id,
            project_id=model.project_id,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            status=CollaborationStatus(model.status),
            role=CollaboratorRole(model.role),
            permissions=CollaborationPermissions(
                can_edit=model.can_edit,
                can_delete=model.can_delete,
                can_invite=model.can_invite,
                can_upload=model.can_upload,
            ),
            message=model.message,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: CollaborationRequest) -> CollaborationRequestModel:
        """Convert domain entity to ORM model."""
        permissions = entity.permissions or CollaborationPermissions.for_role(entity.role)
        return CollaborationRequestModel(
            id=entity.id,
            project_id=entity.project_id,
            sender_id=entity.sender_id,
            receiver_id=entity.receiver_id,
            status=entity.status.value,
            role=entity.role.value,
            can_edit=permissions.can_edit,
            can_delete=permissions.can_delete,
            can_invite=permissions.can_invite,
            can_upload=permissions.can_upload,
            message=entity.message,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
