"""Collaboration ledger service: request lifecycle and its invariants."""

from collections.abc import AsyncIterator, Awaitable, Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    CollaborationNotFoundError,
    DuplicateCollaborationError,
    InvalidCollaborationStateError,
    NotProjectOwnerError,
    NotRequestReceiverError,
    ProjectNotFoundError,
    SelfCollaborationError,
    UserNotFoundError,
)
from domain.entities.collaboration import (
    CollaborationPermissions,
    CollaborationRequest,
    CollaborationStatus,
    CollaboratorRole,
)
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class CollaborationFeed:
    """Async iterable over a ledger query.

    Nothing is read until iteration starts, and each new iteration re-runs
    the query in a fresh unit of work, so the feed can be consumed any number
    of times.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        fetch: Callable[[IUnitOfWork], Awaitable[list[CollaborationRequest]]],
    ) -> None:
        self._uow_factory = uow_factory
        self._fetch = fetch

    def __aiter__(self) -> AsyncIterator[CollaborationRequest]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[CollaborationRequest]:
        async with self._uow_factory() as uow:
            requests = await self._fetch(uow)
        for request in requests:
            yield request

    async def to_list(self) -> list[CollaborationRequest]:
        return [request async for request in self]


class CollaborationService:
    """Service layer for the collaboration request lifecycle."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def request_collaboration(
        self,
        project_id: UUID,
        sender_id: UUID,
        receiver_id: UUID,
        role: CollaboratorRole = CollaboratorRole.EDITOR,
        message: str = "",
        permission_overrides: dict[str, bool | None] | None = None,
    ) -> CollaborationRequest:
        """Create a pending collaboration request.

        Args:
            project_id: The project to collaborate on.
            sender_id: The acting user; must own the project.
            receiver_id: The user being invited.
            role: Collaborator role granted on acceptance.
            message: Optional note shown to the receiver.
            permission_overrides: Flags that replace the role defaults.

        Raises:
            ProjectNotFoundError: If the project does not exist.
            NotProjectOwnerError: If the sender is not the project owner.
            UserNotFoundError: If the receiver does not exist.
            SelfCollaborationError: If the receiver is the owner.
            DuplicateCollaborationError: If a pending or accepted request
                already exists for this project and receiver.
        """
        async with self._uow_factory() as uow:
            project = await uow.projects.get(project_id)
            if not project:
                raise ProjectNotFoundError(str(project_id))

            if not project.is_owned_by(sender_id):
                raise NotProjectOwnerError(str(project_id), "send collaboration requests")

            receiver = await uow.users.get(receiver_id)
            if not receiver:
                raise UserNotFoundError(str(receiver_id))

            if receiver_id == project.owner_id:
                raise SelfCollaborationError()

            existing = await uow.collaborations.get_active(project_id, receiver_id)
            if existing:
                raise DuplicateCollaborationError(str(project_id), str(receiver_id))

            permissions = CollaborationPermissions.for_role(role).with_overrides(
                **(permission_overrides or {})
            )
            request = CollaborationRequest(
                project_id=project_id,
                sender_id=sender_id,
                receiver_id=receiver_id,
                role=role,
                permissions=permissions,
                message=message.strip(),
            )

            try:
                created = await uow.collaborations.create(request)
                await uow.commit()
            except IntegrityError:
                # A concurrent request won the partial unique index.
                await uow.rollback()
                raise DuplicateCollaborationError(str(project_id), str(receiver_id)) from None

            logger.info(
                "collaboration_requested",
                collaboration_id=str(created.id),
                project_id=str(project_id),
                receiver_id=str(receiver_id),
                role=role.value,
            )
            return created

    async def accept(self, collaboration_id: UUID, acting_user_id: UUID) -> CollaborationRequest:
        """Accept a pending request. Only the receiver may accept."""
        return await self._respond(
            collaboration_id, acting_user_id, CollaborationStatus.ACCEPTED
        )

    async def reject(self, collaboration_id: UUID, acting_user_id: UUID) -> CollaborationRequest:
        """Reject a pending request. Only the receiver may reject."""
        return await self._respond(
            collaboration_id, acting_user_id, CollaborationStatus.REJECTED
        )

    async def remove(self, collaboration_id: UUID, acting_user_id: UUID) -> CollaborationRequest:
        """Remove an accepted collaborator. Only the project owner may remove.

        Raises:
            CollaborationNotFoundError: If the request does not exist.
            NotProjectOwnerError: If the actor does not own the project.
            InvalidCollaborationStateError: If the request is not accepted.
        """
        async with self._uow_factory() as uow:
            request = await uow.collaborations.get(collaboration_id)
            if not request:
                raise CollaborationNotFoundError(str(collaboration_id))

            if not await uow.projects.is_owner(request.project_id, acting_user_id):
                raise NotProjectOwnerError(str(request.project_id), "remove collaborators")

            updated = await self._transition(uow, request, CollaborationStatus.REMOVED)
            await uow.commit()
            return updated

    def list_pending_for_receiver(self, user_id: UUID) -> CollaborationFeed:
        """Pending requests addressed to ``user_id``, newest first."""
        return CollaborationFeed(
            self._uow_factory,
            lambda uow: uow.collaborations.list_pending_for_receiver(user_id),
        )

    def list_accepted_for_project(self, project_id: UUID) -> CollaborationFeed:
        """Accepted collaborators of ``project_id``, newest first."""
        return CollaborationFeed(
            self._uow_factory,
            lambda uow: uow.collaborations.list_accepted_for_project(project_id),
        )

    async def get(self, collaboration_id: UUID, user_id: UUID) -> CollaborationRequest:
        """Get a request visible to the user (its receiver or the project owner)."""
        async with self._uow_factory() as uow:
            request = await uow.collaborations.get(collaboration_id)
            if not request:
                raise CollaborationNotFoundError(str(collaboration_id))
            if request.receiver_id != user_id and not await uow.projects.is_owner(
                request.project_id, user_id
            ):
                raise CollaborationNotFoundError(str(collaboration_id))
            return request

    # --- Internal helpers ---

    async def _respond(
        self,
        collaboration_id: UUID,
        acting_user_id: UUID,
        target: CollaborationStatus,
    ) -> CollaborationRequest:
        """Shared receiver-side transition for accept and reject."""
        async with self._uow_factory() as uow:
            request = await uow.collaborations.get(collaboration_id)
            if not request:
                raise CollaborationNotFoundError(str(collaboration_id))

            if request.receiver_id != acting_user_id:
                raise NotRequestReceiverError(str(collaboration_id))

            updated = await self._transition(uow, request, target)
            await uow.commit()
            return updated

    async def _transition(
        self,
        uow: IUnitOfWork,
        request: CollaborationRequest,
        target: CollaborationStatus,
    ) -> CollaborationRequest:
        """Apply a legal transition as a compare-and-swap on the stored status."""
        if not request.can_transition_to(target):
            raise InvalidCollaborationStateError(
                str(request.id), request.status.value, target.value
            )

        updated = await uow.collaborations.transition_status(request.id, request.status, target)
        if updated is None:
            # Status changed underneath us between the read and the write.
            current = await uow.collaborations.get(request.id)
            current_status = current.status.value if current else "missing"
            raise InvalidCollaborationStateError(str(request.id), current_status, target.value)

        logger.info(
            f"collaboration_{target.value}",
            collaboration_id=str(request.id),
            project_id=str(request.project_id),
            previous_status=request.status.value,
        )
        return updated
