"""Collaboration request repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.collaboration import CollaborationRequest, CollaborationStatus


class ICollaborationRepository(Protocol):
    """Repository interface for CollaborationRequest entities (the ledger)."""

    async def create(self, request: CollaborationRequest) -> CollaborationRequest:
        """Insert a request.

        Raises ``sqlalchemy.exc.IntegrityError`` when an active request
        already exists for the same project and receiver.
        """
        ...

    async def get(self, id: UUID) -> CollaborationRequest | None:
        """Get a request by ID."""
        ...

    async def get_active(
        self, project_id: UUID, receiver_id: UUID
    ) -> CollaborationRequest | None:
        """Get the pending or accepted request for a project and receiver."""
        ...

    async def get_accepted(
        self, project_id: UUID, receiver_id: UUID
    ) -> CollaborationRequest | None:
        """Get the accepted request for a project and receiver."""
        ...

    async def transition_status(
        self,
        id: UUID,
        expected: CollaborationStatus,
        target: CollaborationStatus,
    ) -> CollaborationRequest | None:
        """Move a request from ``expected`` to ``target`` atomically.

        Returns None when the stored status is no longer ``expected``.
        """
        ...

    async def list_pending_for_receiver(self, receiver_id: UUID) -> list[CollaborationRequest]:
        """Pending requests addressed to a user, newest first."""
        ...

    async def list_accepted_for_project(self, project_id: UUID) -> list[CollaborationRequest]:
        """Accepted requests of a project, newest first."""
        ...

    async def list_accepted_for_receiver(self, receiver_id: UUID) -> list[CollaborationRequest]:
        """Accepted requests where the user is the receiver, newest first."""
        ...

    async def list_all(
        self, status: CollaborationStatus | None = None
    ) -> list[CollaborationRequest]:
        """All requests, newest first, optionally filtered by status."""
        ...
