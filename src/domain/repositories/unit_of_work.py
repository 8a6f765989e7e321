"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.collaboration_repository import ICollaborationRepository
from domain.repositories.message_repository import IMessageRepository
from domain.repositories.project_repository import IProjectRepository
from domain.repositories.user_repository import IUserRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    users: IUserRepository
    projects: IProjectRepository
    collaborations: ICollaborationRepository
    messages: IMessageRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
