"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.project import Project
from domain.entities.user import SystemRole, User


class FakeUnitOfWork:
    """Fake Unit of Work with all 4 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.users.is_deleted.return_value = False
        self.projects = AsyncMock()
        self.collaborations = AsyncMock()
        self.messages = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def owner_id() -> UUID:
    """A random project owner ID."""
    return uuid4()


@pytest.fixture
def receiver_id() -> UUID:
    """A random receiver ID (distinct from owner_id)."""
    return uuid4()


@pytest.fixture
def project_id() -> UUID:
    """A random project ID."""
    return uuid4()


@pytest.fixture
def sample_project(project_id: UUID, owner_id: UUID) -> Project:
    return Project(id=project_id, name="Website", owner_id=owner_id)


@pytest.fixture
def receiver(receiver_id: UUID) -> User:
    return User(id=receiver_id, email="receiver@example.com", name="Receiver")


def make_admin(active: bool = True) -> User:
    """Build an admin user entity."""
    return User(
        email=f"admin-{uuid4().hex[:8]}@example.com",
        role=SystemRole.ADMIN,
        is_active=active,
    )
