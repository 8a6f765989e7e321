"""Integration tests for the SQLAlchemy repositories against a real schema."""

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import DuplicateCollaborationError
from domain.entities.collaboration import (
    CollaborationPermissions,
    CollaborationRequest,
    CollaborationStatus,
    CollaboratorRole,
)
from domain.entities.message import ProjectMessage
from domain.entities.project import Project
from domain.entities.user import SystemRole, User
from domain.services.collaboration_service import CollaborationService
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

UowFactory = Callable[[], SQLAlchemyUnitOfWork]


@pytest.fixture
async def ledger(uow_factory: UowFactory) -> tuple[User, User, Project]:
    """An owner, a receiver and a project owned by the former."""
    async with uow_factory() as uow:
        owner = await uow.users.create(User(email="owner@example.com", name="Owner"))
        receiver = await uow.users.create(User(email="bob@example.com", name="Bob"))
        project = await uow.projects.create(Project(name="Atlas", owner_id=owner.id))
        await uow.commit()
    return owner, receiver, project


def _request(
    owner: User, receiver: User, project: Project, created_at: datetime | None = None
) -> CollaborationRequest:
    return CollaborationRequest(
        project_id=project.id,
        sender_id=owner.id,
        receiver_id=receiver.id,
        role=CollaboratorRole.VIEWER,
        permissions=CollaborationPermissions.for_role(CollaboratorRole.VIEWER),
        created_at=created_at or datetime.utcnow(),
    )


class TestActiveRequestUniqueness:
    async def test_second_active_request_violates_index(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, receiver, project = ledger
        async with uow_factory() as uow:
            await uow.collaborations.create(_request(owner, receiver, project))
            await uow.commit()

        async with uow_factory() as uow:
            with pytest.raises(IntegrityError):
                await uow.collaborations.create(_request(owner, receiver, project))

    async def test_terminal_rows_do_not_block_new_request(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, receiver, project = ledger
        async with uow_factory() as uow:
            first = await uow.collaborations.create(_request(owner, receiver, project))
            await uow.collaborations.transition_status(
                first.id, CollaborationStatus.PENDING, CollaborationStatus.REJECTED
            )
            await uow.commit()

        async with uow_factory() as uow:
            second = await uow.collaborations.create(_request(owner, receiver, project))
            await uow.commit()

        assert second.id != first.id
        assert second.status == CollaborationStatus.PENDING


class TestTransitionStatus:
    async def test_applies_when_expected_status_matches(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, receiver, project = ledger
        async with uow_factory() as uow:
            created = await uow.collaborations.create(_request(owner, receiver, project))
            updated = await uow.collaborations.transition_status(
                created.id, CollaborationStatus.PENDING, CollaborationStatus.ACCEPTED
            )
            await uow.commit()

        assert updated is not None
        assert updated.status == CollaborationStatus.ACCEPTED
        assert updated.permissions == CollaborationPermissions.for_role(CollaboratorRole.VIEWER)

    async def test_returns_none_on_stale_expected_status(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, receiver, project = ledger
        async with uow_factory() as uow:
            created = await uow.collaborations.create(_request(owner, receiver, project))
            await uow.collaborations.transition_status(
                created.id, CollaborationStatus.PENDING, CollaborationStatus.REJECTED
            )
            await uow.commit()

        async with uow_factory() as uow:
            result = await uow.collaborations.transition_status(
                created.id, CollaborationStatus.PENDING, CollaborationStatus.ACCEPTED
            )
            stored = await uow.collaborations.get(created.id)

        assert result is None
        assert stored is not None
        assert stored.status == CollaborationStatus.REJECTED


class TestCascades:
    async def test_deleting_project_removes_requests_and_messages(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, receiver, project = ledger
        async with uow_factory() as uow:
            request = await uow.collaborations.create(_request(owner, receiver, project))
            await uow.messages.create(
                ProjectMessage(project_id=project.id, sender_id=owner.id, content="hi")
            )
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.projects.delete(project.id) is True
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.collaborations.get(request.id) is None
            assert await uow.messages.list_for_project(project.id) == []

    async def test_deleting_user_removes_owned_projects(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, _, project = ledger
        async with uow_factory() as uow:
            assert await uow.users.delete(owner.id) is True
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.projects.get(project.id) is None


class TestUserQueries:
    async def test_lock_active_admin_ids_skips_inactive(self, uow_factory: UowFactory) -> None:
        async with uow_factory() as uow:
            active = await uow.users.create(User(email="a@example.com", role=SystemRole.ADMIN))
            await uow.users.create(
                User(email="b@example.com", role=SystemRole.ADMIN, is_active=False)
            )
            await uow.users.create(User(email="c@example.com"))
            await uow.commit()

        async with uow_factory() as uow:
            ids = await uow.users.lock_active_admin_ids()

        assert ids == [active.id]

    async def test_search_matches_name_or_email_case_insensitively(
        self, uow_factory: UowFactory
    ) -> None:
        async with uow_factory() as uow:
            me = await uow.users.create(User(email="me@example.com", name="Me"))
            await uow.users.create(User(email="jane@corp.io", name="Jane Doe"))
            await uow.users.create(User(email="doe.john@example.com", name="John"))
            await uow.commit()

        async with uow_factory() as uow:
            found = await uow.users.search("DOE", exclude_id=me.id)

        assert sorted(u.email for u in found) == ["doe.john@example.com", "jane@corp.io"]

    async def test_email_is_unique(self, uow_factory: UowFactory) -> None:
        async with uow_factory() as uow:
            await uow.users.create(User(email="dup@example.com"))
            await uow.commit()

        async with uow_factory() as uow:
            with pytest.raises(IntegrityError):
                await uow.users.create(User(email="DUP@example.com"))


class TestCollaborationFeed:
    async def test_feed_is_lazy_and_restartable(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, receiver, project = ledger
        service = CollaborationService(uow_factory)
        feed = service.list_pending_for_receiver(receiver.id)

        # Created after the feed object: still visible because nothing ran yet
        async with uow_factory() as uow:
            created = await uow.collaborations.create(_request(owner, receiver, project))
            await uow.commit()

        first = [r.id async for r in feed]
        second = await feed.to_list()

        assert first == [created.id]
        assert [r.id for r in second] == [created.id]

    async def test_accepted_feed_lists_only_accepted_collaborators(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, receiver, project = ledger
        async with uow_factory() as uow:
            created = await uow.collaborations.create(_request(owner, receiver, project))
            await uow.commit()

        service = CollaborationService(uow_factory)
        before = await service.list_accepted_for_project(project.id).to_list()
        await service.accept(created.id, receiver.id)
        after = await service.list_accepted_for_project(project.id).to_list()

        assert before == []
        assert [r.id for r in after] == [created.id]

    async def test_pending_feed_is_newest_first(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, receiver, _ = ledger
        base = datetime(2026, 1, 1)
        async with uow_factory() as uow:
            created = []
            for i in range(3):
                project = await uow.projects.create(Project(name=f"P{i}", owner_id=owner.id))
                created.append(
                    await uow.collaborations.create(
                        _request(owner, receiver, project, base + timedelta(minutes=i))
                    )
                )
            await uow.commit()

        feed = await CollaborationService(uow_factory).list_pending_for_receiver(
            receiver.id
        ).to_list()

        assert [r.id for r in feed] == [r.id for r in reversed(created)]

    async def test_accepted_feed_is_newest_first(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, _, project = ledger
        base = datetime(2026, 1, 1)
        async with uow_factory() as uow:
            created = []
            for i in range(3):
                member = await uow.users.create(User(email=f"member{i}@example.com"))
                request = await uow.collaborations.create(
                    _request(owner, member, project, base + timedelta(minutes=i))
                )
                await uow.collaborations.transition_status(
                    request.id, CollaborationStatus.PENDING, CollaborationStatus.ACCEPTED
                )
                created.append(request)
            await uow.commit()

        feed = await CollaborationService(uow_factory).list_accepted_for_project(
            project.id
        ).to_list()

        assert [r.id for r in feed] == [r.id for r in reversed(created)]


class TestConcurrentRequests:
    async def test_two_simultaneous_requests_yield_one_success_and_one_conflict(
        self, uow_factory: UowFactory, ledger: tuple[User, User, Project]
    ) -> None:
        owner, receiver, project = ledger
        service = CollaborationService(uow_factory)

        results = await asyncio.gather(
            service.request_collaboration(project.id, owner.id, receiver.id),
            service.request_collaboration(project.id, owner.id, receiver.id),
            return_exceptions=True,
        )

        successes = [r for r in results if isinstance(r, CollaborationRequest)]
        conflicts = [r for r in results if isinstance(r, DuplicateCollaborationError)]
        assert len(successes) == 1
        assert len(conflicts) == 1


class TestDeletedUsers:
    async def test_delete_remembers_id_and_email(self, uow_factory: UowFactory) -> None:
        async with uow_factory() as uow:
            user = await uow.users.create(User(email="gone@example.com"))
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.users.delete(user.id) is True
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.users.is_deleted(user.id, "other@example.com") is True
            assert await uow.users.is_deleted(uuid4(), "GONE@example.com") is True
            assert await uow.users.is_deleted(uuid4(), "fresh@example.com") is False

    async def test_deleting_missing_user_records_nothing(self, uow_factory: UowFactory) -> None:
        missing = uuid4()
        async with uow_factory() as uow:
            assert await uow.users.delete(missing) is False
            await uow.commit()

        async with uow_factory() as uow:
            assert await uow.users.is_deleted(missing, "nobody@example.com") is False
