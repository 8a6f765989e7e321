"""Unit tests for the project access resolver."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    InsufficientProjectPermissionError,
    ProjectAccessDeniedError,
    ProjectNotFoundError,
)
from domain.entities.access import ProjectRole
from domain.entities.collaboration import (
    CollaborationPermissions,
    CollaborationRequest,
    CollaborationStatus,
    CollaboratorRole,
)
from domain.entities.project import Project
from domain.services.access_service import AccessService, require_permission
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> AccessService:
    return AccessService(lambda: uow)


def _accepted(
    project_id: UUID, owner_id: UUID, receiver_id: UUID, role: CollaboratorRole
) -> CollaborationRequest:
    return CollaborationRequest(
        project_id=project_id,
        sender_id=owner_id,
        receiver_id=receiver_id,
        status=CollaborationStatus.ACCEPTED,
        role=role,
    )


class TestResolveAccess:
    async def test_owner_gets_full_permissions(
        self,
        service: AccessService,
        uow: FakeUnitOfWork,
        sample_project: Project,
        owner_id: UUID,
    ):
        uow.projects.get.return_value = sample_project

        access = await service.resolve_access(owner_id, sample_project.id)

        assert access.role == ProjectRole.OWNER
        assert access.is_owner
        assert access.permissions == CollaborationPermissions.full()
        uow.collaborations.get_accepted.assert_not_called()

    @pytest.mark.parametrize(
        ("role", "expected"),
        [
            (CollaboratorRole.VIEWER, ProjectRole.VIEWER),
            (CollaboratorRole.EDITOR, ProjectRole.EDITOR),
            (CollaboratorRole.ADMIN, ProjectRole.ADMIN),
        ],
    )
    async def test_accepted_collaborator_gets_request_role(
        self,
        service: AccessService,
        uow: FakeUnitOfWork,
        sample_project: Project,
        owner_id: UUID,
        receiver_id: UUID,
        role: CollaboratorRole,
        expected: ProjectRole,
    ):
        request = _accepted(sample_project.id, owner_id, receiver_id, role)
        uow.projects.get.return_value = sample_project
        uow.collaborations.get_accepted.return_value = request

        access = await service.resolve_access(receiver_id, sample_project.id)

        assert access.role == expected
        assert not access.is_owner
        assert access.permissions == CollaborationPermissions.for_role(role)
        assert access.collaboration_id == request.id

    async def test_project_admin_collaborator_cannot_delete(
        self,
        service: AccessService,
        uow: FakeUnitOfWork,
        sample_project: Project,
        owner_id: UUID,
        receiver_id: UUID,
    ):
        uow.projects.get.return_value = sample_project
        uow.collaborations.get_accepted.return_value = _accepted(
            sample_project.id, owner_id, receiver_id, CollaboratorRole.ADMIN
        )

        access = await service.resolve_access(receiver_id, sample_project.id)

        assert not access.permissions.can_delete

    async def test_no_accepted_request_is_forbidden(
        self,
        service: AccessService,
        uow: FakeUnitOfWork,
        sample_project: Project,
    ):
        uow.projects.get.return_value = sample_project
        uow.collaborations.get_accepted.return_value = None

        with pytest.raises(ProjectAccessDeniedError):
            await service.resolve_access(uuid4(), sample_project.id)

    async def test_missing_project(self, service: AccessService, uow: FakeUnitOfWork):
        uow.projects.get.return_value = None

        with pytest.raises(ProjectNotFoundError):
            await service.resolve_access(uuid4(), uuid4())

    async def test_resolution_does_not_write(
        self,
        service: AccessService,
        uow: FakeUnitOfWork,
        sample_project: Project,
        owner_id: UUID,
    ):
        uow.projects.get.return_value = sample_project

        await service.resolve_access(owner_id, sample_project.id)

        assert not uow.committed


class TestHasAccess:
    async def test_false_when_denied(
        self, service: AccessService, uow: FakeUnitOfWork, sample_project: Project
    ):
        uow.projects.get.return_value = sample_project
        uow.collaborations.get_accepted.return_value = None

        assert await service.has_access(uuid4(), sample_project.id) is False

    async def test_true_for_owner(
        self,
        service: AccessService,
        uow: FakeUnitOfWork,
        sample_project: Project,
        owner_id: UUID,
    ):
        uow.projects.get.return_value = sample_project

        assert await service.has_access(owner_id, sample_project.id) is True


class TestRequirePermission:
    async def test_viewer_lacks_can_edit(
        self,
        service: AccessService,
        uow: FakeUnitOfWork,
        sample_project: Project,
        owner_id: UUID,
        receiver_id: UUID,
    ):
        uow.projects.get.return_value = sample_project
        uow.collaborations.get_accepted.return_value = _accepted(
            sample_project.id, owner_id, receiver_id, CollaboratorRole.VIEWER
        )
        access = await service.resolve_access(receiver_id, sample_project.id)

        with pytest.raises(InsufficientProjectPermissionError) as exc_info:
            require_permission(access, "can_edit")

        assert exc_info.value.details == {"required_permission": "can_edit"}
