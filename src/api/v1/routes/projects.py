"""Project API routes, including project-scoped collaborators and messages."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import ActiveUser
from api.dependencies.services import (
    get_access_service,
    get_message_service,
    get_project_service,
)
from api.v1.schemas.collaboration import CollaborationListResponse, CollaborationResponse
from api.v1.schemas.project import (
    AccessDetailResponse,
    AccessResponse,
    ProjectCreate,
    ProjectDetail,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectMessageCreate,
    ProjectMessageDetailResponse,
    ProjectMessageListResponse,
    ProjectMessageResponse,
    ProjectResponse,
    ProjectUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.access_service import AccessService
from domain.services.message_service import MessageService
from domain.services.project_service import ProjectService, ProjectView

router = APIRouter(prefix="/projects", tags=["projects"])


def _detail(view: ProjectView) -> ProjectDetail:
    base = ProjectResponse.from_view(view)
    return ProjectDetail(
        **base.model_dump(),
        collaborators=[CollaborationResponse.from_entity(c) for c in view.collaborators],
    )


@router.post(
    "",
    response_model=ProjectDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    responses={201: {"description": "Project created; the caller is its owner"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_project(
    request: Request,
    body: ProjectCreate,
    user: ActiveUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectDetailResponse:
    """Create a project owned by the caller."""
    project = await service.create(
        owner_id=user.id,
        name=body.name,
        description=body.description,
        category=body.category,
        status=body.status,
    )
    view = await service.get(project.id, user.id)
    return ProjectDetailResponse(data=_detail(view))


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List the caller's projects",
    responses={200: {"description": "Owned and collaborated projects"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_projects(
    request: Request,
    user: ActiveUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectListResponse:
    """Owned projects (``user_role="owner"``) followed by accepted collaborations."""
    views = await service.list_for_user(user.id)
    data = [ProjectResponse.from_view(v) for v in views]
    return ProjectListResponse(data=data, meta={"total": len(data)})


@router.get(
    "/{project_id}",
    response_model=ProjectDetailResponse,
    summary="Get project details",
    responses={
        200: {"description": "Project with caller role and collaborators"},
        403: {"description": "Not the owner or a collaborator"},
        404: {"description": "Project not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_project(
    request: Request,
    project_id: UUID,
    user: ActiveUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectDetailResponse:
    """Get a project the caller owns or collaborates on."""
    view = await service.get(project_id, user.id)
    return ProjectDetailResponse(data=_detail(view))


@router.patch(
    "/{project_id}",
    response_model=ProjectDetailResponse,
    summary="Update a project",
    responses={
        200: {"description": "Project updated"},
        403: {"description": "Missing can_edit permission"},
        404: {"description": "Project not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_project(
    request: Request,
    project_id: UUID,
    body: ProjectUpdate,
    user: ActiveUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectDetailResponse:
    """Update project fields. Requires the ``can_edit`` permission."""
    await service.update(
        project_id,
        user.id,
        name=body.name,
        description=body.description,
        category=body.category,
        status=body.status,
    )
    view = await service.get(project_id, user.id)
    return ProjectDetailResponse(data=_detail(view))


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a project",
    responses={
        204: {"description": "Project deleted"},
        403: {"description": "Only the owner can delete"},
        404: {"description": "Project not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_project(
    request: Request,
    project_id: UUID,
    user: ActiveUser,
    service: ProjectService = Depends(get_project_service),
) -> None:
    """Delete a project with its requests and messages."""
    await service.delete(project_id, user.id)


@router.get(
    "/{project_id}/access",
    response_model=AccessDetailResponse,
    summary="Resolve the caller's access",
    responses={
        200: {"description": "Effective role and permissions"},
        403: {"description": "Not the owner or a collaborator"},
        404: {"description": "Project not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_project_access(
    request: Request,
    project_id: UUID,
    user: ActiveUser,
    service: AccessService = Depends(get_access_service),
) -> AccessDetailResponse:
    """The caller's effective role and permission flags on the project."""
    access = await service.resolve_access(user.id, project_id)
    return AccessDetailResponse(data=AccessResponse.from_entity(access))


@router.get(
    "/{project_id}/collaborators",
    response_model=CollaborationListResponse,
    summary="List project collaborators",
    responses={
        200: {"description": "Accepted collaborators"},
        403: {"description": "Not the owner or a collaborator"},
        404: {"description": "Project not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_collaborators(
    request: Request,
    project_id: UUID,
    user: ActiveUser,
    service: ProjectService = Depends(get_project_service),
) -> CollaborationListResponse:
    """Accepted collaboration requests of the project, newest first."""
    collaborators = await service.get_collaborators(project_id, user.id)
    data = [CollaborationResponse.from_entity(c) for c in collaborators]
    return CollaborationListResponse(data=data, meta={"total": len(data)})


@router.post(
    "/{project_id}/messages",
    response_model=ProjectMessageDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a project message",
    responses={
        201: {"description": "Message posted"},
        403: {"description": "Not the owner or a collaborator"},
        404: {"description": "Project not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def post_message(
    request: Request,
    project_id: UUID,
    body: ProjectMessageCreate,
    user: ActiveUser,
    service: MessageService = Depends(get_message_service),
) -> ProjectMessageDetailResponse:
    """Post to the project thread."""
    message = await service.send(project_id, user.id, body.content)
    return ProjectMessageDetailResponse(data=ProjectMessageResponse.from_entity(message))


@router.get(
    "/{project_id}/messages",
    response_model=ProjectMessageListResponse,
    summary="List project messages",
    responses={
        200: {"description": "Most recent messages, newest first"},
        403: {"description": "Not the owner or a collaborator"},
        404: {"description": "Project not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_messages(
    request: Request,
    project_id: UUID,
    user: ActiveUser,
    limit: int = Query(50, ge=1, le=100),
    service: MessageService = Depends(get_message_service),
) -> ProjectMessageListResponse:
    """Read the project thread."""
    messages = await service.list(project_id, user.id, limit=limit)
    data = [ProjectMessageResponse.from_entity(m) for m in messages]
    return ProjectMessageListResponse(data=data, meta={"total": len(data)})
