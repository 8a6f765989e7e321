"""Collaboration request API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import ActiveUser
from api.dependencies.services import get_collaboration_service
from api.v1.schemas.collaboration import (
    CollaborationCreate,
    CollaborationDetailResponse,
    CollaborationListResponse,
    CollaborationResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.collaboration_service import CollaborationService

router = APIRouter(prefix="/collaborations", tags=["collaborations"])


@router.post(
    "",
    response_model=CollaborationDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a collaboration request",
    responses={
        201: {"description": "Request created in pending status"},
        400: {"description": "Receiver is the project owner"},
        403: {"description": "Only the project owner can send requests"},
        404: {"description": "Project or receiver not found"},
        409: {"description": "An active request already exists"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def request_collaboration(
    request: Request,
    body: CollaborationCreate,
    user: ActiveUser,
    service: CollaborationService = Depends(get_collaboration_service),
) -> CollaborationDetailResponse:
    """Invite a user to collaborate on a project the caller owns."""
    created = await service.request_collaboration(
        project_id=body.project_id,
        sender_id=user.id,
        receiver_id=body.receiver_id,
        role=body.role,
        message=body.message,
        permission_overrides=body.permissions.model_dump() if body.permissions else None,
    )
    return CollaborationDetailResponse(data=CollaborationResponse.from_entity(created))


@router.get(
    "/pending",
    response_model=CollaborationListResponse,
    summary="List pending requests",
    responses={200: {"description": "Pending requests addressed to the caller"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_pending(
    request: Request,
    user: ActiveUser,
    service: CollaborationService = Depends(get_collaboration_service),
) -> CollaborationListResponse:
    """Pending requests the caller can accept or reject, newest first."""
    data = [
        CollaborationResponse.from_entity(r)
        async for r in service.list_pending_for_receiver(user.id)
    ]
    return CollaborationListResponse(data=data, meta={"total": len(data)})


@router.get(
    "/{collaboration_id}",
    response_model=CollaborationDetailResponse,
    summary="Get a collaboration request",
    responses={
        200: {"description": "Request details"},
        404: {"description": "Request not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_collaboration(
    request: Request,
    collaboration_id: UUID,
    user: ActiveUser,
    service: CollaborationService = Depends(get_collaboration_service),
) -> CollaborationDetailResponse:
    """Visible to the receiver and the project owner."""
    found = await service.get(collaboration_id, user.id)
    return CollaborationDetailResponse(data=CollaborationResponse.from_entity(found))


@router.post(
    "/{collaboration_id}/accept",
    response_model=CollaborationDetailResponse,
    summary="Accept a request",
    responses={
        200: {"description": "Request accepted"},
        403: {"description": "Only the receiver can accept"},
        404: {"description": "Request not found"},
        409: {"description": "Request is not pending"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def accept_collaboration(
    request: Request,
    collaboration_id: UUID,
    user: ActiveUser,
    service: CollaborationService = Depends(get_collaboration_service),
) -> CollaborationDetailResponse:
    """Accept a pending request addressed to the caller."""
    updated = await service.accept(collaboration_id, user.id)
    return CollaborationDetailResponse(data=CollaborationResponse.from_entity(updated))


@router.post(
    "/{collaboration_id}/reject",
    response_model=CollaborationDetailResponse,
    summary="Reject a request",
    responses={
        200: {"description": "Request rejected"},
        403: {"description": "Only the receiver can reject"},
        404: {"description": "Request not found"},
        409: {"description": "Request is not pending"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def reject_collaboration(
    request: Request,
    collaboration_id: UUID,
    user: ActiveUser,
    service: CollaborationService = Depends(get_collaboration_service),
) -> CollaborationDetailResponse:
    """Reject a pending request addressed to the caller."""
    updated = await service.reject(collaboration_id, user.id)
    return CollaborationDetailResponse(data=CollaborationResponse.from_entity(updated))


@router.delete(
    "/{collaboration_id}",
    response_model=CollaborationDetailResponse,
    summary="Remove a collaborator",
    responses={
        200: {"description": "Collaborator removed"},
        403: {"description": "Only the project owner can remove collaborators"},
        404: {"description": "Request not found"},
        409: {"description": "Request is not accepted"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_collaborator(
    request: Request,
    collaboration_id: UUID,
    user: ActiveUser,
    service: CollaborationService = Depends(get_collaboration_service),
) -> CollaborationDetailResponse:
    """Move an accepted request to removed. The receiver loses access immediately."""
    updated = await service.remove(collaboration_id, user.id)
    return CollaborationDetailResponse(data=CollaborationResponse.from_entity(updated))
