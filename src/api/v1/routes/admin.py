"""Admin API routes. Every endpoint requires the admin system role."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import AdminUser
from api.dependencies.services import get_admin_service
from api.v1.schemas.collaboration import CollaborationListResponse, CollaborationResponse
from api.v1.schemas.user import UserDetailResponse, UserListResponse, UserResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.collaboration import CollaborationStatus
from domain.entities.user import SystemRole
from domain.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/users",
    response_model=UserListResponse,
    summary="List users",
    responses={
        200: {"description": "All users, newest first"},
        403: {"description": "Admin privileges required"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_users(
    request: Request,
    admin: AdminUser,
    role: SystemRole | None = Query(None, description="Filter by system role"),
    is_active: bool | None = Query(None, description="Filter by active flag"),
    service: AdminService = Depends(get_admin_service),
) -> UserListResponse:
    """List user accounts. ``meta.active_admins`` counts all active admins, unfiltered."""
    users = await service.list_users(role=role, is_active=is_active)
    data = [UserResponse.from_entity(u) for u in users]
    active_admins = await service.count_active_admins()
    return UserListResponse(
        data=data, meta={"total": len(data), "active_admins": active_admins}
    )


@router.post(
    "/users/{user_id}/activate",
    response_model=UserDetailResponse,
    summary="Activate a user",
    responses={
        200: {"description": "User activated"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def activate_user(
    request: Request,
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> UserDetailResponse:
    """Reactivate a deactivated account."""
    user = await service.activate_user(user_id)
    return UserDetailResponse(data=UserResponse.from_entity(user))


@router.post(
    "/users/{user_id}/deactivate",
    response_model=UserDetailResponse,
    summary="Deactivate a user",
    responses={
        200: {"description": "User deactivated"},
        400: {"description": "Target is the last active admin"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def deactivate_user(
    request: Request,
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> UserDetailResponse:
    """Deactivate an account. The last active admin cannot be deactivated."""
    user = await service.deactivate_user(user_id)
    return UserDetailResponse(data=UserResponse.from_entity(user))


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={
        204: {"description": "User deleted"},
        400: {"description": "Target is the last active admin"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_user(
    request: Request,
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> None:
    """Delete an account with its projects and collaboration requests."""
    await service.delete_user(user_id)


@router.get(
    "/collaborations",
    response_model=CollaborationListResponse,
    summary="List all collaboration requests",
    responses={
        200: {"description": "Every request in the ledger, newest first"},
        403: {"description": "Admin privileges required"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_collaborations(
    request: Request,
    admin: AdminUser,
    status_filter: CollaborationStatus | None = Query(
        None, alias="status", description="Filter by status"
    ),
    service: AdminService = Depends(get_admin_service),
) -> CollaborationListResponse:
    """Audit view over the collaboration ledger."""
    requests = await service.list_collaborations(status=status_filter)
    data = [CollaborationResponse.from_entity(r) for r in requests]
    return CollaborationListResponse(data=data, meta={"total": len(data)})
