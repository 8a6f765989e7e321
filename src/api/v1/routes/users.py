"""User API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import ActiveUser
from api.dependencies.services import get_user_service
from api.v1.schemas.user import (
    UserDetailResponse,
    UserResponse,
    UserSearchResponse,
    UserSummary,
    UserUpdate,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=UserDetailResponse,
    summary="Get current user",
    responses={
        200: {"description": "The authenticated user's profile"},
        403: {"description": "Account deactivated"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_me(request: Request, user: ActiveUser) -> UserDetailResponse:
    """Get the authenticated user's profile. Provisions it on first call."""
    return UserDetailResponse(data=UserResponse.from_entity(user))


@router.patch(
    "/me",
    response_model=UserDetailResponse,
    summary="Update current user",
    responses={
        200: {"description": "Profile updated"},
        409: {"description": "Email already registered"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def update_me(
    request: Request,
    body: UserUpdate,
    user: ActiveUser,
    service: UserService = Depends(get_user_service),
) -> UserDetailResponse:
    """Update name, email or avatar. Role and active flag are admin-only."""
    updated = await service.update_profile(
        user.id,
        name=body.name,
        email=str(body.email) if body.email is not None else None,
        avatar_url=body.avatar_url,
    )
    return UserDetailResponse(data=UserResponse.from_entity(updated))


@router.get(
    "",
    response_model=UserSearchResponse,
    summary="Search users",
    responses={200: {"description": "Users matching the query, excluding the caller"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def search_users(
    request: Request,
    user: ActiveUser,
    search: str = Query("", max_length=100, description="Name or email substring"),
    limit: int = Query(20, ge=1, le=50),
    service: UserService = Depends(get_user_service),
) -> UserSearchResponse:
    """Find other users to invite as collaborators."""
    users = await service.search_users(search, exclude_id=user.id, limit=limit)
    data = [
        UserSummary(id=u.id, name=u.name, email=u.email, avatar_url=u.avatar_url)
        for u in users
    ]
    return UserSearchResponse(data=data, meta={"total": len(data)})


@router.get(
    "/{user_id}",
    response_model=UserDetailResponse,
    summary="Get a user",
    responses={
        200: {"description": "User profile"},
        404: {"description": "User not found"},
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_user(
    request: Request,
    user_id: UUID,
    user: ActiveUser,
    service: UserService = Depends(get_user_service),
) -> UserDetailResponse:
    """Get another user's profile by ID."""
    found = await service.get_user(user_id)
    return UserDetailResponse(data=UserResponse.from_entity(found))
