"""Pydantic schemas for User API."""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from domain.entities.user import User


class UserUpdate(BaseModel):
    """Schema for updating the caller's profile (all fields optional)."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    avatar_url: Optional[str] = Field(None, max_length=500)


class UserResponse(BaseModel):
    """Schema for User response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "jane@example.com",
                "name": "Jane",
                "role": "user",
                "is_active": True,
                "avatar_url": None,
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    email: str
    name: str
    role: str
    is_active: bool
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role.value,
            is_active=user.is_active,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserSummary(BaseModel):
    """Public view of another user, as returned by search."""

    id: UUID
    name: str
    email: str
    avatar_url: Optional[str] = None


class UserDetailResponse(BaseModel):
    """Schema for single User response."""

    data: UserResponse


class UserListResponse(BaseModel):
    """Schema for list of Users response."""

    data: List[UserResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class UserSearchResponse(BaseModel):
    """Schema for user search response."""

    data: List[UserSummary]
    meta: dict[str, Any] = Field(default_factory=dict)
