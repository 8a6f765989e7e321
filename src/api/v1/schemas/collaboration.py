"""Pydantic schemas for Collaboration API."""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.collaboration import (
    CollaborationPermissions,
    CollaborationRequest,
    CollaboratorRole,
)


class PermissionOverrides(BaseModel):
    """Optional flags replacing the role defaults."""

    can_edit: Optional[bool] = None
    can_delete: Optional[bool] = None
    can_invite: Optional[bool] = None
    can_upload: Optional[bool] = None


class PermissionsSchema(BaseModel):
    """Effective permission flags."""

    can_edit: bool
    can_delete: bool
    can_invite: bool
    can_upload: bool

    @classmethod
    def from_entity(cls, permissions: CollaborationPermissions) -> "PermissionsSchema":
        return cls(
            can_edit=permissions.can_edit,
            can_delete=permissions.can_delete,
            can_invite=permissions.can_invite,
            can_upload=permissions.can_upload,
        )


class CollaborationCreate(BaseModel):
    """Schema for sending a collaboration request."""

    project_id: UUID
    receiver_id: UUID
    role: CollaboratorRole = CollaboratorRole.EDITOR
    message: str = Field("", max_length=500)
    permissions: Optional[PermissionOverrides] = None


class CollaborationResponse(BaseModel):
    """Schema for Collaboration request response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "project_id": "223e4567-e89b-12d3-a456-426614174000",
                "sender_id": "323e4567-e89b-12d3-a456-426614174000",
                "receiver_id": "423e4567-e89b-12d3-a456-426614174000",
                "status": "pending",
                "role": "editor",
                "permissions": {
                    "can_edit": True,
                    "can_delete": False,
                    "can_invite": False,
                    "can_upload": True,
                },
                "message": "Want to help with the frontend?",
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    project_id: UUID
    sender_id: UUID
    receiver_id: UUID
    status: str
    role: str
    permissions: PermissionsSchema
    message: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, request: CollaborationRequest) -> "CollaborationResponse":
        return cls(
            id=request.id,
            project_id=request.project_id,
            sender_id=request.sender_id,
            receiver_id=request.receiver_id,
            status=request.status.value,
            role=request.role.value,
            permissions=PermissionsSchema.from_entity(
                request.permissions or CollaborationPermissions.for_role(request.role)
            ),
            message=request.message,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )


class CollaborationDetailResponse(BaseModel):
    """Schema for single Collaboration request response."""

    data: CollaborationResponse


class CollaborationListResponse(BaseModel):
    """Schema for list of Collaboration requests response."""

    data: List[CollaborationResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
