"""Pydantic schemas for Project API."""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from api.v1.schemas.collaboration import CollaborationResponse, PermissionsSchema
from domain.entities.access import ProjectAccess
from domain.entities.message import ProjectMessage
from domain.entities.project import ProjectStatus
from domain.services.project_service import ProjectView


class ProjectCreate(BaseModel):
    """Schema for creating a Project."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=5000)
    category: str = Field("General", max_length=50)
    status: ProjectStatus = ProjectStatus.ACTIVE


class ProjectUpdate(BaseModel):
    """Schema for updating a Project (all fields optional)."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    category: Optional[str] = Field(None, max_length=50)
    status: Optional[ProjectStatus] = None


class AccessResponse(BaseModel):
    """The caller's resolved role and permissions on a project."""

    project_id: UUID
    user_id: UUID
    role: str
    permissions: PermissionsSchema

    @classmethod
    def from_entity(cls, access: ProjectAccess) -> "AccessResponse":
        return cls(
            project_id=access.project_id,
            user_id=access.user_id,
            role=access.role.value,
            permissions=PermissionsSchema.from_entity(access.permissions),
        )


class ProjectResponse(BaseModel):
    """Schema for Project response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Website redesign",
                "description": "New landing page",
                "category": "Design",
                "status": "active",
                "owner_id": "456e4567-e89b-12d3-a456-426614174000",
                "user_role": "owner",
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    description: str
    category: str
    status: str
    owner_id: UUID
    user_role: Optional[str] = None
    permissions: Optional[PermissionsSchema] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: ProjectView) -> "ProjectResponse":
        project = view.project
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            category=project.category,
            status=project.status.value,
            owner_id=project.owner_id,
            user_role=view.access.role.value,
            permissions=PermissionsSchema.from_entity(view.access.permissions),
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectDetail(ProjectResponse):
    """Project with its accepted collaborators."""

    collaborators: List[CollaborationResponse] = Field(default_factory=list)


class ProjectListResponse(BaseModel):
    """Schema for list of Projects response."""

    data: List[ProjectResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class ProjectDetailResponse(BaseModel):
    """Schema for single Project response."""

    data: ProjectDetail


class AccessDetailResponse(BaseModel):
    """Schema for resolved access response."""

    data: AccessResponse


class ProjectMessageCreate(BaseModel):
    """Schema for posting a project message."""

    content: str = Field(..., min_length=1, max_length=5000)


class ProjectMessageResponse(BaseModel):
    """Schema for Project message response."""

    id: UUID
    project_id: UUID
    sender_id: UUID
    content: str
    created_at: datetime

    @classmethod
    def from_entity(cls, message: ProjectMessage) -> "ProjectMessageResponse":
        return cls(
            id=message.id,
            project_id=message.project_id,
            sender_id=message.sender_id,
            content=message.content,
            created_at=message.created_at,
        )


class ProjectMessageDetailResponse(BaseModel):
    """Schema for single Project message response."""

    data: ProjectMessageResponse


class ProjectMessageListResponse(BaseModel):
    """Schema for list of Project messages response."""

    data: List[ProjectMessageResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
