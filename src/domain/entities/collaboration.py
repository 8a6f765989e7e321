"""Collaboration request domain entities.

A collaboration request is a directed proposal from a project owner to
another user. Its status moves through a small state machine::

    pending --accept--> accepted --remove--> removed
    pending --reject--> rejected

``rejected`` and ``removed`` are terminal. A user may hold at most one
*active* (pending or accepted) request per project.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class CollaborationStatus(StrEnum):
    """Status of a collaboration request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    REMOVED = "removed"


ACTIVE_STATUSES = frozenset({CollaborationStatus.PENDING, CollaborationStatus.ACCEPTED})

_TRANSITIONS: dict[CollaborationStatus, frozenset[CollaborationStatus]] = {
    CollaborationStatus.PENDING: frozenset(
        {CollaborationStatus.ACCEPTED, CollaborationStatus.REJECTED}
    ),
    CollaborationStatus.ACCEPTED: frozenset({CollaborationStatus.REMOVED}),
    CollaborationStatus.REJECTED: frozenset(),
    CollaborationStatus.REMOVED: frozenset(),
}


class CollaboratorRole(StrEnum):
    """Role granted to a collaborator on a single project.

    Distinct from ``SystemRole``: a project-level ``admin`` has no
    system-wide privileges and is not treated as an owner.
    """

    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"


@dataclass(frozen=True)
class CollaborationPermissions:
    """Fine-grained permission flags attached to a collaboration."""

    can_edit: bool = False
    can_delete: bool = False
    can_invite: bool = False
    can_upload: bool = False

    @classmethod
    def for_role(cls, role: CollaboratorRole) -> "CollaborationPermissions":
        """Default flags for a collaborator role."""
        return _ROLE_DEFAULTS[role]

    @classmethod
    def full(cls) -> "CollaborationPermissions":
        """Every flag set, as held by a project owner."""
        return cls(can_edit=True, can_delete=True, can_invite=True, can_upload=True)

    def with_overrides(self, **overrides: bool | None) -> "CollaborationPermissions":
        """Return a copy with the given flags replaced. ``None`` keeps the default."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def allows(self, permission: str) -> bool:
        return bool(getattr(self, permission))


_ROLE_DEFAULTS: dict[CollaboratorRole, CollaborationPermissions] = {
    CollaboratorRole.VIEWER: CollaborationPermissions(),
    CollaboratorRole.EDITOR: CollaborationPermissions(can_edit=True, can_upload=True),
    CollaboratorRole.ADMIN: CollaborationPermissions(
        can_edit=True, can_invite=True, can_upload=True
    ),
}


@dataclass
class CollaborationRequest:
    """Domain entity for a collaboration request."""

    project_id: UUID
    sender_id: UUID
    receiver_id: UUID
    id: UUID = field(default_factory=uuid4)
    status: CollaborationStatus = CollaborationStatus.PENDING
    role: CollaboratorRole = CollaboratorRole.EDITOR
    permissions: CollaborationPermissions | None = None
    message: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Fill permissions from the role when none were given."""
        if self.permissions is None:
            self.permissions = CollaborationPermissions.for_role(self.role)
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def can_transition_to(self, target: CollaborationStatus) -> bool:
        """Check whether ``target`` is reachable in one step from the current status."""
        return target in _TRANSITIONS[self.status]
