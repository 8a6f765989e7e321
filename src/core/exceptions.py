"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"
    ACCOUNT_DELETED = "ACCOUNT_DELETED"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    NOT_PROJECT_OWNER = "NOT_PROJECT_OWNER"
    NOT_REQUEST_RECEIVER = "NOT_REQUEST_RECEIVER"
    PROJECT_ACCESS_DENIED = "PROJECT_ACCESS_DENIED"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    COLLABORATION_NOT_FOUND = "COLLABORATION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SELF_COLLABORATION = "SELF_COLLABORATION"
    LAST_ACTIVE_ADMIN = "LAST_ACTIVE_ADMIN"

    # Conflict errors (409)
    DUPLICATE_COLLABORATION = "DUPLICATE_COLLABORATION"
    INVALID_COLLABORATION_STATE = "INVALID_COLLABORATION_STATE"
    EMAIL_TAKEN = "EMAIL_TAKEN"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=403,
            details=details,
        )


class AccountDisabledError(AuthorizationError):
    """The authenticated account has been deactivated."""

    def __init__(self) -> None:
        super().__init__(
            message="This account has been deactivated",
            error_code=ErrorCode.ACCOUNT_DISABLED,
        )


class AccountDeletedError(AuthorizationError):
    """The token identifies an account that an admin has deleted."""

    def __init__(self) -> None:
        super().__init__(
            message="This account has been deleted",
            error_code=ErrorCode.ACCOUNT_DELETED,
        )


class AdminRequiredError(AuthorizationError):
    """The action requires the admin system role."""

    def __init__(self) -> None:
        super().__init__(
            message="Access denied. Admin privileges required",
            error_code=ErrorCode.ADMIN_REQUIRED,
        )


class NotProjectOwnerError(AuthorizationError):
    """Only the project owner may perform this action."""

    def __init__(self, project_id: str, action: str = "manage this project") -> None:
        super().__init__(
            message=f"Only the project owner can {action}",
            error_code=ErrorCode.NOT_PROJECT_OWNER,
            details={"project_id": project_id},
        )


class NotRequestReceiverError(AuthorizationError):
    """Only the receiver of a collaboration request may answer it."""

    def __init__(self, collaboration_id: str) -> None:
        super().__init__(
            message="Only the receiver can respond to this collaboration request",
            error_code=ErrorCode.NOT_REQUEST_RECEIVER,
            details={"collaboration_id": collaboration_id},
        )


class ProjectAccessDeniedError(AuthorizationError):
    """User is neither the owner nor an accepted collaborator."""

    def __init__(self, project_id: str) -> None:
        super().__init__(
            message="Not authorized to access this project",
            error_code=ErrorCode.PROJECT_ACCESS_DENIED,
            details={"project_id": project_id},
        )


class InsufficientProjectPermissionError(AuthorizationError):
    """Collaborator lacks the permission flag the operation needs."""

    def __init__(self, permission: str) -> None:
        super().__init__(
            message=f"Insufficient permissions. Required: {permission}",
            error_code=ErrorCode.INSUFFICIENT_PERMISSIONS,
            details={"required_permission": permission},
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ProjectNotFoundError(AppException):
    """Project not found."""

    def __init__(self, project_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROJECT_NOT_FOUND,
            message=f"Project not found: {project_id}",
            status_code=404,
            details={"project_id": project_id},
        )


class CollaborationNotFoundError(AppException):
    """Collaboration request not found."""

    def __init__(self, collaboration_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COLLABORATION_NOT_FOUND,
            message=f"Collaboration request not found: {collaboration_id}",
            status_code=404,
            details={"collaboration_id": collaboration_id},
        )


class SelfCollaborationError(AppException):
    """A project owner cannot send a collaboration request to themselves."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.SELF_COLLABORATION,
            message="Cannot send a collaboration request to the project owner",
            status_code=400,
        )


class DuplicateCollaborationError(AppException):
    """An active collaboration request already exists for this receiver."""

    def __init__(self, project_id: str, receiver_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_COLLABORATION,
            message="Collaboration request already exists",
            status_code=409,
            details={"project_id": project_id, "receiver_id": receiver_id},
        )


class InvalidCollaborationStateError(AppException):
    """The requested transition is not allowed from the current status."""

    def __init__(self, collaboration_id: str, current: str, target: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_COLLABORATION_STATE,
            message=f"Cannot move collaboration request from '{current}' to '{target}'",
            status_code=409,
            details={
                "collaboration_id": collaboration_id,
                "current_status": current,
                "target_status": target,
            },
        )


class LastActiveAdminError(AppException):
    """Cannot deactivate or delete the last active admin."""

    def __init__(self, action: str = "deactivate") -> None:
        super().__init__(
            error_code=ErrorCode.LAST_ACTIVE_ADMIN,
            message=f"Cannot {action} the last active admin user. This would lock the system",
            status_code=400,
            details={"action": action},
        )


class EmailTakenError(AppException):
    """Email address is already registered to another user."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.EMAIL_TAKEN,
            message=f"Email already registered: {email}",
            status_code=409,
            details={"email": email},
        )
