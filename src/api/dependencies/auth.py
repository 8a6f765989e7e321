"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies.services import get_user_service
from core.exceptions import (
    AccountDisabledError,
    AdminRequiredError,
    AuthenticationError,
    ErrorCode,
)
from domain.entities.user import User
from domain.services.user_service import UserService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the current authenticated token user.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    token = credentials.credentials
    user = await auth_provider.validate_token(token)

    if not user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]


async def get_active_user(
    token_user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> User:
    """
    Resolve the token to a stored user, provisioning it on first request.

    Raises:
        AccountDisabledError: If the account has been deactivated
    """
    user = await service.ensure_user(
        token_user.id,
        email=token_user.email,
        name=token_user.name or "",
    )
    if not user.is_active:
        raise AccountDisabledError()
    return user


ActiveUser = Annotated[User, Depends(get_active_user)]


async def get_admin_user(user: ActiveUser) -> User:
    """
    Require the admin system role.

    Raises:
        AdminRequiredError: If the user is not an admin
    """
    if not user.is_admin:
        raise AdminRequiredError()
    return user


AdminUser = Annotated[User, Depends(get_admin_user)]
