"""Service factories shared by the auth dependencies and the v1 routes."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.access_service import AccessService
from domain.services.admin_service import AdminService
from domain.services.collaboration_service import CollaborationService
from domain.services.message_service import MessageService
from domain.services.project_service import ProjectService
from domain.services.user_service import UserService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_user_service() -> UserService:
    """Get User service instance."""
    return UserService(
        get_uow_factory(),
        bootstrap_admin_emails=settings.bootstrap_admin_emails_list,
    )


@lru_cache
def get_project_service() -> ProjectService:
    """Get Project service instance."""
    return ProjectService(get_uow_factory())


@lru_cache
def get_collaboration_service() -> CollaborationService:
    """Get Collaboration service instance."""
    return CollaborationService(get_uow_factory())


@lru_cache
def get_access_service() -> AccessService:
    """Get Access service instance."""
    return AccessService(get_uow_factory())


@lru_cache
def get_admin_service() -> AdminService:
    """Get Admin service instance."""
    return AdminService(get_uow_factory())


@lru_cache
def get_message_service() -> MessageService:
    """Get Message service instance."""
    return MessageService(get_uow_factory())
