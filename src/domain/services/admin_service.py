"""Administrative operations on user accounts, including the last-admin guard."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import LastActiveAdminError, UserNotFoundError
from domain.entities.collaboration import CollaborationRequest, CollaborationStatus
from domain.entities.user import SystemRole, User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


async def guard_last_active_admin(uow: IUnitOfWork, target: User, action: str) -> None:
    """Refuse to deactivate or delete the only remaining active admin.

    Must run inside the same unit of work as the mutation it protects: the
    active admin rows stay locked until that transaction ends, so two
    concurrent calls cannot both see two admins and both proceed.

    Raises:
        LastActiveAdminError: If ``target`` is an admin and at most one
            active admin exists.
    """
    if not target.is_admin:
        return

    active_admin_ids = await uow.users.lock_active_admin_ids()
    if len(active_admin_ids) <= 1:
        logger.warning(
            "last_admin_guard_blocked",
            user_id=str(target.id),
            action=action,
            active_admins=len(active_admin_ids),
        )
        raise LastActiveAdminError(action)


class AdminService:
    """Service layer for admin-only user and ledger management."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def assert_can_deactivate_or_delete(
        self, user_id: UUID, action: str = "deactivate"
    ) -> None:
        """Standalone guard check. Pure read; nothing is mutated."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            await guard_last_active_admin(uow, user, action)

    async def list_users(
        self,
        role: SystemRole | None = None,
        is_active: bool | None = None,
    ) -> list[User]:
        async with self._uow_factory() as uow:
            return await uow.users.list_all(role=role, is_active=is_active)  # type: ignore[no-any-return]

    async def count_active_admins(self) -> int:
        async with self._uow_factory() as uow:
            return await uow.users.count_active_admins()  # type: ignore[no-any-return]

    async def activate_user(self, user_id: UUID) -> User:
        """Reactivate an account. Never guarded."""
        async with self._uow_factory() as uow:
            user = await uow.users.set_active(user_id, True)
            if not user:
                raise UserNotFoundError(str(user_id))
            await uow.commit()

            logger.info("user_activated", user_id=str(user_id))
            return user

    async def deactivate_user(self, user_id: UUID) -> User:
        """Deactivate an account, keeping at least one active admin."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            await guard_last_active_admin(uow, user, "deactivate")

            updated = await uow.users.set_active(user_id, False)
            if not updated:
                raise UserNotFoundError(str(user_id))
            await uow.commit()

            logger.info("user_deactivated", user_id=str(user_id), role=user.role.value)
            return updated

    async def delete_user(self, user_id: UUID) -> None:
        """Delete an account and, by cascade, its projects and requests."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            await guard_last_active_admin(uow, user, "delete")

            if not await uow.users.delete(user_id):
                raise UserNotFoundError(str(user_id))
            await uow.commit()

            logger.info("user_deleted", user_id=str(user_id), role=user.role.value)

    async def list_collaborations(
        self, status: CollaborationStatus | None = None
    ) -> list[CollaborationRequest]:
        """Every request in the ledger, newest first."""
        async with self._uow_factory() as uow:
            return await uow.collaborations.list_all(status=status)  # type: ignore[no-any-return]
