"""User service layer: provisioning, profile and search."""

from collections.abc import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import AccountDeletedError, EmailTakenError, UserNotFoundError
from domain.entities.user import SystemRole, User, normalize_email
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class UserService:
    """Service layer for the Identity Store."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        bootstrap_admin_emails: list[str] | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._bootstrap_admin_emails = {
            normalize_email(email) for email in bootstrap_admin_emails or []
        }

    async def ensure_user(self, user_id: UUID, email: str, name: str = "") -> User:
        """Return the user for an authenticated token, creating it on first sight.

        Emails listed in ``bootstrap_admin_emails`` are provisioned with the
        admin system role. Identities of deleted accounts are refused with
        AccountDeletedError instead of being provisioned again. Handles
        concurrent first requests via IntegrityError catch.
        """
        async with self._uow_factory() as uow:
            existing = await uow.users.get(user_id)
            if existing:
                return existing

            email = normalize_email(email)
            if await uow.users.is_deleted(user_id, email):
                logger.warning("deleted_user_rejected", user_id=str(user_id))
                raise AccountDeletedError()

            role = (
                SystemRole.ADMIN if email in self._bootstrap_admin_emails else SystemRole.USER
            )
            user = User(id=user_id, email=email, name=name or email.split("@")[0], role=role)

            try:
                created = await uow.users.create(user)
                await uow.commit()
            except IntegrityError:
                await uow.rollback()
                created = None

        if created is None:
            # Another request provisioned the same user first.
            async with self._uow_factory() as uow:
                winner = await uow.users.get(user_id)
                if not winner:
                    raise EmailTakenError(email)
                return winner

        logger.info("user_provisioned", user_id=str(user_id), role=role.value)
        return created

    async def get_user(self, user_id: UUID) -> User:
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    async def update_profile(
        self,
        user_id: UUID,
        name: str | None = None,
        email: str | None = None,
        avatar_url: str | None = None,
    ) -> User:
        """Update profile fields. Role and active flag are admin-only."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            if name is not None:
                user.name = name.strip()
            if email is not None:
                email = normalize_email(email)
                if email != user.email:
                    other = await uow.users.get_by_email(email)
                    if other and other.id != user_id:
                        raise EmailTakenError(email)
                    user.email = email
            if avatar_url is not None:
                user.avatar_url = avatar_url

            try:
                updated = await uow.users.update(user)
                await uow.commit()
            except IntegrityError:
                await uow.rollback()
                raise EmailTakenError(user.email) from None
            return updated

    async def search_users(self, query: str, exclude_id: UUID, limit: int = 20) -> list[User]:
        """Other users whose name or email contains ``query``."""
        query = query.strip()
        if not query:
            return []
        async with self._uow_factory() as uow:
            return await uow.users.search(query, exclude_id=exclude_id, limit=limit)  # type: ignore[no-any-return]
