"""SQLAlchemy implementation of User repository."""

from uuid import UUID

from sqlalchemy import delete, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.user import SystemRole, User, normalize_email
from infrastructure.database.models import DeletedUserModel, UserModel


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        stmt = select(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        stmt = select(UserModel).where(UserModel.email == normalize_email(email))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: User) -> User:
        """Create a new user."""
        model = self._to_model(user)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, user: User) -> User:
        """Update profile fields of an existing user."""
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"User {user.id} not found")

        model.name = user.name
        model.email = user.email
        model.avatar_url = user.avatar_url

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def search(self, query: str, exclude_id: UUID, limit: int = 20) -> list[User]:
        """Find users by case-insensitive name or email substring."""
        pattern = f"%{query.lower()}%"
        stmt = (
            select(UserModel)
            .where(
                UserModel.id != exclude_id,
                UserModel.is_active.is_(True),
                or_(
                    func.lower(UserModel.name).like(pattern),
                    UserModel.email.like(pattern),
                ),
            )
            .order_by(UserModel.name)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_all(
        self, role: SystemRole | None = None, is_active: bool | None = None
    ) -> list[User]:
        """List users, newest first."""
        stmt = select(UserModel).order_by(UserModel.created_at.desc())
        if role is not None:
            stmt = stmt.where(UserModel.role == role.value)
        if is_active is not None:
            stmt = stmt.where(UserModel.is_active.is_(is_active))
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count_active_admins(self) -> int:
        """Count active users with the admin role."""
        stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.role == SystemRole.ADMIN.value, UserModel.is_active.is_(True))
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def lock_active_admin_ids(self) -> list[UUID]:
        """Select active admin IDs with FOR UPDATE.

        On PostgreSQL the rows stay locked until the transaction ends, which
        serialises concurrent deactivate/delete calls. SQLite ignores the
        lock clause; its single writer gives the same effect.
        """
        stmt = (
            select(UserModel.id)
            .where(UserModel.role == SystemRole.ADMIN.value, UserModel.is_active.is_(True))
            .order_by(UserModel.id)
            .with_for_update()
        )
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def set_active(self, id: UUID, active: bool) -> User | None:
        """Set the active flag on a user."""
        stmt = select(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        model.is_active = active
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a user. Owned projects and requests cascade in the database.

        A ``deleted_users`` row is written in the same transaction.
        """
        email = await self._session.scalar(select(UserModel.email).where(UserModel.id == id))
        if email is None:
            return False

        self._session.add(DeletedUserModel(id=id, email=email))
        result = await self._session.execute(delete(UserModel).where(UserModel.id == id))
        await self._session.flush()
        return bool(result.rowcount)

    async def is_deleted(self, id: UUID, email: str) -> bool:
        """Whether this identity, by ID or email, belongs to a deleted account."""
        stmt = select(
            exists().where(
                or_(
                    DeletedUserModel.id == id,
                    DeletedUserModel.email == normalize_email(email),
                )
            )
        )
        return bool(await self._session.scalar(stmt))

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            role=SystemRole(model.role),
            is_active=model.is_active,
            avatar_url=model.avatar_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: User) -> UserModel:
        """Convert domain entity to ORM model."""
        return UserModel(
            id=entity.id,
            email=entity.email,
            name=entity.name,
            role=entity.role.value,
            is_active=entity.is_active,
            avatar_url=entity.avatar_url,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
