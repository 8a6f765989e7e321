"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from uuid import uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.user import SystemRole, User
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base
from infrastructure.database.session import build_session_factory, enable_sqlite_foreign_keys
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory, one shared connection per engine)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

BOOTSTRAP_ADMIN_EMAIL = "root@example.com"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return build_session_factory(engine)


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def make_headers(auth_provider: JWTAuthProvider) -> Callable[..., dict[str, str]]:
    """Build bearer headers for a new or given identity."""

    def _make(email: str | None = None, name: str = "Test User", user_id=None) -> dict[str, str]:  # type: ignore[no-untyped-def]
        token_user = TokenUser(
            id=user_id or uuid4(),
            email=email or f"user-{uuid4().hex[:8]}@example.com",
            name=name,
        )
        return {"Authorization": f"Bearer {auth_provider.create_token(token_user)}"}

    return _make


@pytest.fixture
def app(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
) -> FastAPI:
    """Application wired to the test database and auth provider."""
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import (
        get_access_service,
        get_admin_service,
        get_collaboration_service,
        get_message_service,
        get_project_service,
        get_user_service,
    )
    from domain.services.access_service import AccessService
    from domain.services.admin_service import AdminService
    from domain.services.collaboration_service import CollaborationService
    from domain.services.message_service import MessageService
    from domain.services.project_service import ProjectService
    from domain.services.user_service import UserService
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_user_service] = lambda: UserService(
        uow_factory, bootstrap_admin_emails=[BOOTSTRAP_ADMIN_EMAIL]
    )
    app.dependency_overrides[get_project_service] = lambda: ProjectService(uow_factory)
    app.dependency_overrides[get_collaboration_service] = lambda: CollaborationService(
        uow_factory
    )
    app.dependency_overrides[get_access_service] = lambda: AccessService(uow_factory)
    app.dependency_overrides[get_admin_service] = lambda: AdminService(uow_factory)
    app.dependency_overrides[get_message_service] = lambda: MessageService(uow_factory)
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def seed_user(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
) -> Callable[..., Awaitable[User]]:
    """Insert a user directly into the Identity Store."""

    async def _seed(
        email: str,
        role: SystemRole = SystemRole.USER,
        is_active: bool = True,
        name: str = "",
    ) -> User:
        async with uow_factory() as uow:
            user = await uow.users.create(
                User(email=email, name=name, role=role, is_active=is_active)
            )
            await uow.commit()
            return user

    return _seed
