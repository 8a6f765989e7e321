"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from infrastructure.database.session import get_async_session

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    schema_ready: bool | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """Liveness probe. Touches no dependencies."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=_now(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Readiness probe: database connectivity plus presence of the
    collaboration ledger table (i.e. migrations have run).
    """
    try:
        await db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        db_status = f"unhealthy: {type(e).__name__}"

    schema_ready = False
    if db_status == "healthy":
        try:
            await db.execute(text("SELECT 1 FROM collaboration_requests LIMIT 1"))
            schema_ready = True
        except SQLAlchemyError:
            await db.rollback()

    overall_status = "healthy" if db_status == "healthy" and schema_ready else "degraded"

    return HealthResponse(
        status=overall_status,
        version=settings.app_version,
        timestamp=_now(),
        environment=settings.app_env,
        database=db_status,
        schema_ready=schema_ready,
    )
