"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

# Initialize structured logging
setup_logging()

logger = structlog.get_logger()

DESCRIPTION = f"""\
## Project Collaboration Service

Project owners invite other users as collaborators; CollabHub tracks each
collaboration request and resolves who may do what on every project.

### Features
- **Projects**: Create and manage projects you own
- **Collaboration Requests**: Invite, accept, reject and remove collaborators
- **Access Resolution**: Effective role and permissions per project
- **Project Messages**: A thread per project for its owner and collaborators
- **Administration**: Activate, deactivate and delete accounts; at least one
  active admin always remains

### Authentication
All endpoints except `/health` require a bearer JWT:
```
Authorization: Bearer <your_token>
```
Accounts are created from the token claims on first use.

### Rate Limits
- Reads: {READ_LIMIT}
- Writes: {WRITE_LIMIT}
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and readiness probes"},
    {"name": "users", "description": "Own profile and user search"},
    {"name": "projects", "description": "Projects, resolved access, collaborators and messages"},
    {"name": "collaborations", "description": "Collaboration request lifecycle"},
    {"name": "admin", "description": "Account administration (admin system role)"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("app_starting", environment=settings.app_env, version=settings.app_version)
    yield
    await engine.dispose()
    logger.info("app_stopped")


def _configure_middleware(app: FastAPI) -> None:
    """Register middleware. Starlette runs the last one added outermost."""
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=DESCRIPTION,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        license_info={"name": "MIT"},
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    _configure_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
