"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.admin import router as admin_router
from api.v1.routes.collaborations import router as collaborations_router
from api.v1.routes.projects import router as projects_router
from api.v1.routes.users import router as users_router

router = APIRouter()
router.include_router(users_router)
router.include_router(projects_router)
router.include_router(collaborations_router)
router.include_router(admin_router)
