"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from studio_cms.presentation.api.v1.endpoints.health import router as health_router
from studio_cms.presentation.api.v1.endpoints.auth import router as auth_router
from studio_cms.presentation.api.v1.endpoints.admin_collections import router as collections_router
from studio_cms.presentation.api.v1.endpoints.admin_footer import router as footer_router
from studio_cms.presentation.api.v1.endpoints.admin_inbox import router as inbox_router
from studio_cms.presentation.api.v1.endpoints.site import router as site_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(auth_router)
router.include_router(collections_router)
router.include_router(footer_router)
router.include_router(inbox_router)
router.include_router(site_router)
