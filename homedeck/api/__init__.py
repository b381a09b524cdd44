"""
API routers for homedeck.
"""

from fastapi import APIRouter

from .devices import router as devices_router
from .health import router as health_router
from .locations import router as locations_router
from .scenes import router as scenes_router
from .settings import router as settings_router

# Main router that aggregates all sub-routers
router = APIRouter()

router.include_router(health_router)
router.include_router(devices_router)
router.include_router(scenes_router)
router.include_router(locations_router)
router.include_router(settings_router)
