"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from psychrocalc.api.moist_air import router as moist_air_router
from psychrocalc.api.fluids import router as fluids_router
from psychrocalc.api.process import router as process_router

router = APIRouter()
router.include_router(moist_air_router)
router.include_router(fluids_router)
router.include_router(process_router)
