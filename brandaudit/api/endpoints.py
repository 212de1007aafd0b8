from fastapi import APIRouter

from brandaudit.api.routes import analysis, brands, detection

router = APIRouter()
router.include_router(detection.router)
router.include_router(brands.router)
router.include_router(analysis.router)
