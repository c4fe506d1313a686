from fastapi import APIRouter

from pageaudit.features.analysis.routes.analysis import router as analysis_router
from pageaudit.features.health.routes.health import router as health_router

api_router = APIRouter()

# Register all feature routes
api_router.include_router(analysis_router)
api_router.include_router(health_router)
