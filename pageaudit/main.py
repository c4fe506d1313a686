from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pageaudit.api_routers.v1 import api_router
from pageaudit.features.health.routes.health import router as health_router
from pageaudit.platform.config import get_settings
from pageaudit.platform.exceptions import add_exception_handlers
from pageaudit.platform.logger import get_logger

VERSION = "0.1.0"

logger = get_logger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="SEO and accessibility rule engine for page nodes",
        version=VERSION,
        debug=settings.DEBUG,
    )

    # Root endpoint for basic info
    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": settings.APP_NAME,
            "description": "Checks page nodes against SEO and accessibility rules and scores the result.",
            "version": VERSION,
            "docs_url": "/docs",
            "api_base": settings.API_V1_PREFIX,
        }

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    logger.info(f"{settings.APP_NAME} started in {settings.ENVIRONMENT} mode")
    return app


app = create_app()
