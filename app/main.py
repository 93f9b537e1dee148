import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api_routers.v1 import api_router
from app.features.health.routes.health import router as health_router
from app.platform.config import Settings, get_settings
from app.platform.exceptions import add_exception_handlers
from app.platform.logger import LOG_FORMAT

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API around one Settings instance. Handlers read configuration
    from `app.state.settings`, never from the environment directly.
    """
    settings = settings or get_settings()

    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Website performance, SEO and accessibility checks with tailored service quotes",
        version=VERSION,
    )
    app.state.settings = settings

    # Root endpoint for basic info
    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": settings.APP_NAME,
            "description": "Instant website health check with a tailored action plan.",
            "version": VERSION,
            "docs_url": "/docs",
            "api_base": settings.API_V1_PREFIX,
        }

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    return app


app = create_app()
