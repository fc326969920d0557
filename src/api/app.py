"""FastAPI application configuration."""

import logging

from fastapi import Depends, FastAPI

from src.api.dependencies import verify_token
from src.api.health.endpoints import VERSION
from src.api.health.endpoints import router as health_router
from src.api.leads.endpoints import router as leads_router
from src.api.models import ErrorResponse
from src.api.settings.endpoints import router as settings_router
from src.observability.sentry import init_sentry
from src.utils.logging import configure_logging

configure_logging()
init_sentry()

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    :returns: Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Notion Lead Tracking API",
        version=VERSION,
        responses={
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    # Register routers
    application.include_router(health_router)
    application.include_router(leads_router)
    application.include_router(
        settings_router,
        dependencies=[Depends(verify_token)],
        responses={401: {"model": ErrorResponse, "description": "Unauthorised"}},
    )

    logger.info("FastAPI application created")

    return application


# Application instance for uvicorn
app = create_app()
