import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from weatherapp.core.config import settings
from weatherapp.core.exceptions import WeatherServiceError
from weatherapp.core.init_db import init_db
from weatherapp.core.logger import setup_logging
from weatherapp.routers.health import router as health_router
from weatherapp.routers.weather import router as weather_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    On startup the `weather_data` table is created if it is missing.
    Nothing needs cleaning up on shutdown.
    """
    await init_db()
    yield


async def weather_service_error_handler(request: Request, exc: WeatherServiceError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse("An error occurred while processing the request", status_code=500)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    This factory function:
    - Configures JSON logging at `settings.log_level`.
    - Registers the weather and health routers.
    - Renders service errors as plain-text responses.

    Returns:
        Configured FastAPI application instance.
    """
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        description="Weather API: store and query weather observations as XML",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_exception_handler(WeatherServiceError, weather_service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register API routers
    app.include_router(health_router)
    app.include_router(weather_router)

    return app


# Application entry point
app = create_app()
