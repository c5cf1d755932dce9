import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from weatherapp.core.config import settings
from weatherapp.core.db import get_db
from weatherapp.core.exceptions import StorageError
from weatherapp.models.weather_observation import WeatherObservation

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    summary="Service health check",
    description="Reports that the service process is up. Does not touch the database.",
    response_description="Service status",
)
def health():
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.environment,
    }


@router.get(
    "/health/db",
    summary="Weather store health check",
    description=(
        "Counts the rows of the `weather_data` table. A failure means the database is "
        "unreachable, `DATABASE_URL` is wrong or the schema has not been created."
    ),
    response_description="Weather store status and number of stored observations",
)
async def health_db(db: AsyncSession = Depends(get_db)):
    """
    **Returns:**
    - `status`: `ok` when the table could be queried
    - `observations`: number of stored weather observations

    **Errors:**
    - HTTP 500 with a plain-text body when the query fails.
    """
    stmt = select(func.count()).select_from(WeatherObservation)
    try:
        total = (await db.execute(stmt)).scalar_one()
    except SQLAlchemyError as exc:
        logger.exception("Weather store health check failed", extra={"operation": "health"})
        raise StorageError("Weather store unavailable") from exc

    return {"status": "ok", "observations": int(total)}
