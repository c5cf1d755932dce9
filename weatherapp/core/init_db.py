import logging

from weatherapp.core.db import engine
from weatherapp.models import Base

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """
    Create the `weather_data` table if it does not exist yet.

    Notes:
    - Uses `Base.metadata.create_all`, which never alters existing tables.
    - Schema changes on a live database need a migration tool such as Alembic.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")
