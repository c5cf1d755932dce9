import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from weatherapp.core.exceptions import ObservationNotFoundError
from weatherapp.models.weather_observation import WeatherObservation

logger = logging.getLogger(__name__)


class WeatherObservationRepository:
    """
    Repository for managing weather observations persistence.

    This repository encapsulates all database operations related to
    `WeatherObservation` entities. Each write is a single unit of work:
    it is committed before the method returns, or rolled back when the
    database raises.
    """

    def __init__(self, db: AsyncSession):
        """
        Initialize the repository with an active database session.

        Args:
            db: Asynchronous SQLAlchemy session.
        """
        self.db = db

    async def save(self, observation: WeatherObservation) -> WeatherObservation:
        """
        Insert a new observation or replace a stored one.

        Observations without an identity are inserted and receive the
        identity generated by the database. Observations with an identity
        replace every field of the stored row with that identity.

        Args:
            observation: Transient observation, typically decoded from a request.

        Returns:
            The persisted `WeatherObservation` instance.

        Raises:
            ObservationNotFoundError: The identity does not match a stored row.
        """
        try:
            if observation.id is None:
                self.db.add(observation)
                await self.db.commit()
                logger.debug(
                    "Inserted observation",
                    extra={"operation": "save", "observation_id": observation.id},
                )
                return observation

            stored = await self.db.get(WeatherObservation, observation.id)
            if stored is None:
                raise ObservationNotFoundError(observation.id)

            stored.location = observation.location
            stored.temperature = observation.temperature
            stored.humidity = observation.humidity
            stored.timestamp = observation.timestamp
            await self.db.commit()
            return stored
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def find_by_location(self, location: str) -> Optional[WeatherObservation]:
        """
        Return the observation stored for a location, or None if none exist.

        When several observations share the location, the one with the most
        recent timestamp is returned. Observations without a timestamp rank
        last and ties go to the most recently inserted row.
        """
        stmt = (
            select(WeatherObservation)
            .where(WeatherObservation.location == location)
            .order_by(
                WeatherObservation.timestamp.is_(None),
                WeatherObservation.timestamp.desc(),
                WeatherObservation.id.desc(),
            )
            .limit(1)
        )
        res = await self.db.execute(stmt)
        return res.scalars().first()

    async def find_all(self) -> list[WeatherObservation]:
        """
        Return every stored observation ordered by identity.
        """
        stmt = select(WeatherObservation).order_by(WeatherObservation.id.asc())
        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def delete(self, observation: WeatherObservation) -> None:
        """
        Remove the stored observation that has the same identity.

        Args:
            observation: Observation carrying the identity to delete.

        Raises:
            ObservationNotFoundError: The identity does not match a stored row.
        """
        try:
            stored = await self.db.get(WeatherObservation, observation.id)
            if stored is None:
                raise ObservationNotFoundError(observation.id)

            await self.db.delete(stored)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
