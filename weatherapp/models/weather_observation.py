from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from weatherapp.models.base import Base


class WeatherObservation(Base):
    """
    Weather observation entity.

    Represents one weather record for a location: temperature in degrees
    Celsius, relative humidity in percent and the time the caller recorded it.

    The identity is assigned by the database on first insert. Locations are
    the natural lookup key but are not enforced unique.
    """

    __tablename__ = "weather_data"

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Internal unique identifier for the observation",
    )

    location: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Location the observation was recorded at",
    )

    temperature: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        comment="Temperature in degrees Celsius",
    )

    humidity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Relative humidity in percent",
    )

    timestamp: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True,
        comment="Time the observation was recorded, as provided by the caller",
    )

    def __repr__(self) -> str:
        return (
            f"WeatherObservation(id={self.id!r}, location={self.location!r}, "
            f"temperature={self.temperature!r}, humidity={self.humidity!r}, "
            f"timestamp={self.timestamp!r})"
        )
