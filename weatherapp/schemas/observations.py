from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WeatherObservationXml(BaseModel):
    """
    Field values carried by a `<weatherData>` document.

    Every field is optional on the wire so that the router can answer
    missing identities and locations with its own messages. Temperature
    and humidity fall back to zero when the element is absent.
    """
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(default=None, description="Stored identity, required for update and delete")
    location: Optional[str] = Field(default=None, description="Location the observation was recorded at")
    temperature: float = Field(default=0.0, description="Temperature in degrees Celsius")
    humidity: int = Field(default=0, description="Relative humidity in percent")
    timestamp: Optional[datetime] = Field(default=None, description="Recording time (ISO-8601)")

    @field_validator("timestamp")
    @classmethod
    def to_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """
        Store timestamps as naive UTC; values without an offset are kept as sent.
        """
        if value is None or value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)
