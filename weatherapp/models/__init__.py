from weatherapp.models.base import Base
from weatherapp.models.weather_observation import WeatherObservation

__all__ = ["Base", "WeatherObservation"]
