from typing import Optional


class WeatherServiceError(Exception):
    """
    Base class for errors that map onto an HTTP status with a plain-text body.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ObservationDecodeError(WeatherServiceError):
    """Raised when a request body is not a valid weather observation document."""

    status_code = 400


class ObservationNotFoundError(WeatherServiceError):
    """Raised when an observation identity does not match a stored row."""

    status_code = 404

    def __init__(self, observation_id: int):
        super().__init__("No weather data found for the specified id")
        self.observation_id = observation_id


class StorageError(WeatherServiceError):
    status_code = 500
