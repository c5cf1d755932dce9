import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from weatherapp.core.db import get_db
from weatherapp.core.exceptions import StorageError, WeatherServiceError
from weatherapp.repositories.weather_observation_repository import WeatherObservationRepository
from weatherapp.schemas.weather_xml import (
    INVALID_FORMAT,
    decode_observation,
    encode_observation,
    encode_observation_list,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["Weather"])

XML_MEDIA_TYPE = "application/xml"

MISSING_LOCATION = f"{INVALID_FORMAT}: Missing location"


def get_weather_repository(db: AsyncSession = Depends(get_db)) -> WeatherObservationRepository:
    """
    Provide a repository bound to the request-scoped session.
    """
    return WeatherObservationRepository(db)


@router.get(
    "",
    summary="Get the weather observation for a location",
    description=(
        "Returns the stored observation for `location` as a `<weatherData>` document. "
        "When several observations exist for the location the most recent one is returned."
    ),
    response_class=Response,
    responses={200: {"content": {XML_MEDIA_TYPE: {}}}},
)
async def get_weather(
    location: Optional[str] = Query(None, description="Exact location name"),
    repo: WeatherObservationRepository = Depends(get_weather_repository),
):
    logger.info("Received a GET request", extra={"operation": "get"})

    if not location:
        logger.warning("No location provided in request", extra={"operation": "get"})
        raise WeatherServiceError("Location parameter is missing", status_code=400)

    logger.debug("Searching weather data", extra={"operation": "get", "location": location})
    try:
        observation = await repo.find_by_location(location)
    except SQLAlchemyError as exc:
        logger.exception("Error while processing the request", extra={"operation": "get", "location": location})
        raise StorageError("An error occurred while processing the request") from exc

    if observation is None:
        logger.info("No weather data found", extra={"operation": "get", "location": location})
        raise WeatherServiceError("No weather data found for the specified location", status_code=404)

    return Response(content=encode_observation(observation), media_type=XML_MEDIA_TYPE)


@router.get(
    "/all",
    summary="List all weather observations",
    description="Returns every stored observation inside a `<weatherDataList>` document.",
    response_class=Response,
    responses={200: {"content": {XML_MEDIA_TYPE: {}}}},
)
async def list_weather(repo: WeatherObservationRepository = Depends(get_weather_repository)):
    try:
        observations = await repo.find_all()
    except SQLAlchemyError as exc:
        logger.exception("Error while listing weather data", extra={"operation": "list"})
        raise StorageError("An error occurred while processing the request") from exc

    return Response(content=encode_observation_list(observations), media_type=XML_MEDIA_TYPE)


@router.post(
    "",
    status_code=201,
    summary="Store a new weather observation",
    description=(
        "Accepts a `<weatherData>` document with at least a `location`. "
        "Any `id` in the body is ignored; the database assigns a new one."
    ),
    response_class=PlainTextResponse,
)
async def create_weather(
    request: Request,
    repo: WeatherObservationRepository = Depends(get_weather_repository),
):
    observation = decode_observation(await request.body())

    if not observation.location:
        logger.warning("Rejected weather data without location", extra={"operation": "create"})
        raise WeatherServiceError(MISSING_LOCATION, status_code=400)

    observation.id = None
    try:
        await repo.save(observation)
    except SQLAlchemyError as exc:
        logger.exception(
            "Error while saving weather data",
            extra={"operation": "create", "location": observation.location},
        )
        raise StorageError("Error saving weather data") from exc

    logger.info(
        "Saved weather data",
        extra={"operation": "create", "location": observation.location, "observation_id": observation.id},
    )
    return PlainTextResponse("Weather data saved successfully.", status_code=201)


@router.put(
    "",
    status_code=204,
    summary="Replace a stored weather observation",
    description="Replaces every field of the observation identified by the `id` element.",
    response_class=Response,
)
async def update_weather(
    request: Request,
    repo: WeatherObservationRepository = Depends(get_weather_repository),
):
    observation = decode_observation(await request.body())

    if observation.id is None:
        logger.warning("Rejected update without id", extra={"operation": "update"})
        raise WeatherServiceError("WeatherData ID must not be null for update", status_code=400)

    if not observation.location:
        logger.warning(
            "Rejected update without location",
            extra={"operation": "update", "observation_id": observation.id},
        )
        raise WeatherServiceError(MISSING_LOCATION, status_code=400)

    try:
        await repo.save(observation)
    except SQLAlchemyError as exc:
        logger.exception(
            "Error while updating weather data",
            extra={"operation": "update", "observation_id": observation.id},
        )
        raise StorageError("Error updating weather data") from exc

    logger.info(
        "Updated weather data",
        extra={"operation": "update", "location": observation.location, "observation_id": observation.id},
    )
    return Response(status_code=204)


@router.delete(
    "",
    status_code=204,
    summary="Delete a stored weather observation",
    description="Deletes the observation identified by the `id` element of the body.",
    response_class=Response,
)
async def delete_weather(
    request: Request,
    repo: WeatherObservationRepository = Depends(get_weather_repository),
):
    observation = decode_observation(await request.body())

    if observation.id is None:
        logger.warning("Rejected deletion without id", extra={"operation": "delete"})
        raise WeatherServiceError("WeatherData ID must not be null for deletion", status_code=400)

    try:
        await repo.delete(observation)
    except SQLAlchemyError as exc:
        logger.exception(
            "Error while deleting weather data",
            extra={"operation": "delete", "observation_id": observation.id},
        )
        raise StorageError("Error deleting weather data") from exc

    logger.info("Deleted weather data", extra={"operation": "delete", "observation_id": observation.id})
    return Response(status_code=204)
