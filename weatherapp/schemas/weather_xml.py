"""
XML wire format for weather observations.

A single observation is exchanged as::

    <weatherData>
        <id>1</id>
        <location>Berlin</location>
        <temperature>15.0</temperature>
        <humidity>80</humidity>
        <timestamp>2024-11-02T14:30:00</timestamp>
    </weatherData>

The functions here are the only place that knows about element names, so
the ORM model can change without touching the wire format and vice versa.
"""
import xml.etree.ElementTree as ET
from typing import Iterable

from pydantic import ValidationError

from weatherapp.core.exceptions import ObservationDecodeError
from weatherapp.models.weather_observation import WeatherObservation
from weatherapp.schemas.observations import WeatherObservationXml

ROOT_TAG = "weatherData"
LIST_TAG = "weatherDataList"
FIELDS = ("id", "location", "temperature", "humidity", "timestamp")
TEXT_FIELDS = ("location",)

INVALID_FORMAT = "Invalid weather data format"


def decode_observation(body: bytes) -> WeatherObservation:
    """
    Parse a `<weatherData>` document into a transient observation.

    Empty or whitespace-only elements are treated as absent and unknown
    elements are ignored. Numeric and timestamp values are trimmed; the
    location is kept verbatim. Timezone-aware timestamps are converted to
    naive UTC.

    Raises:
        ObservationDecodeError: The body is not well-formed XML, has another
            root element, or holds a value of the wrong type.
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise ObservationDecodeError(INVALID_FORMAT) from exc

    if root.tag != ROOT_TAG:
        raise ObservationDecodeError(INVALID_FORMAT)

    values = {}
    for child in root:
        text = (child.text or "").strip()
        if child.tag not in FIELDS or not text:
            continue
        # Locations are lookup keys and are kept exactly as sent.
        values[child.tag] = child.text if child.tag in TEXT_FIELDS else text

    try:
        payload = WeatherObservationXml.model_validate(values)
    except ValidationError as exc:
        raise ObservationDecodeError(INVALID_FORMAT) from exc

    return WeatherObservation(**payload.model_dump())


def _observation_element(observation: WeatherObservation) -> ET.Element:
    payload = WeatherObservationXml.model_validate(observation)
    root = ET.Element(ROOT_TAG)

    if payload.id is not None:
        ET.SubElement(root, "id").text = str(payload.id)
    ET.SubElement(root, "location").text = payload.location or ""
    ET.SubElement(root, "temperature").text = str(float(payload.temperature))
    ET.SubElement(root, "humidity").text = str(payload.humidity)
    if payload.timestamp is not None:
        ET.SubElement(root, "timestamp").text = payload.timestamp.isoformat()

    return root


def _to_bytes(root: ET.Element) -> bytes:
    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def encode_observation(observation: WeatherObservation) -> bytes:
    """
    Serialize an observation as an indented UTF-8 `<weatherData>` document.
    """
    return _to_bytes(_observation_element(observation))


def encode_observation_list(observations: Iterable[WeatherObservation]) -> bytes:
    """
    Serialize observations as children of a `<weatherDataList>` document.
    """
    root = ET.Element(LIST_TAG)
    root.extend([_observation_element(obs) for obs in observations])
    return _to_bytes(root)
