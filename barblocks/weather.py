"""Current weather: shared results, wind directions and IP-based location."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

import httpx

from .errors import BarError

DEFAULT_FORMAT = " $icon $weather $temp "
DEFAULT_INTERVAL = 600
IP_API_URL = "https://ipapi.co/json"

_LOCATION_PARSE_ERROR = "Failed while parsing location API result"


class WeatherIcon(Enum):
    """Icon describing the weather."""

    SUN = "weather_sun"
    RAIN = "weather_rain"
    CLOUDS = "weather_clouds"
    THUNDER = "weather_thunder"
    SNOW = "weather_snow"
    DEFAULT = "weather_default"

    def icon_name(self):
        """Name of the icon in the icon set."""
        return self.value


class UnitSystem(Enum):
    """Units in which a service reports its values."""

    METRIC = "metric"
    IMPERIAL = "imperial"


@dataclass(frozen=True)
class Coordinates:
    """A geographic position in degrees."""

    latitude: float
    longitude: float


@dataclass
class WeatherResult:
    """Weather reported by a service."""

    location: str
    temp: float
    apparent: float
    humidity: float
    weather: str
    weather_verbose: str
    wind: float
    wind_kmh: float
    wind_direction: str
    icon: WeatherIcon

    def to_values(self):
        """Placeholder values of the block."""
        return {
            "icon": self.icon.icon_name(),
            "location": self.location,
            "temp": self.temp,
            "apparent": self.apparent,
            "humidity": self.humidity,
            "weather": self.weather,
            "weather_verbose": self.weather_verbose,
            "wind": self.wind,
            "wind_kmh": self.wind_kmh,
            "direction": self.wind_direction,
        }


def _round_half_away(value):
    if math.isnan(value) or math.isinf(value):
        return 0 if math.isnan(value) else None
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def convert_wind_direction(direction):
    """Abbreviated compass direction of an azimuth in degrees, ``"-"`` when unknown."""
    if direction is None:
        return "-"
    degrees = _round_half_away(direction)
    if degrees is None:
        return "N"
    for upper, name in (
        (23, None),
        (68, "NE"),
        (113, "E"),
        (158, "SE"),
        (203, "S"),
        (248, "SW"),
        (293, "W"),
        (338, "NW"),
    ):
        if degrees <= upper:
            return name if name is not None and degrees >= 24 else "N"
    return "N"


def australian_apparent_temp(temp, humidity, wind_speed):
    """Australian Apparent Temperature from metric values."""
    exponent = 17.27 * temp / (237.7 + temp)
    water_vapor_pressure = humidity * 0.06105 * math.exp(exponent)
    return temp + 0.33 * water_vapor_pressure - 0.7 * wind_speed - 4.0


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_location_response(data):
    """Read coordinates from an ipapi.co reply, raising on reported errors."""
    if not isinstance(data, dict):
        raise BarError(_LOCATION_PARSE_ERROR)
    error = data.get("error", False)
    reason = data.get("reason")
    if not isinstance(error, bool) or (reason is not None and not isinstance(reason, str)):
        raise BarError(_LOCATION_PARSE_ERROR)
    if error:
        raise BarError(
            "ipapi.co error", cause=reason if reason is not None else "Unknown Error"
        )
    latitude = data.get("latitude")
    longitude = data.get("longitude")
    if not (_is_number(latitude) and _is_number(longitude)):
        raise BarError(_LOCATION_PARSE_ERROR)
    return Coordinates(float(latitude), float(longitude))


@dataclass
class _AutolocateCache:
    location: Coordinates | None = None
    timestamp: float = 0.0


_CACHE = _AutolocateCache()


async def _request_location(client):
    try:
        response = await client.get(IP_API_URL)
    except httpx.HTTPError as exc:
        raise BarError("Failed during request for current location", cause=exc) from exc
    try:
        data = response.json()
    except ValueError as exc:
        raise BarError(_LOCATION_PARSE_ERROR, cause=exc) from exc
    return parse_location_response(data)


async def find_ip_location(interval, client=None):
    """Locate this machine by its IP address.

    A location fetched less than ``interval`` (seconds or a timedelta) ago is reused.
    """
    seconds = interval.total_seconds() if isinstance(interval, timedelta) else float(interval)
    if _CACHE.location is not None and time.monotonic() - _CACHE.timestamp < seconds:
        return _CACHE.location
    if client is None:
        async with httpx.AsyncClient() as own_client:
            location = await _request_location(own_client)
    else:
        location = await _request_location(client)
    _CACHE.location = location
    _CACHE.timestamp = time.monotonic()
    return location