"""Weather from the met.no location forecast service."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

import httpx

from .errors import BarError, ErrorKind
from .weather import (
    WeatherIcon,
    WeatherResult,
    australian_apparent_temp,
    convert_wind_direction,
)

LEGENDS_URL = "https://api.met.no/weatherapi/weathericon/2.0/legends"
FORECAST_URL = "https://api.met.no/weatherapi/locationforecast/2.0/compact"

_FORECAST_ERROR = "Forecast request failed"
_LEGEND_FORMAT_ERROR = "Legend replied in unknown format"
_LEGEND_KEYS = ("desc_en", "desc_nb", "desc_nn")

_RETRIES = 3
_MIN_DELAY = 1.0
_MAX_DELAY = 60.0


class ApiLanguage(Enum):
    """Language of the weather descriptions."""

    ENGLISH = "en"
    NORWEGIAN_NYNORSK = "nn"
    NORWEGIAN_BOKMAAL = "nb"


_DESCRIPTION_KEY = {
    ApiLanguage.ENGLISH: "desc_en",
    ApiLanguage.NORWEGIAN_BOKMAAL: "desc_nb",
    ApiLanguage.NORWEGIAN_NYNORSK: "desc_nn",
}


def _config_error(message):
    return BarError(message, ErrorKind.CONFIG)


@dataclass(frozen=True)
class MetNoConfig:
    """Service options: fixed coordinates, altitude and language."""

    coordinates: tuple | None = None
    altitude: str | None = None
    lang: ApiLanguage = ApiLanguage.ENGLISH

    @classmethod
    def from_dict(cls, data):
        """Build the options from the block's ``service`` table."""
        if not isinstance(data, Mapping):
            raise _config_error("`service` must be a table")
        if data.get("name", "metno") != "metno":
            raise _config_error(f"unexpected service name `{data.get('name')}`")
        coordinates = data.get("coordinates")
        if coordinates is not None:
            if (
                not isinstance(coordinates, (list, tuple))
                or len(coordinates) != 2
                or not all(isinstance(part, str) for part in coordinates)
            ):
                raise _config_error("`coordinates` must be two strings")
            coordinates = tuple(coordinates)
        altitude = data.get("altitude")
        if altitude is not None and not isinstance(altitude, str):
            raise _config_error("`altitude` must be a string")
        lang = data.get("lang", ApiLanguage.ENGLISH.value)
        try:
            language = ApiLanguage(lang)
        except ValueError:
            raise _config_error(f"unknown language `{lang}`") from None
        return cls(coordinates, altitude, language)


def translate(legend, summary, lang=ApiLanguage.ENGLISH):
    """Description of a weather symbol in ``lang``, or the symbol itself if unknown."""
    entry = legend.get(summary)
    if entry is None:
        return summary
    return entry[_DESCRIPTION_KEY[lang]]


_CLOUDS = frozenset({"cloudy", "partlycloudy", "fair", "fog"})
_RAIN = frozenset(
    {"heavyrain", "heavyrainshowers", "lightrain", "lightrainshowers", "rain", "rainshowers"}
)
_THUNDER = frozenset(
    {
        "rainandthunder",
        "heavyrainandthunder",
        "rainshowersandthunder",
        "sleetandthunder",
        "sleetshowersandthunder",
        "snowandthunder",
        "snowshowersandthunder",
        "heavyrainshowersandthunder",
        "heavysleetandthunder",
        "heavysleetshowersandthunder",
        "heavysnowandthunder",
        "heavysnowshowersandthunder",
        "lightsleetandthunder",
        "lightrainandthunder",
        "lightsnowandthunder",
        "lightssleetshowersandthunder",
        "lightssnowshowersandthunder",
        "lightrainshowersandthunder",
    }
)
_SNOW = frozenset(
    {
        "heavysleet",
        "heavysleetshowers",
        "heavysnow",
        "heavysnowshowers",
        "lightsleet",
        "lightsleetshowers",
        "lightsnow",
        "lightsnowshowers",
        "sleet",
        "sleetshowers",
        "snow",
        "snowshowers",
    }
)


def weather_to_icon(weather):
    """Icon for a met.no weather symbol (without its ``_day``/``_night`` suffix)."""
    if weather in _CLOUDS:
        return WeatherIcon.CLOUDS
    if weather == "clearsky":
        return WeatherIcon.SUN
    if weather in _RAIN:
        return WeatherIcon.RAIN
    if weather in _THUNDER:
        return WeatherIcon.THUNDER
    if weather in _SNOW:
        return WeatherIcon.SNOW
    return WeatherIcon.DEFAULT


def _detail(details, key):
    value = details.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BarError(_FORECAST_ERROR, cause=f"invalid field `{key}`")
    return float(value)


def parse_forecast(data, legend, lang=ApiLanguage.ENGLISH):
    """Turn a location forecast reply into a weather result for the first time step."""
    try:
        first = data["properties"]["timeseries"][0]["data"]
        details = first["instant"]["details"]
        symbol_code = first["next_1_hours"]["summary"]["symbol_code"]
    except (KeyError, IndexError, TypeError) as exc:
        raise BarError(_FORECAST_ERROR, cause=exc) from exc
    if not isinstance(details, Mapping) or not isinstance(symbol_code, str):
        raise BarError(_FORECAST_ERROR)
    summary = symbol_code.split("_", 1)[0]
    translated = translate(legend, summary, lang)
    temp = _detail(details, "air_temperature")
    humidity = _detail(details, "relative_humidity")
    wind_speed = _detail(details, "wind_speed")
    direction = details.get("wind_from_direction")
    if direction is not None:
        direction = _detail(details, "wind_from_direction")
    return WeatherResult(
        location="Unknown",
        temp=temp,
        apparent=australian_apparent_temp(temp, humidity, wind_speed),
        humidity=humidity,
        weather=translated,
        weather_verbose=translated,
        wind=wind_speed,
        wind_kmh=wind_speed * 3.6,
        wind_direction=convert_wind_direction(direction),
        icon=weather_to_icon(summary),
    )


def _valid_legend(data):
    return isinstance(data, dict) and all(
        isinstance(entry, dict) and all(isinstance(entry.get(key), str) for key in _LEGEND_KEYS)
        for entry in data.values()
    )


async def fetch_legend(client):
    """Download the descriptions of all weather symbols."""
    try:
        response = await client.get(LEGENDS_URL)
    except httpx.HTTPError as exc:
        raise BarError("Failed to fetch legend from met.no", cause=exc) from exc
    try:
        data = response.json()
    except ValueError as exc:
        raise BarError(_LEGEND_FORMAT_ERROR, cause=exc) from exc
    if not _valid_legend(data):
        raise BarError(_LEGEND_FORMAT_ERROR)
    return data


async def _retry(operation):
    delay = _MIN_DELAY
    for _ in range(_RETRIES):
        try:
            return await operation()
        except BarError:
            await asyncio.sleep(delay)
            delay = min(delay * 2, _MAX_DELAY)
    return await operation()


def _float_text(value):
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


class MetNoService:
    """Fetches forecasts from met.no using a downloaded symbol legend."""

    def __init__(self, config, legend):
        self.config = config
        self.legend = legend

    @classmethod
    async def create(cls, config, client=None):
        """Build the service, downloading the legend (with retries)."""
        if client is None:
            async with httpx.AsyncClient() as own_client:
                legend = await _retry(lambda: fetch_legend(own_client))
        else:
            legend = await _retry(lambda: fetch_legend(client))
        return cls(config, legend)

    def query(self, location=None):
        """Query parameters for a forecast; an autolocated position wins over the config."""
        if location is not None:
            lat, lon = _float_text(location.latitude), _float_text(location.longitude)
        elif self.config.coordinates is not None:
            lat, lon = self.config.coordinates
        else:
            raise BarError("No location given")
        params = {"lat": lat, "lon": lon}
        if self.config.altitude is not None:
            params["altitude"] = self.config.altitude
        return params

    async def _forecast(self, client, params):
        try:
            response = await client.get(
                FORECAST_URL,
                params=params,
                headers={"Content-Type": "application/json"},
            )
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise BarError(_FORECAST_ERROR, cause=exc) from exc

    async def get_weather(self, location=None, client=None):
        """Current weather at ``location`` or at the configured coordinates."""
        params = self.query(location)
        if client is None:
            async with httpx.AsyncClient() as own_client:
                data = await self._forecast(own_client, params)
        else:
            data = await self._forecast(client, params)
        return parse_forecast(data, self.legend, self.config.lang)