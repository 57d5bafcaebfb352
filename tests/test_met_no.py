import httpx
import pytest

from barblocks.errors import BarError, ErrorKind
from barblocks.met_no import (
    FORECAST_URL,
    LEGENDS_URL,
    ApiLanguage,
    MetNoConfig,
    MetNoService,
    fetch_legend,
    parse_forecast,
    translate,
    weather_to_icon,
)
from barblocks.weather import Coordinates, WeatherIcon, australian_apparent_temp

LEGEND = {
    "partlycloudy": {"desc_en": "Partly cloudy", "desc_nb": "Delvis skyet", "desc_nn": "Delvis skya"},
    "rain": {"desc_en": "Rain", "desc_nb": "Regn", "desc_nn": "Regn"},
}


def _forecast(symbol="partlycloudy_day", **details):
    return {
        "properties": {
            "timeseries": [
                {
                    "data": {
                        "instant": {"details": details},
                        "next_1_hours": {"summary": {"symbol_code": symbol}},
                    }
                }
            ]
        }
    }


@pytest.mark.parametrize(
    "symbol, icon",
    [
        ("clearsky", WeatherIcon.SUN),
        ("fog", WeatherIcon.CLOUDS),
        ("partlycloudy", WeatherIcon.CLOUDS),
        ("rainshowers", WeatherIcon.RAIN),
        ("heavysnowandthunder", WeatherIcon.THUNDER),
        ("lightssleetshowersandthunder", WeatherIcon.THUNDER),
        ("sleet", WeatherIcon.SNOW),
        ("snowshowers", WeatherIcon.SNOW),
        ("unheardof", WeatherIcon.DEFAULT),
    ],
)
def test_weather_to_icon(symbol, icon):
    assert weather_to_icon(symbol) is icon


def test_translate_languages():
    assert translate(LEGEND, "partlycloudy", ApiLanguage.ENGLISH) == "Partly cloudy"
    assert translate(LEGEND, "partlycloudy", ApiLanguage.NORWEGIAN_BOKMAAL) == "Delvis skyet"
    assert translate(LEGEND, "partlycloudy", ApiLanguage.NORWEGIAN_NYNORSK) == "Delvis skya"


def test_translate_unknown_symbol_passes_through():
    assert translate(LEGEND, "snow", ApiLanguage.NORWEGIAN_BOKMAAL) == "snow"


def test_config_from_dict():
    config = MetNoConfig.from_dict(
        {"name": "metno", "coordinates": ["39.2362", "9.3317"], "lang": "nn", "altitude": "12"}
    )
    assert config.coordinates == ("39.2362", "9.3317")
    assert config.lang is ApiLanguage.NORWEGIAN_NYNORSK
    assert config.altitude == "12"


def test_config_defaults():
    config = MetNoConfig.from_dict({"name": "metno"})
    assert config.lang is ApiLanguage.ENGLISH
    assert config.coordinates is None


@pytest.mark.parametrize(
    "data",
    [
        {"lang": "de"},
        {"coordinates": ["1.0"]},
        {"coordinates": [1.0, 2.0]},
        {"name": "openweathermap"},
    ],
)
def test_config_rejects_bad_values(data):
    with pytest.raises(BarError) as info:
        MetNoConfig.from_dict(data)
    assert info.value.kind is ErrorKind.CONFIG


def test_query_prefers_location():
    service = MetNoService(MetNoConfig(coordinates=("1", "2"), altitude="30"), LEGEND)
    params = service.query(Coordinates(39.2362, 9.3317))
    assert params == {"lat": "39.2362", "lon": "9.3317", "altitude": "30"}


def test_query_falls_back_to_config():
    service = MetNoService(MetNoConfig(coordinates=("1.5", "2.5")), LEGEND)
    assert service.query() == {"lat": "1.5", "lon": "2.5"}


def test_query_without_location():
    service = MetNoService(MetNoConfig(), LEGEND)
    with pytest.raises(BarError) as info:
        service.query()
    assert info.value.message == "No location given"


def test_parse_forecast():
    data = _forecast(
        air_temperature=12.0, relative_humidity=60.0, wind_speed=10.0, wind_from_direction=90.0
    )
    result = parse_forecast(data, LEGEND, ApiLanguage.ENGLISH)
    assert result.location == "Unknown"
    assert result.weather == "Partly cloudy"
    assert result.weather_verbose == result.weather
    assert result.icon is WeatherIcon.CLOUDS
    assert result.wind_direction == "E"
    assert result.temp == 12.0
    assert result.wind_kmh == pytest.approx(36.0)
    assert result.apparent == pytest.approx(australian_apparent_temp(12.0, 60.0, 10.0))


def test_parse_forecast_missing_details_default_to_zero():
    result = parse_forecast(_forecast("rain"), LEGEND)
    assert result.temp == 0.0
    assert result.humidity == 0.0
    assert result.wind_direction == "-"
    assert result.icon is WeatherIcon.RAIN


def test_parse_forecast_empty_timeseries():
    with pytest.raises(BarError) as info:
        parse_forecast({"properties": {"timeseries": []}}, LEGEND)
    assert info.value.message == "Forecast request failed"


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_legend_rejects_bad_format():
    def handler(request):
        return httpx.Response(200, json={"rain": {"desc_en": "Rain"}})

    async with _client(handler) as client:
        with pytest.raises(BarError) as info:
            await fetch_legend(client)
    assert info.value.message == "Legend replied in unknown format"


@pytest.mark.asyncio
async def test_create_and_get_weather():
    requests = []

    def handler(request):
        requests.append(request)
        if request.url.path.endswith("legends"):
            return httpx.Response(200, json=LEGEND)
        return httpx.Response(200, json=_forecast("rain", air_temperature=5.0))

    config = MetNoConfig(coordinates=("59.9", "10.7"), lang=ApiLanguage.NORWEGIAN_BOKMAAL)
    async with _client(handler) as client:
        service = await MetNoService.create(config, client)
        result = await service.get_weather(None, client)

    assert service.legend == LEGEND
    assert result.weather == "Regn"
    assert str(requests[0].url) == LEGENDS_URL
    forecast_request = requests[1]
    assert str(forecast_request.url).startswith(FORECAST_URL)
    assert forecast_request.url.params["lat"] == "59.9"
    assert forecast_request.url.params["lon"] == "10.7"
    assert forecast_request.headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_get_weather_bad_reply():
    def handler(request):
        return httpx.Response(500, content=b"oops")

    service = MetNoService(MetNoConfig(coordinates=("1", "2")), LEGEND)
    async with _client(handler) as client:
        with pytest.raises(BarError) as info:
            await service.get_weather(None, client)
    assert info.value.message == "Forecast request failed"