"""Tests for the OpenWeatherMap client and weather routes."""
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import ProviderNotConfiguredError, UpstreamUnavailableError
from app.main import app
from app.services import weather_service
from app.services.weather_service import (
    OpenWeatherClient,
    build_search_variations,
    daily_to_forecast,
    get_weather_client,
)

CONDITION = {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}

CURRENT = {
    "coord": {"lon": 2.3522, "lat": 48.8566},
    "weather": [CONDITION],
    "base": "stations",
    "main": {"temp": 18.2, "feels_like": 17.5, "temp_min": 16.0, "temp_max": 20.1, "pressure": 1015, "humidity": 60},
    "wind": {"speed": 3.1, "deg": 240},
    "clouds": {"all": 0},
    "dt": 1760000000,
    "sys": {"country": "FR", "sunrise": 1759990000, "sunset": 1760030000},
    "timezone": 7200,
    "id": 2988507,
    "name": "Paris",
    "cod": 200,
}

DAY = {
    "dt": 1760000000,
    "temp": {"day": 18.0, "min": 12.0, "max": 21.0},
    "feels_like": {"day": 17.0},
    "pressure": 1012,
    "humidity": 55,
    "weather": [CONDITION],
    "clouds": 10,
    "wind_speed": 4.2,
    "wind_deg": 200,
    "pop": 0.2,
    "rain": 1.5,
}

ONECALL = {
    "lat": 48.8566,
    "lon": 2.3522,
    "timezone": "Europe/Paris",
    "timezone_offset": 7200,
    "current": {"sunrise": 1759990000, "sunset": 1760030000},
    "daily": [DAY, dict(DAY, dt=1760086400, rain=None)],
}

ALERT = {
    "sender_name": "Meteo-France",
    "event": "Wind warning",
    "start": 1760000000,
    "end": 1760040000,
    "description": "Strong gusts expected",
    "tags": ["Wind"],
}


def make_client(handler, api_key="test-key"):
    return OpenWeatherClient(
        api_key=api_key,
        base_url="https://weather.test",
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def use_weather(client):
    """Route the API's weather client through a mock transport."""
    def install(handler, api_key="test-key"):
        weather = make_client(handler, api_key)
        app.dependency_overrides[get_weather_client] = lambda: weather
        return weather
    return install


def test_build_search_variations_for_address():
    assert build_search_variations("123 Main St, Springfield, IL") == [
        "Main St, Springfield, IL",
        "IL",
        "Springfield, IL",
        "123 Main St, Springfield, IL",
        "Springfield IL",
        "St Springfield",
        "St Springfield IL",
    ]


def test_build_search_variations_for_plain_city():
    assert build_search_variations("Paris") == []


def test_daily_to_forecast_reshapes_one_call():
    forecast = daily_to_forecast(ONECALL, 48.8566, 2.3522)

    assert forecast["cnt"] == 2
    first = forecast["list"][0]
    assert first["main"]["temp"] == 18.0
    assert first["main"]["temp_min"] == 12.0
    assert first["wind"] == {"speed": 4.2, "deg": 200, "gust": 0}
    assert first["rain"] == {"3h": 1.5}
    assert "rain" not in forecast["list"][1]
    assert forecast["city"]["coord"] == {"lat": 48.8566, "lon": 2.3522}
    assert forecast["city"]["timezone"] == 7200
    assert forecast["city"]["sunrise"] == 1759990000


def test_requests_carry_api_key_and_units():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=CURRENT)

    weather = make_client(handler)
    result = asyncio.run(weather.current_by_coords(48.8566, 2.3522))

    assert result.name == "Paris"
    assert seen[0].url.path == "/data/2.5/weather"
    assert seen[0].url.params["appid"] == "test-key"
    assert seen[0].url.params["units"] == "metric"


def test_missing_api_key_raises_before_request():
    def handler(request):
        raise AssertionError("no request expected")

    weather = make_client(handler, api_key="")

    with pytest.raises(ProviderNotConfiguredError):
        asyncio.run(weather.current_by_coords(0, 0))
    with pytest.raises(ProviderNotConfiguredError):
        asyncio.run(weather.search_cities("Paris"))


def test_upstream_error_status_raises():
    weather = make_client(lambda request: httpx.Response(503))

    with pytest.raises(UpstreamUnavailableError) as excinfo:
        asyncio.run(weather.air_quality(0, 0))
    assert excinfo.value.status_code == 503


def test_search_falls_back_to_address_variations():
    queries = []

    def handler(request):
        q = request.url.params.get("q")
        queries.append(q)
        if q == "Springfield, IL":
            return httpx.Response(200, json=[
                {"name": "Springfield", "lat": 39.7817, "lon": -89.6501, "country": "US", "state": "Illinois"},
            ])
        return httpx.Response(200, json=[])

    weather = make_client(handler)
    results = asyncio.run(weather.search_cities("123 Main St, Springfield, IL"))

    assert [r.name for r in results] == ["Springfield"]
    assert queries == [
        "123 Main St, Springfield, IL",
        "Main St, Springfield, IL",
        "IL",
        "Springfield, IL",
    ]


def test_search_uses_zip_lookup():
    def handler(request):
        if request.url.path == "/geo/1.0/zip":
            assert request.url.params["zip"] == "10001,US"
            return httpx.Response(200, json={"zip": "10001", "name": "New York", "lat": 40.75, "lon": -73.99, "country": "US"})
        return httpx.Response(200, json=[])

    weather = make_client(handler)
    results = asyncio.run(weather.search_cities("350 5th Ave New York 10001"))

    assert len(results) == 1
    assert results[0].name == "New York"
    assert results[0].state is None


def test_forecast_route(use_weather, client):
    use_weather(lambda request: httpx.Response(200, json=ONECALL))

    response = client.get("/api/weather/forecast", params={"lat": 48.8566, "lon": 2.3522})

    assert response.status_code == 200
    assert response.json()["cnt"] == 2
    assert response.json()["list"][0]["weather"][0]["main"] == "Clear"


def test_alerts_route_defaults_to_empty_list(use_weather, client):
    payload = {k: v for k, v in ONECALL.items() if k != "daily"}
    use_weather(lambda request: httpx.Response(200, json=payload))

    response = client.get("/api/weather/alerts", params={"lat": 48.8566, "lon": 2.3522})

    assert response.status_code == 200
    assert response.json()["alerts"] == []


def test_alerts_route_passes_alerts_through(use_weather, client):
    use_weather(lambda request: httpx.Response(200, json=dict(ONECALL, alerts=[ALERT])))

    alerts = client.get("/api/weather/alerts", params={"lat": 48.8566, "lon": 2.3522}).json()["alerts"]

    assert alerts[0]["event"] == "Wind warning"


def test_city_not_found_route(use_weather, client):
    use_weather(lambda request: httpx.Response(404, json={"cod": "404", "message": "city not found"}))

    response = client.get("/api/weather/current/Atlantis")

    assert response.status_code == 404
    assert response.json()["detail"] == "City not found"


def test_upstream_failure_maps_to_bad_gateway(use_weather, client):
    use_weather(lambda request: httpx.Response(500))

    response = client.get("/api/air-pollution/current", params={"lat": 1, "lon": 1})

    assert response.status_code == 502


def test_unconfigured_provider_route(use_weather, client):
    use_weather(lambda request: httpx.Response(200, json=CURRENT), api_key="")

    response = client.get("/api/weather/current", params={"lat": 1, "lon": 1})

    assert response.status_code == 500
    assert response.json()["detail"] == "OpenWeatherMap API key not configured"
    assert client.get("/api/config").json() == {"hasApiKey": False}


def test_coordinates_validated_on_routes(use_weather, client):
    use_weather(lambda request: httpx.Response(200, json=CURRENT))

    assert client.get("/api/weather/current", params={"lat": 95, "lon": 1}).status_code == 422
    assert client.get("/api/weather/current", params={"lat": "abc", "lon": 1}).status_code == 422


def test_shared_client_closed_on_shutdown():
    with TestClient(app):
        weather = get_weather_client()
        assert weather.client.is_closed is False

    assert weather.client.is_closed is True
    assert weather_service._weather_client is None
