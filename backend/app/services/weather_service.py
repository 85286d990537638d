"""
OpenWeatherMap client.

Thin pass-through to the provider's geocoding, current weather, One Call
forecast / alerts and air pollution endpoints. Responses are validated
against app.schemas.weather before being handed to the API layer.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from app.config import get_settings
from app.core.exceptions import (
    ProviderNotConfiguredError,
    UpstreamNotFoundError,
    UpstreamUnavailableError,
)
from app.schemas.weather import (
    AirQuality,
    CitySearchResult,
    CurrentWeather,
    Forecast,
    WeatherAlertsResponse,
)

logger = logging.getLogger(__name__)

PROVIDER = "OpenWeatherMap"

ZIP_PATTERN = re.compile(r"\b\d{5}(-\d{4})?\b")
HOUSE_NUMBER_PATTERN = re.compile(r"^\d+\s+")


def build_search_variations(query: str) -> list[str]:
    """
    Alternative geocoding queries for an address-like string, tried in
    order when direct geocoding finds nothing.
    """
    variations = []

    without_number = HOUSE_NUMBER_PATTERN.sub("", query)
    if without_number != query:
        variations.append(without_number)

    comma_parts = [p.strip() for p in query.split(",")]
    if len(comma_parts) >= 2:
        variations.append(comma_parts[-1])
        variations.append(f"{comma_parts[-2]}, {comma_parts[-1]}")
        if len(comma_parts) >= 3:
            variations.append(", ".join(comma_parts[-3:]))

    parts = [p for p in re.split(r"[,\s]+", query) if p.strip()]
    if len(parts) >= 3:
        variations.append(" ".join(parts[-2:]))
    if len(parts) >= 4:
        variations.append(" ".join(parts[-3:-1]))
        variations.append(" ".join(parts[-3:]))

    return [v for v in variations if v and len(v) >= 2]


def daily_to_forecast(data: dict, lat: float, lon: float) -> dict:
    """Reshape a One Call `daily` block into the list-style forecast payload."""
    daily = data.get("daily", [])
    current = data.get("current") or {}

    items = []
    for day in daily:
        item = {
            "dt": day["dt"],
            "main": {
                "temp": day["temp"]["day"],
                "feels_like": day["feels_like"]["day"],
                "temp_min": day["temp"]["min"],
                "temp_max": day["temp"]["max"],
                "pressure": day["pressure"],
                "humidity": day["humidity"],
                "temp_kf": 0,
            },
            "weather": day["weather"],
            "clouds": {"all": day.get("clouds", 0)},
            "wind": {
                "speed": day.get("wind_speed", 0),
                "deg": day.get("wind_deg", 0),
                "gust": day.get("wind_gust") or 0,
            },
            "visibility": 10000,
            "pop": day.get("pop", 0),
            "sys": {"pod": "d"},
            "dt_txt": datetime.fromtimestamp(day["dt"], tz=timezone.utc).isoformat(),
        }
        if day.get("rain"):
            item["rain"] = {"3h": day["rain"]}
        if day.get("snow"):
            item["snow"] = {"3h": day["snow"]}
        items.append(item)

    return {
        "cod": "200",
        "message": 0,
        "cnt": len(items),
        "list": items,
        "city": {
            "id": 0,
            "name": "Location",
            "coord": {"lat": lat, "lon": lon},
            "country": "Unknown",
            "population": 0,
            "timezone": data.get("timezone_offset", 0),
            "sunrise": current.get("sunrise", 0),
            "sunset": current.get("sunset", 0),
        },
    }


class OpenWeatherClient:
    """
    Async client for the OpenWeatherMap APIs.

    All methods raise ProviderNotConfiguredError without an API key and
    UpstreamUnavailableError on transport errors or non-2xx responses.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.openweather_api_key
        self.client = httpx.AsyncClient(
            base_url=base_url or settings.openweather_base_url,
            timeout=timeout or settings.provider_timeout,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def close(self) -> None:
        await self.client.aclose()

    async def _get(self, path: str, params: dict, not_found_ok: bool = False) -> Any:
        if not self.api_key:
            raise ProviderNotConfiguredError(PROVIDER)

        try:
            response = await self.client.get(path, params={**params, "appid": self.api_key})
        except httpx.HTTPError as e:
            logger.warning("%s request to %s failed: %s", PROVIDER, path, e)
            raise UpstreamUnavailableError(PROVIDER, message=str(e)) from e

        if response.status_code == 404 and not_found_ok:
            raise UpstreamNotFoundError(f"{PROVIDER}: not found")
        if response.is_error:
            logger.warning("%s %s returned %s", PROVIDER, path, response.status_code)
            raise UpstreamUnavailableError(PROVIDER, status_code=response.status_code)

        return response.json()

    async def _geocode(self, query: str, limit: int) -> list:
        try:
            return await self._get("/geo/1.0/direct", {"q": query, "limit": limit})
        except UpstreamUnavailableError:
            return []

    async def _geocode_zip(self, zip_code: str) -> list:
        try:
            data = await self._get("/geo/1.0/zip", {"zip": f"{zip_code},US"})
        except UpstreamUnavailableError:
            return []
        return [{
            "name": data["name"],
            "lat": data["lat"],
            "lon": data["lon"],
            "country": data["country"],
            "state": None,
        }]

    async def search_cities(self, query: str) -> list[CitySearchResult]:
        """
        Geocode a city name or street address.

        1. direct geocoding
        2. for address-like queries: US ZIP lookup, then parsed variations
        3. broad fallback on the full query
        """
        if not self.api_key:
            raise ProviderNotConfiguredError(PROVIDER)

        query = query.strip()
        results = await self._geocode(query, limit=8)

        if not results and len(query) > 5:
            zip_match = ZIP_PATTERN.search(query)
            if zip_match:
                results = await self._geocode_zip(zip_match.group(0))

            if not results:
                for variation in build_search_variations(query):
                    results = await self._geocode(variation, limit=5)
                    if results:
                        break

        if not results and len(query) >= 3:
            results = await self._geocode(query, limit=3)

        return [CitySearchResult.model_validate(r) for r in results]

    async def current_by_coords(self, lat: float, lon: float) -> CurrentWeather:
        data = await self._get("/data/2.5/weather", {"lat": lat, "lon": lon, "units": "metric"})
        return CurrentWeather.model_validate(data)

    async def current_by_city(self, city: str) -> CurrentWeather:
        data = await self._get("/data/2.5/weather", {"q": city, "units": "metric"}, not_found_ok=True)
        return CurrentWeather.model_validate(data)

    async def forecast_by_coords(self, lat: float, lon: float) -> Forecast:
        """8-day daily forecast from One Call 3.0."""
        data = await self._get(
            "/data/3.0/onecall",
            {"lat": lat, "lon": lon, "exclude": "minutely,hourly,alerts", "units": "metric"},
        )
        return Forecast.model_validate(daily_to_forecast(data, lat, lon))

    async def forecast_by_city(self, city: str) -> Forecast:
        """5-day / 3-hour forecast."""
        data = await self._get("/data/2.5/forecast", {"q": city, "units": "metric"}, not_found_ok=True)
        return Forecast.model_validate(data)

    async def air_quality(self, lat: float, lon: float) -> AirQuality:
        data = await self._get("/data/2.5/air_pollution", {"lat": lat, "lon": lon})
        return AirQuality.model_validate(data)

    async def alerts(self, lat: float, lon: float) -> WeatherAlertsResponse:
        data = await self._get(
            "/data/3.0/onecall",
            {"lat": lat, "lon": lon, "exclude": "minutely,hourly,daily"},
            not_found_ok=True,
        )
        return WeatherAlertsResponse.model_validate({
            "lat": data["lat"],
            "lon": data["lon"],
            "timezone": data["timezone"],
            "timezone_offset": data["timezone_offset"],
            "alerts": data.get("alerts") or [],
        })


_weather_client = None


def get_weather_client() -> OpenWeatherClient:
    """Get or create the shared weather client."""
    global _weather_client
    if _weather_client is None:
        _weather_client = OpenWeatherClient()
    return _weather_client


async def close_weather_client() -> None:
    """Close and drop the shared weather client, if one was created."""
    global _weather_client
    if _weather_client is not None:
        await _weather_client.close()
        _weather_client = None
