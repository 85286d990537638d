"""
Weather API endpoints.

Pass-through to OpenWeatherMap: geocoding search, current conditions,
forecast, air quality and alerts.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.exceptions import UpstreamNotFoundError
from app.schemas.weather import (
    AirQuality,
    CitySearchResult,
    CurrentWeather,
    Forecast,
    WeatherAlertsResponse,
)
from app.services.weather_service import OpenWeatherClient, get_weather_client

router = APIRouter()

Latitude = Annotated[float, Query(ge=-90, le=90, description="Latitude")]
Longitude = Annotated[float, Query(ge=-180, le=180, description="Longitude")]


@router.get("/cities/search", response_model=list[CitySearchResult], tags=["Weather"])
async def search_cities(
    q: str = Query(..., min_length=1, description="City name or street address"),
    client: OpenWeatherClient = Depends(get_weather_client),
):
    """Search cities and addresses, falling back to parsed address parts."""
    return await client.search_cities(q)


@router.get("/weather/current", response_model=CurrentWeather, tags=["Weather"])
async def current_weather(
    lat: Latitude,
    lon: Longitude,
    client: OpenWeatherClient = Depends(get_weather_client),
):
    return await client.current_by_coords(lat, lon)


@router.get("/weather/current/{city}", response_model=CurrentWeather, tags=["Weather"])
async def current_weather_by_city(
    city: str,
    client: OpenWeatherClient = Depends(get_weather_client),
):
    try:
        return await client.current_by_city(city)
    except UpstreamNotFoundError:
        raise HTTPException(status_code=404, detail="City not found")


@router.get("/weather/forecast", response_model=Forecast, tags=["Weather"])
async def forecast(
    lat: Latitude,
    lon: Longitude,
    client: OpenWeatherClient = Depends(get_weather_client),
):
    """8-day daily forecast."""
    return await client.forecast_by_coords(lat, lon)


@router.get("/weather/forecast/{city}", response_model=Forecast, tags=["Weather"])
async def forecast_by_city(
    city: str,
    client: OpenWeatherClient = Depends(get_weather_client),
):
    """5-day forecast in 3-hour steps."""
    try:
        return await client.forecast_by_city(city)
    except UpstreamNotFoundError:
        raise HTTPException(status_code=404, detail="City not found")


@router.get("/weather/alerts", response_model=WeatherAlertsResponse, tags=["Weather"])
async def weather_alerts(
    lat: Latitude,
    lon: Longitude,
    client: OpenWeatherClient = Depends(get_weather_client),
):
    try:
        return await client.alerts(lat, lon)
    except UpstreamNotFoundError:
        raise HTTPException(status_code=404, detail="Location not found")


@router.get("/air-pollution/current", response_model=AirQuality, tags=["Weather"])
async def air_quality(
    lat: Latitude,
    lon: Longitude,
    client: OpenWeatherClient = Depends(get_weather_client),
):
    return await client.air_quality(lat, lon)


@router.get("/config", tags=["Config"])
async def frontend_config(client: OpenWeatherClient = Depends(get_weather_client)):
    """Whether the weather provider is configured. The key itself is never sent."""
    return {"hasApiKey": client.configured}
