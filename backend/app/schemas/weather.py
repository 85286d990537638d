"""
Weather provider payload schemas.

Only the fields the dashboard relies on are declared; anything else the
provider sends is passed through untouched.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.schemas.common import CamelModel


class ProviderModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class Coord(ProviderModel):
    lat: float
    lon: float


class CitySearchResult(ProviderModel):
    name: str
    local_names: Optional[dict[str, str]] = None
    lat: float
    lon: float
    country: str
    state: Optional[str] = None


class WeatherCondition(ProviderModel):
    id: int
    main: str
    description: str
    icon: str


class CurrentWeather(ProviderModel):
    coord: Coord
    weather: list[WeatherCondition]
    main: dict
    wind: dict
    dt: int
    sys: dict
    timezone: int
    name: str


class ForecastItem(ProviderModel):
    dt: int
    main: dict
    weather: list[WeatherCondition]
    clouds: dict
    wind: dict
    pop: float = 0
    dt_txt: str


class ForecastCity(ProviderModel):
    name: str
    coord: Coord
    country: str
    timezone: int
    sunrise: int = 0
    sunset: int = 0


class Forecast(ProviderModel):
    cod: str
    cnt: int
    list: list[ForecastItem]
    city: ForecastCity


class AirQualityEntry(ProviderModel):
    main: dict  # {"aqi": 1..5}
    components: dict[str, float]
    dt: int


class AirQuality(ProviderModel):
    coord: Coord
    list: list[AirQualityEntry]


class WeatherAlert(ProviderModel):
    sender_name: str
    event: str
    start: int
    end: int
    description: str
    tags: Optional[list[str]] = None


class WeatherAlertsResponse(ProviderModel):
    lat: float
    lon: float
    timezone: str
    timezone_offset: int
    alerts: list[WeatherAlert] = []


class InsightRequest(CamelModel):
    weather_data: dict
    location: str
    question: Optional[str] = None


class InsightResponse(BaseModel):
    insight: str
    timestamp: str
