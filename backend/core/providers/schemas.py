"""Pydantic schemas for the OpenWeatherMap documents the proxy consumes.

Only the fields the normalizer reads are declared; everything else in the
provider response is ignored. Optional blocks (``rain``, ``pop``, ``uvi``)
default to absent so their fallbacks live in one place.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator

__all__ = [
    "CurrentWeatherDocument",
    "ForecastDocument",
    "ForecastItem",
    "GeocodingResult",
    "GeocodingResults",
    "OneCallDocument",
]


class _ProviderModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class WeatherCondition(_ProviderModel):
    main: str
    icon: str = ""


class _HasConditions(_ProviderModel):
    weather: List[WeatherCondition] = Field(...)

    @field_validator("weather")
    @classmethod
    def _require_condition(cls, value: List[WeatherCondition]) -> List[WeatherCondition]:
        if not value:
            raise ValueError("at least one weather condition is required")
        return value

    @property
    def condition(self) -> WeatherCondition:
        return self.weather[0]


class GeocodingResult(_ProviderModel):
    name: str
    lat: float
    lon: float
    country: str = ""


class GeocodingResults(RootModel[List[GeocodingResult]]):
    pass


# -- One-call ---------------------------------------------------------------
class OneCallCurrent(_HasConditions):
    dt: int
    temp: float
    feels_like: float
    humidity: int
    wind_speed: float
    uvi: Optional[float] = None
    rain: Dict[str, float] = Field(default_factory=dict)


class DailyTemperature(_ProviderModel):
    min: float
    max: float


class OneCallDaily(_HasConditions):
    dt: int
    temp: DailyTemperature
    pop: Optional[float] = None


class OneCallDocument(_ProviderModel):
    current: OneCallCurrent
    daily: List[OneCallDaily] = Field(default_factory=list)


# -- Current weather + 5 day / 3 hour forecast ------------------------------
class MainReadings(_ProviderModel):
    temp: float
    feels_like: float
    humidity: int


class ForecastReadings(_ProviderModel):
    temp_min: float
    temp_max: float


class Wind(_ProviderModel):
    speed: float


class CurrentWeatherDocument(_HasConditions):
    dt: Optional[int] = None
    main: MainReadings
    wind: Wind
    rain: Dict[str, float] = Field(default_factory=dict)


class ForecastItem(_HasConditions):
    dt: int
    main: ForecastReadings
    pop: Optional[float] = None


class ForecastDocument(_ProviderModel):
    list: List[ForecastItem] = Field(default_factory=list)
