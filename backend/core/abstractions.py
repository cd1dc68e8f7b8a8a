"""Core abstractions for the weather domain."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Protocol, Union


def format_timestamp(value: datetime) -> str:
    """Render an aware datetime as ISO-8601 UTC with a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude {self.latitude} outside [-90, 90]")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude {self.longitude} outside [-180, 180]")


@dataclass(frozen=True)
class Location:
    """A named place, as resolved by geocoding."""

    name: str
    country_code: str
    coordinates: Coordinates

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "countryCode": self.country_code,
            "coordinates": {
                "latitude": self.coordinates.latitude,
                "longitude": self.coordinates.longitude,
            },
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Location":
        coordinates = payload["coordinates"]
        return cls(
            name=payload["name"],
            country_code=payload["countryCode"],
            coordinates=Coordinates(
                latitude=coordinates["latitude"],
                longitude=coordinates["longitude"],
            ),
        )


@dataclass(frozen=True)
class OneCallPayload:
    """Combined current + daily document from the one-call endpoint."""

    document: Any


@dataclass(frozen=True)
class SplitPayload:
    """Separate current-weather and 3-hour forecast documents."""

    current: Any
    forecast: Any


RawWeatherPayload = Union[OneCallPayload, SplitPayload]


@dataclass(frozen=True)
class CurrentConditions:
    temp_c: int
    temp_f: int
    condition: str
    icon: str
    wind_speed: int
    humidity: int
    feels_like_c: int
    precipitation: float = 0.0
    uv_index: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tempC": self.temp_c,
            "tempF": self.temp_f,
            "condition": self.condition,
            "icon": self.icon,
            "windSpeed": self.wind_speed,
            "humidity": self.humidity,
            "precipitation": self.precipitation,
            "feelsLikeC": self.feels_like_c,
            "uvIndex": self.uv_index,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CurrentConditions":
        return cls(
            temp_c=payload["tempC"],
            temp_f=payload["tempF"],
            condition=payload["condition"],
            icon=payload["icon"],
            wind_speed=payload["windSpeed"],
            humidity=payload["humidity"],
            feels_like_c=payload["feelsLikeC"],
            precipitation=payload.get("precipitation", 0.0),
            uv_index=payload.get("uvIndex", 0.0),
        )


@dataclass(frozen=True)
class DailyForecast:
    date: str
    day_label: str
    temp_min_c: int
    temp_max_c: int
    temp_min_f: int
    temp_max_f: int
    icon: str
    condition: str
    precipitation_chance: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "dayLabel": self.day_label,
            "tempMinC": self.temp_min_c,
            "tempMaxC": self.temp_max_c,
            "tempMinF": self.temp_min_f,
            "tempMaxF": self.temp_max_f,
            "icon": self.icon,
            "condition": self.condition,
            "precipitationChance": self.precipitation_chance,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DailyForecast":
        return cls(
            date=payload["date"],
            day_label=payload["dayLabel"],
            temp_min_c=payload["tempMinC"],
            temp_max_c=payload["tempMaxC"],
            temp_min_f=payload["tempMinF"],
            temp_max_f=payload["tempMaxF"],
            icon=payload["icon"],
            condition=payload["condition"],
            precipitation_chance=payload.get("precipitationChance", 0),
        )


@dataclass(frozen=True)
class NormalizedWeather:
    """Client-facing weather document; the only thing the cache stores."""

    location: Location
    current: CurrentConditions
    last_updated: datetime
    forecast: List[DailyForecast] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location.to_dict(),
            "current": self.current.to_dict(),
            "forecast": [day.to_dict() for day in self.forecast],
            "lastUpdated": format_timestamp(self.last_updated),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "NormalizedWeather":
        return cls(
            location=Location.from_dict(payload["location"]),
            current=CurrentConditions.from_dict(payload["current"]),
            forecast=[DailyForecast.from_dict(day) for day in payload.get("forecast", [])],
            last_updated=parse_timestamp(payload["lastUpdated"]),
        )


class GeocodingClient(Protocol):
    """Resolves place names to coordinates and back."""

    def resolve_by_name(self, city: str) -> Location:
        """Return the best match for ``city`` or raise ``LocationNotFound``."""
        ...

    def resolve_by_coordinates(self, coordinates: Coordinates) -> Location:
        """Return the place at ``coordinates``; never fails."""
        ...


class WeatherFetchClient(Protocol):
    """A data source returning raw provider documents for a coordinate."""

    name: str

    def fetch(self, coordinates: Coordinates) -> RawWeatherPayload:
        """Fetch everything the normalizer needs for ``coordinates``."""
        ...
