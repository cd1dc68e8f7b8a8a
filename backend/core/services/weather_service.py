"""Weather service: cache, geocode, fetch, normalize, store."""
from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional

import logging

from backend.core.abstractions import (
    Coordinates,
    GeocodingClient,
    Location,
    NormalizedWeather,
    WeatherFetchClient,
)
from backend.core.cache import WeatherCache, city_cache_key, coordinates_cache_key
from backend.core.normalizer import normalize


logger = logging.getLogger(__name__)


class WeatherService:
    """Serve normalized weather for a city name or a coordinate pair.

    Concurrent misses for the same key are not coordinated; each one fetches
    and the last write wins.
    """

    def __init__(
        self,
        *,
        geocoder: GeocodingClient,
        fetcher: WeatherFetchClient,
        cache: WeatherCache,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = lambda: datetime.now(tz=timezone.utc),
    ) -> None:
        self.geocoder = geocoder
        self.fetcher = fetcher
        self.cache = cache
        self.tz = tz
        self._clock = clock

    # Public API ---------------------------------------------------------
    def get_by_city(self, city: str) -> NormalizedWeather:
        cache_key = city_cache_key(city)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached
        location = self.geocoder.resolve_by_name(city)
        return self._build_and_store(cache_key, location)

    def get_by_coordinates(
        self,
        latitude: float,
        longitude: float,
        *,
        raw_latitude: Optional[str] = None,
        raw_longitude: Optional[str] = None,
    ) -> NormalizedWeather:
        """Weather for a coordinate pair.

        ``raw_latitude``/``raw_longitude`` are the values exactly as the
        client sent them and only shape the cache key.
        """
        cache_key = coordinates_cache_key(
            raw_latitude if raw_latitude is not None else str(latitude),
            raw_longitude if raw_longitude is not None else str(longitude),
        )
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached
        location = self.geocoder.resolve_by_coordinates(Coordinates(latitude, longitude))
        return self._build_and_store(cache_key, location)

    # Helpers ------------------------------------------------------------
    def _build_and_store(self, cache_key: str, location: Location) -> NormalizedWeather:
        payload = self.fetcher.fetch(location.coordinates)
        weather = normalize(payload, location, now=self._clock(), tz=self.tz)
        self.cache.put(cache_key, weather)
        logger.info(
            "Fetched weather for %s via %s", location.name, self.fetcher.name, extra={"cache_key": cache_key}
        )
        return weather


__all__ = ["WeatherService"]
