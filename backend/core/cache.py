from __future__ import annotations

import logging
import time
from typing import Callable, Optional
from urllib.parse import quote

from django.core.cache.backends.base import BaseCache

from backend.core.abstractions import NormalizedWeather


logger = logging.getLogger(__name__)

DEFAULT_TTL = 10 * 60


def city_cache_key(city: str) -> str:
    return "weather_" + city.lower()


def coordinates_cache_key(latitude: str, longitude: str) -> str:
    """Build the key from the literal request values.

    ``40.7128`` and ``40.71280`` produce different keys.
    """
    return f"weather_coord_{latitude}_{longitude}"


class WeatherCache:
    """TTL cache of normalized weather on top of a Django cache backend.

    Entries carry their own expiry so a stale value is never served, even by
    a backend that has not evicted it yet.
    """

    def __init__(
        self,
        backend: BaseCache,
        ttl: float = DEFAULT_TTL,
        time_func: Callable[[], float] = time.time,
    ) -> None:
        self._backend = backend
        self._ttl = ttl
        self._time_func = time_func

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> Optional[NormalizedWeather]:
        item = self._backend.get(self._backend_key(key))
        if not item:
            return None
        if item["expires_at"] <= self._time_func():
            self._backend.delete(self._backend_key(key))
            return None
        logger.debug("Weather cache hit for %s", key)
        return NormalizedWeather.from_dict(item["value"])

    def put(self, key: str, value: NormalizedWeather, ttl: Optional[float] = None) -> None:
        ttl = self._ttl if ttl is None else ttl
        item = {"expires_at": self._time_func() + ttl, "value": value.to_dict()}
        self._backend.set(self._backend_key(key), item, ttl)

    def clear(self) -> None:
        self._backend.clear()

    @staticmethod
    def _backend_key(key: str) -> str:
        # Memcached-style backends reject spaces and control characters.
        return quote(key, safe="")


__all__ = ["DEFAULT_TTL", "WeatherCache", "city_cache_key", "coordinates_cache_key"]
