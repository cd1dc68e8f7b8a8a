"""OpenWeather geocoding: city name to coordinates and back."""
from __future__ import annotations

import logging

from backend.core.abstractions import Coordinates, GeocodingClient, Location
from backend.core.providers.base import (
    GeocodingError,
    LocationNotFound,
    OpenWeatherClient,
    ProviderError,
)
from backend.core.providers.schemas import GeocodingResults


logger = logging.getLogger(__name__)

UNKNOWN_LOCATION_NAME = "Unknown Location"


class OpenWeatherGeocodingClient(OpenWeatherClient, GeocodingClient):
    """Integration with the OpenWeather direct and reverse geocoding endpoints."""

    error_class = GeocodingError

    def resolve_by_name(self, city: str) -> Location:
        params = {"q": city, "limit": 1}
        response = self._get(self.config.geo_url, params, context="Geocoding API")
        self._check(response, "Geocoding API", params)
        results = self._parse(GeocodingResults, self._json(response), "Geocoding API").root
        if not results:
            raise LocationNotFound(f"no geocoding match for {city!r}")
        match = results[0]
        return Location(
            name=match.name,
            country_code=match.country,
            coordinates=Coordinates(latitude=match.lat, longitude=match.lon),
        )

    def resolve_by_coordinates(self, coordinates: Coordinates) -> Location:
        """Return the place name for ``coordinates``.

        Reverse lookups never fail the request: any upstream trouble or an
        empty result yields ``Unknown Location`` with the requested
        coordinates.
        """
        fallback = Location(name=UNKNOWN_LOCATION_NAME, country_code="", coordinates=coordinates)
        params = {"lat": coordinates.latitude, "lon": coordinates.longitude, "limit": 1}
        try:
            response = self._get(self.config.reverse_geo_url, params, context="Reverse geocoding API")
            self._check(response, "Reverse geocoding API", params)
            results = self._parse(GeocodingResults, self._json(response), "Reverse geocoding API").root
        except ProviderError as exc:
            logger.warning(
                "Reverse geocoding unavailable for lat=%s lon=%s, using fallback: %s",
                coordinates.latitude,
                coordinates.longitude,
                exc,
            )
            return fallback
        if not results:
            return fallback
        return Location(name=results[0].name, country_code=results[0].country, coordinates=coordinates)


__all__ = ["OpenWeatherGeocodingClient", "UNKNOWN_LOCATION_NAME"]
