"""REST API views for weather information."""
from __future__ import annotations

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

import logging

from django.conf import settings
from django.core.cache import caches
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.api.serializers import CityQuerySerializer, CoordinatesQuerySerializer
from backend.core.abstractions import format_timestamp
from backend.core.cache import WeatherCache
from backend.core.providers.base import GeocodingError, LocationNotFound, OpenWeatherConfig
from backend.core.providers.geocoding import OpenWeatherGeocodingClient
from backend.core.providers.openweather import FETCH_CLIENTS
from backend.core.services.weather_service import WeatherService


logger = logging.getLogger(__name__)


def _timezone(name: str):
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


@lru_cache(maxsize=1)
def get_weather_service() -> WeatherService:
    config = OpenWeatherConfig.from_settings()
    fetcher_class = FETCH_CLIENTS[settings.WEATHER_API_MODE]
    return WeatherService(
        geocoder=OpenWeatherGeocodingClient(config),
        fetcher=fetcher_class(config),
        cache=WeatherCache(caches[settings.WEATHER_CACHE_ALIAS], ttl=settings.WEATHER_CACHE_TIMEOUT),
        tz=_timezone(settings.WEATHER_TIMEZONE),
    )


def error_response(message: str, status_code: int, errors: Optional[Dict[str, Any]] = None) -> Response:
    payload: Dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        payload["errors"] = errors
    return Response(payload, status=status_code)


def _validation_error(serializer) -> Response:
    return error_response("Validation error", status.HTTP_422_UNPROCESSABLE_ENTITY, serializer.errors)


def _fetch_failed(exc: Exception, **context: Any) -> Response:
    params = " ".join(f"{key}={value}" for key, value in context.items())
    logger.error("Weather API error for %s: %s", params, exc, exc_info=exc)
    return error_response(f"Failed to fetch weather data: {exc}", status.HTTP_500_INTERNAL_SERVER_ERROR)


class WeatherByCityView(APIView):
    """Weather for a city name, resolved through forward geocoding."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        serializer = CityQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return _validation_error(serializer)
        city = serializer.validated_data["city"]

        try:
            weather = get_weather_service().get_by_city(city)
        except LocationNotFound:
            logger.warning("City not found: city=%s", city)
            return error_response("City not found", status.HTTP_404_NOT_FOUND)
        except GeocodingError as exc:
            logger.error("Geocoding API error for city=%s status=%s", city, exc.status_code)
            return error_response("Failed to geocode city", exc.status_code)
        except Exception as exc:  # noqa: BLE001 - any other failure becomes a 500 envelope
            return _fetch_failed(exc, city=city)
        return Response(weather.to_dict(), status=status.HTTP_200_OK)


class WeatherByCoordinatesView(APIView):
    """Weather for a coordinate pair; reverse geocoding only names the place."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        serializer = CoordinatesQuerySerializer(data=request.query_params)
        if not serializer.is_valid():
            return _validation_error(serializer)
        latitude = serializer.validated_data["lat"]
        longitude = serializer.validated_data["lon"]

        try:
            weather = get_weather_service().get_by_coordinates(
                latitude,
                longitude,
                raw_latitude=request.query_params["lat"],
                raw_longitude=request.query_params["lon"],
            )
        except Exception as exc:  # noqa: BLE001 - any failure becomes a 500 envelope
            return _fetch_failed(exc, lat=latitude, lon=longitude)
        return Response(weather.to_dict(), status=status.HTTP_200_OK)


class HealthView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        return Response(
            {
                "status": "ok",
                "message": "Weather API is operational",
                "timestamp": format_timestamp(datetime.now(tz=timezone.utc).replace(microsecond=0)),
            },
            status=status.HTTP_200_OK,
        )
