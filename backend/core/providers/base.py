from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from django.conf import settings
from pydantic import ValidationError
from requests import Response


logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Base provider error."""


class UpstreamError(ProviderError):
    """Raised when the provider answers with a non-success status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class GeocodingError(UpstreamError):
    """Forward geocoding failed; the status is surfaced to the client."""


class WeatherFetchError(UpstreamError):
    """A required weather call failed."""


class LocationNotFound(ProviderError):
    """Raised when forward geocoding returns an empty result set."""


class MalformedPayload(ProviderError):
    """The provider answered 2xx with a document we cannot read."""


@dataclass(frozen=True)
class OpenWeatherConfig:
    api_key: str = ""
    onecall_url: str = "https://api.openweathermap.org/data/2.5/onecall"
    current_url: str = "https://api.openweathermap.org/data/2.5/weather"
    forecast_url: str = "https://api.openweathermap.org/data/2.5/forecast"
    geo_url: str = "https://api.openweathermap.org/geo/1.0/direct"
    reverse_geo_url: str = "https://api.openweathermap.org/geo/1.0/reverse"
    timeout: float = 10.0

    @classmethod
    def from_settings(cls) -> "OpenWeatherConfig":
        return cls(
            api_key=settings.OPENWEATHER_API_KEY,
            onecall_url=settings.OPENWEATHER_ONECALL_URL,
            current_url=settings.OPENWEATHER_CURRENT_URL,
            forecast_url=settings.OPENWEATHER_FORECAST_URL,
            geo_url=settings.OPENWEATHER_GEO_URL,
            reverse_geo_url=settings.OPENWEATHER_REVERSE_GEO_URL,
            timeout=settings.WEATHER_HTTP_TIMEOUT,
        )


class OpenWeatherClient:
    """Base class that adds the API key and timeouts for OpenWeather calls."""

    # Subclasses narrow this to GeocodingError / WeatherFetchError.
    error_class: type = UpstreamError

    def __init__(
        self,
        config: OpenWeatherConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _get(self, url: str, params: dict, context: str) -> Response:
        query = dict(params, appid=self.config.api_key)
        try:
            response = self.session.get(url, params=query, timeout=self.config.timeout)
        except requests.Timeout as exc:
            logger.error("%s timed out params=%s", context, params)
            raise self.error_class(f"{context} timed out", status_code=504) from exc
        except requests.RequestException as exc:
            logger.error("%s failed params=%s", context, params, exc_info=exc)
            raise self.error_class(f"{context} failed: {exc}", status_code=502) from exc
        return response

    def _check(self, response: Response, context: str, params: dict) -> Response:
        if not 200 <= response.status_code < 300:
            logger.error(
                "%s returned %s params=%s body=%s",
                context,
                response.status_code,
                params,
                response.text[:500],
            )
            raise self.error_class(
                f"{context} returned error: {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedPayload("provider returned invalid JSON") from exc

    def _parse(self, model: Any, data: Any, context: str) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.error("%s returned an unexpected document: %s", context, exc)
            raise MalformedPayload(f"{context} returned an unexpected document") from exc


__all__ = [
    "GeocodingError",
    "LocationNotFound",
    "MalformedPayload",
    "OpenWeatherClient",
    "OpenWeatherConfig",
    "ProviderError",
    "UpstreamError",
    "WeatherFetchError",
]
