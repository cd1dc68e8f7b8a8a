"""OpenWeather weather fetch clients.

Two upstream shapes are supported behind the same ``fetch`` call:

* :class:`OneCallWeatherClient` hits the one-call endpoint, which returns the
  current conditions and an 8 day daily array in a single document.
* :class:`SplitWeatherClient` hits the free-tier current weather and
  5 day / 3 hour forecast endpoints. Both calls must succeed.
"""
from __future__ import annotations

from backend.core.abstractions import (
    Coordinates,
    OneCallPayload,
    SplitPayload,
    WeatherFetchClient,
)
from backend.core.providers.base import OpenWeatherClient, WeatherFetchError
from backend.core.providers.schemas import CurrentWeatherDocument, ForecastDocument, OneCallDocument


class OneCallWeatherClient(OpenWeatherClient, WeatherFetchClient):
    """Integration with the OpenWeather one-call endpoint."""

    name = "onecall"
    error_class = WeatherFetchError

    def fetch(self, coordinates: Coordinates) -> OneCallPayload:
        params = {
            "lat": coordinates.latitude,
            "lon": coordinates.longitude,
            "units": "metric",
            "exclude": "minutely,hourly,alerts",
        }
        response = self._get(self.config.onecall_url, params, context="Weather API")
        self._check(response, "Weather API", params)
        document = self._parse(OneCallDocument, self._json(response), "Weather API")
        return OneCallPayload(document=document)


class SplitWeatherClient(OpenWeatherClient, WeatherFetchClient):
    """Integration with the OpenWeather current weather + forecast endpoints."""

    name = "split"
    error_class = WeatherFetchError

    def fetch(self, coordinates: Coordinates) -> SplitPayload:
        params = {"lat": coordinates.latitude, "lon": coordinates.longitude, "units": "metric"}

        response = self._get(self.config.current_url, params, context="Weather API")
        self._check(response, "Weather API", params)
        current = self._parse(CurrentWeatherDocument, self._json(response), "Weather API")

        response = self._get(self.config.forecast_url, params, context="Forecast API")
        self._check(response, "Forecast API", params)
        forecast = self._parse(ForecastDocument, self._json(response), "Forecast API")

        return SplitPayload(current=current, forecast=forecast)


FETCH_CLIENTS = {
    OneCallWeatherClient.name: OneCallWeatherClient,
    SplitWeatherClient.name: SplitWeatherClient,
}


__all__ = ["FETCH_CLIENTS", "OneCallWeatherClient", "SplitWeatherClient"]
