"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import HealthView, WeatherByCityView, WeatherByCoordinatesView

urlpatterns = [
    path("weather/health", HealthView.as_view(), name="weather-health"),
    path("weather/city", WeatherByCityView.as_view(), name="weather-city"),
    # Older clients call the city lookup as /weather/current.
    path("weather/current", WeatherByCityView.as_view(), name="weather-current"),
    path("weather/coordinates", WeatherByCoordinatesView.as_view(), name="weather-coordinates"),
]
