from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

import django
import pytest
import requests_mock as requests_mock_lib


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings")
os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")

django.setup()

from django.core.cache import caches  # noqa: E402

from backend.api.views import get_weather_service  # noqa: E402


# Wednesday morning; forecast fixtures start on this day.
NOW = datetime(2024, 1, 10, 8, 0, tzinfo=timezone.utc)


def ts(day: int, hour: int, month: int = 1) -> int:
    return int(datetime(2024, month, day, hour, tzinfo=timezone.utc).timestamp())


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker


@pytest.fixture(autouse=True)
def _fresh_weather_stack():
    get_weather_service.cache_clear()
    caches["default"].clear()
    yield
    get_weather_service.cache_clear()
    caches["default"].clear()


@pytest.fixture()
def now() -> datetime:
    return NOW


def forecast_item(dt: int, temp_min: float = 1.0, temp_max: float = 5.0, icon: str = "04d", pop=None) -> dict:
    item = {
        "dt": dt,
        "main": {"temp": temp_max, "feels_like": temp_max, "temp_min": temp_min, "temp_max": temp_max, "humidity": 80},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": icon}],
    }
    if pop is not None:
        item["pop"] = pop
    return item


@pytest.fixture()
def current_document() -> dict:
    return {
        "coord": {"lon": -74.0, "lat": 40.71},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "main": {"temp": 12.6, "feels_like": 11.4, "temp_min": 11.0, "temp_max": 14.0, "pressure": 1012, "humidity": 71},
        "wind": {"speed": 4.5, "deg": 200},
        "rain": {"1h": 0.42},
        "dt": ts(10, 8),
        "name": "New York",
    }


@pytest.fixture()
def forecast_document() -> dict:
    """Five days of 3-hour samples starting today at 00:00 UTC."""
    start = datetime(2024, 1, 10, tzinfo=timezone.utc)
    items = []
    for step in range(5 * 8):
        moment = start + timedelta(hours=3 * step)
        items.append(forecast_item(int(moment.timestamp()), temp_min=float(step), temp_max=float(step) + 4.5, pop=0.25))
    return {"cod": "200", "cnt": len(items), "list": items}


@pytest.fixture()
def onecall_document() -> dict:
    daily = []
    for offset in range(8):
        daily.append(
            {
                "dt": ts(10 + offset, 11),
                "temp": {"day": 5.0, "min": -2.5 + offset, "max": 6.5 + offset},
                "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
                "pop": 0.125 * offset,
            }
        )
    del daily[2]["pop"]
    return {
        "lat": 40.71,
        "lon": -74.0,
        "current": {
            "dt": ts(10, 8),
            "temp": 20.5,
            "feels_like": 19.5,
            "humidity": 40,
            "wind_speed": 3.5,
            "uvi": 4.2,
            "weather": [{"id": 211, "main": "Thunderstorm", "description": "thunderstorm", "icon": "11n"}],
        },
        "daily": daily,
    }


@pytest.fixture()
def geocoding_result() -> list:
    return [{"name": "New York", "lat": 40.7128, "lon": -74.006, "country": "US", "state": "New York"}]
