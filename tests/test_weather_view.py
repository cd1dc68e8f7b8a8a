from __future__ import annotations

import logging

import pytest
from django.test import Client, override_settings

from backend.api.views import get_weather_service


GEO_URL = "https://api.openweathermap.org/geo/1.0/direct"
REVERSE_GEO_URL = "https://api.openweathermap.org/geo/1.0/reverse"
CURRENT_URL = "https://api.openweathermap.org/data/2.5/weather"
FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
ONECALL_URL = "https://api.openweathermap.org/data/2.5/onecall"


@pytest.fixture()
def upstream(requests_mock, current_document, forecast_document, geocoding_result):
    requests_mock.get(GEO_URL, json=geocoding_result)
    requests_mock.get(REVERSE_GEO_URL, json=geocoding_result)
    requests_mock.get(CURRENT_URL, json=current_document)
    requests_mock.get(FORECAST_URL, json=forecast_document)
    return requests_mock


def test_health_endpoint() -> None:
    response = Client().get("/api/weather/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["message"] == "Weather API is operational"
    assert payload["timestamp"].endswith("Z")


def test_unknown_city_returns_404(requests_mock) -> None:
    requests_mock.get(GEO_URL, json=[])

    response = Client().get("/api/weather/city", {"city": "InvalidCityXYZ123"})

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "City not found"}


def test_city_is_required() -> None:
    response = Client().get("/api/weather/city")

    assert response.status_code == 422
    payload = response.json()
    assert payload["success"] is False
    assert payload["message"] == "Validation error"
    assert "city" in payload["errors"]


def test_city_length_is_limited() -> None:
    response = Client().get("/api/weather/city", {"city": "x" * 101})

    assert response.status_code == 422
    assert "city" in response.json()["errors"]


def test_latitude_out_of_range() -> None:
    response = Client().get("/api/weather/coordinates", {"lat": "91", "lon": "0"})

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert list(errors) == ["lat"]
    assert errors["lat"]


@pytest.mark.parametrize("params", [{"lat": "abc", "lon": "0"}, {"lat": "0"}, {"lat": "nan", "lon": "0"}])
def test_coordinates_must_be_numeric(params) -> None:
    response = Client().get("/api/weather/coordinates", params)

    assert response.status_code == 422
    assert response.json()["success"] is False


def test_coordinates_lookup(upstream, current_document) -> None:
    response = Client().get("/api/weather/coordinates", {"lat": "40.71", "lon": "-74.00"})

    assert response.status_code == 200
    payload = response.json()
    celsius = current_document["main"]["temp"]
    assert payload["current"]["tempF"] == 55 == round(celsius * 9 / 5 + 32)
    assert payload["current"]["tempC"] == 13
    assert payload["location"]["name"] == "New York"
    assert payload["location"]["coordinates"] == {"latitude": 40.71, "longitude": -74.0}
    assert len(payload["forecast"]) == 3
    assert "success" not in payload


def test_coordinates_lookup_survives_reverse_geocoding_failure(requests_mock, current_document, forecast_document):
    requests_mock.get(REVERSE_GEO_URL, status_code=500, text="boom")
    requests_mock.get(CURRENT_URL, json=current_document)
    requests_mock.get(FORECAST_URL, json=forecast_document)

    response = Client().get("/api/weather/coordinates", {"lat": "40.71", "lon": "-74.00"})

    assert response.status_code == 200
    assert response.json()["location"]["name"] == "Unknown Location"
    assert response.json()["location"]["countryCode"] == ""


def test_city_lookup_is_served_from_cache(upstream) -> None:
    client = Client()

    first = client.get("/api/weather/city", {"city": "New York"})
    calls = upstream.call_count
    second = client.get("/api/weather/city", {"city": "new york"})

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert upstream.call_count == calls == 3


def test_current_alias_serves_city_lookup(upstream) -> None:
    response = Client().get("/api/weather/current", {"city": "New York"})

    assert response.status_code == 200
    assert response.json()["location"]["countryCode"] == "US"


def test_geocoding_failure_status_is_surfaced(requests_mock) -> None:
    requests_mock.get(GEO_URL, status_code=401, json={"cod": 401})

    response = Client().get("/api/weather/city", {"city": "Paris"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Failed to geocode city"}


def test_weather_failure_returns_500(requests_mock, geocoding_result) -> None:
    requests_mock.get(GEO_URL, json=geocoding_result)
    requests_mock.get(CURRENT_URL, status_code=503, text="unavailable")

    response = Client().get("/api/weather/city", {"city": "New York"})

    assert response.status_code == 500
    payload = response.json()
    assert payload["success"] is False
    assert payload["message"].startswith("Failed to fetch weather data:")
    assert "503" in payload["message"]


def test_malformed_weather_document_returns_500(requests_mock, current_document, forecast_document):
    del current_document["main"]
    requests_mock.get(REVERSE_GEO_URL, json=[])
    requests_mock.get(CURRENT_URL, json=current_document)
    requests_mock.get(FORECAST_URL, json=forecast_document)

    response = Client().get("/api/weather/coordinates", {"lat": "1", "lon": "2"})

    assert response.status_code == 500
    assert response.json()["success"] is False


def test_onecall_mode(requests_mock, onecall_document, geocoding_result) -> None:
    requests_mock.get(GEO_URL, json=geocoding_result)
    requests_mock.get(ONECALL_URL, json=onecall_document)

    with override_settings(WEATHER_API_MODE="onecall"):
        get_weather_service.cache_clear()
        response = Client().get("/api/weather/city", {"city": "New York"})

    assert response.status_code == 200
    assert response.json()["current"]["uvIndex"] == 4.2
    assert requests_mock.call_count == 2


@pytest.mark.parametrize("params", [{"lat": "4_0", "lon": "5"}, {"lat": "4", "lon": "0_5"}, {"lat": "inf", "lon": "0"}])
def test_coordinates_reject_non_decimal_spellings(requests_mock, params) -> None:
    response = Client().get("/api/weather/coordinates", params)

    assert response.status_code == 422
    assert response.json()["message"] == "Validation error"
    assert not requests_mock.called


def test_exponent_coordinates_are_accepted(upstream) -> None:
    response = Client().get("/api/weather/coordinates", {"lat": "4.07e1", "lon": "-7.4E1"})

    assert response.status_code == 200
    assert response.json()["location"]["coordinates"] == {"latitude": 40.7, "longitude": -74.0}


def test_geocoding_failure_is_logged_with_city(requests_mock, caplog) -> None:
    requests_mock.get(GEO_URL, status_code=401, json={"cod": 401})

    with caplog.at_level(logging.ERROR, logger="backend"):
        Client().get("/api/weather/city", {"city": "Paris"})

    errors = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert {record.name for record in errors} == {"backend.api.views", "backend.core.providers.base"}
    assert all("Paris" in record.getMessage() for record in errors)
    assert any("city=Paris status=401" in record.getMessage() for record in errors)


def test_weather_failure_is_logged_with_city(requests_mock, geocoding_result, caplog) -> None:
    requests_mock.get(GEO_URL, json=geocoding_result)
    requests_mock.get(CURRENT_URL, status_code=503, text="unavailable")

    with caplog.at_level(logging.ERROR, logger="backend"):
        Client().get("/api/weather/city", {"city": "New York"})

    view_errors = [record.getMessage() for record in caplog.records if record.name == "backend.api.views"]
    assert len(view_errors) == 1
    assert "city=New York" in view_errors[0]
    assert "503" in view_errors[0]


def test_unknown_city_is_logged(requests_mock, caplog) -> None:
    requests_mock.get(GEO_URL, json=[])

    with caplog.at_level(logging.WARNING, logger="backend"):
        Client().get("/api/weather/city", {"city": "InvalidCityXYZ123"})

    assert [(record.levelno, record.getMessage()) for record in caplog.records if record.name == "backend.api.views"] == [
        (logging.WARNING, "City not found: city=InvalidCityXYZ123"),
    ]
