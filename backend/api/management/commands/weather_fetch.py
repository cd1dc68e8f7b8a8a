"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.serializers import CityQuerySerializer
from backend.api.views import get_weather_service
from backend.core.providers.base import GeocodingError, LocationNotFound, ProviderError


class Command(BaseCommand):
    help = "Fetch normalized weather for a city or a coordinate pair"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")
        parser.add_argument("--city", type=str, help="City name")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        city = options.get("city")
        latitude = options.get("lat")
        longitude = options.get("lon")
        if city:
            serializer = CityQuerySerializer(data={"city": city})
            if not serializer.is_valid():
                raise CommandError(f"Invalid --city: {serializer.errors['city'][0]}")
            city = serializer.validated_data["city"]
        service = get_weather_service()

        try:
            if city:
                weather = service.get_by_city(city)
            else:
                if latitude is None or longitude is None:
                    raise CommandError("--lat and --lon are required unless --city is given")
                if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
                    raise CommandError("--lat must be within [-90, 90] and --lon within [-180, 180]")
                weather = service.get_by_coordinates(latitude, longitude)
        except LocationNotFound as exc:
            raise CommandError("City not found") from exc
        except GeocodingError as exc:
            raise CommandError(f"Failed to geocode city (HTTP {exc.status_code})") from exc
        except ProviderError as exc:
            raise CommandError(f"Failed to fetch weather data: {exc}") from exc

        self.stdout.write(json.dumps(weather.to_dict()))
