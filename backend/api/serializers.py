"""Query parameter validation for the weather endpoints."""
from __future__ import annotations

import math
import re

from rest_framework import serializers


# Plain decimal or exponent notation. float() alone also takes "4_0", "nan"
# and "inf", and the raw strings end up in cache keys.
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class NumericStringField(serializers.FloatField):
    def to_internal_value(self, data):
        if isinstance(data, str):
            if not NUMBER_PATTERN.fullmatch(data.strip()):
                self.fail("invalid")
        elif isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("invalid")
        value = super().to_internal_value(data)
        if not math.isfinite(value):
            self.fail("invalid")
        return value


class CityQuerySerializer(serializers.Serializer):
    city = serializers.CharField(max_length=100)


class CoordinatesQuerySerializer(serializers.Serializer):
    lat = NumericStringField(min_value=-90, max_value=90)
    lon = NumericStringField(min_value=-180, max_value=180)
