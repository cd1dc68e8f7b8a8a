from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3).

    Python's ``round`` rounds ties to even, which would turn 0.5 C into 0.
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def celsius_to_fahrenheit(celsius: float) -> int:
    """Convert a raw Celsius reading; callers must not pass a rounded value."""
    return round_half_away(celsius * 9 / 5 + 32)


__all__ = ["celsius_to_fahrenheit", "round_half_away"]
