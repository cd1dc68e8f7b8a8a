from __future__ import annotations

import pytest

from backend.core.conditions import ICONS, map_icon
from backend.core.units import celsius_to_fahrenheit, round_half_away


@pytest.mark.parametrize(
    "code, expected",
    [
        ("01d", "sun"),
        ("01n", "sun"),
        ("02d", "cloud"),
        ("03n", "cloud"),
        ("04d", "cloud"),
        ("09d", "rain"),
        ("10n", "rain"),
        ("11d", "storm"),
        ("13d", "snow"),
        ("50n", "mist"),
    ],
)
def test_known_icon_codes(code: str, expected: str) -> None:
    assert map_icon(code) == expected


def test_unknown_icon_codes_default_to_sun() -> None:
    known = {"01", "02", "03", "04", "09", "10", "11", "13", "50"}
    for number in range(100):
        prefix = f"{number:02d}"
        if prefix in known:
            continue
        assert map_icon(prefix + "d") == "sun"
    assert map_icon("") == "sun"
    assert map_icon("xx") == "sun"


def test_icon_mapping_stays_within_icon_set() -> None:
    for number in range(100):
        assert map_icon(f"{number:02d}d") in ICONS


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (-0.5, -1), (-2.5, -3), (2.4999, 2), (-17.5, -18), (12.0, 12)],
)
def test_rounding_ties_go_away_from_zero(value: float, expected: int) -> None:
    assert round_half_away(value) == expected


def test_fahrenheit_uses_raw_celsius() -> None:
    raw = -17.5
    rounded_c = round_half_away(raw)

    assert rounded_c == -18
    assert celsius_to_fahrenheit(raw) == 1
    # Converting the already rounded value would give a different answer.
    assert celsius_to_fahrenheit(rounded_c) == 0


@pytest.mark.parametrize("raw", [0.4999, 0.5001])
def test_fahrenheit_near_rounding_cliff(raw: float) -> None:
    assert celsius_to_fahrenheit(raw) == 33
    assert celsius_to_fahrenheit(round_half_away(raw)) in {32, 34}
