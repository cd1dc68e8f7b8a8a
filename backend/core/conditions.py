"""Collapse OpenWeather icon codes into the client's small icon set."""
from __future__ import annotations

from typing import Dict

SUN = "sun"
CLOUD = "cloud"
RAIN = "rain"
STORM = "storm"
SNOW = "snow"
MIST = "mist"

ICONS = (SUN, CLOUD, RAIN, STORM, SNOW, MIST)

_ICON_BY_PREFIX: Dict[str, str] = {
    "01": SUN,
    "02": CLOUD,
    "03": CLOUD,
    "04": CLOUD,
    "09": RAIN,
    "10": RAIN,
    "11": STORM,
    "13": SNOW,
    "50": MIST,
}


def map_icon(icon_code: str) -> str:
    """Map an icon code such as ``"10d"`` to an icon name.

    Only the first two characters matter (the day/night suffix is dropped).
    Unknown codes fall back to ``sun``.
    """
    return _ICON_BY_PREFIX.get((icon_code or "")[:2], SUN)


__all__ = ["ICONS", "map_icon", "SUN", "CLOUD", "RAIN", "STORM", "SNOW", "MIST"]
