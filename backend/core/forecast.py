"""Pick one representative forecast point per upcoming day."""
from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import List, Protocol, Sequence, TypeVar

FORECAST_DAYS = 3
NOON_HOURS = range(11, 14)


class TimedPoint(Protocol):
    dt: int


P = TypeVar("P", bound=TimedPoint)


def local_datetime(timestamp: int, tz: tzinfo) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=tz)


def _first_per_day(
    points: Sequence[P], *, today: date, tz: tzinfo, limit: int, noon_only: bool
) -> List[P]:
    selected: List[P] = []
    seen: set[date] = set()
    for point in points:
        moment = local_datetime(point.dt, tz)
        day = moment.date()
        if day == today or day in seen:
            continue
        if noon_only and moment.hour not in NOON_HOURS:
            continue
        seen.add(day)
        selected.append(point)
        if len(selected) >= limit:
            break
    return selected


def select_interval_points(
    points: Sequence[P], *, today: date, tz: tzinfo, limit: int = FORECAST_DAYS
) -> List[P]:
    """Select up to ``limit`` points from a 3-hour forecast list.

    The first pass keeps only samples between 11:00 and 13:00 so every day is
    represented by its midday reading. Coarse feeds do not always carry a
    midday sample for each day; when the first pass finds fewer than ``limit``
    days it is discarded and the first sample of each day is used instead.
    Points falling on ``today`` are never selected.
    """
    ordered = sorted(points, key=lambda point: point.dt)
    selected = _first_per_day(ordered, today=today, tz=tz, limit=limit, noon_only=True)
    if len(selected) < limit:
        selected = _first_per_day(ordered, today=today, tz=tz, limit=limit, noon_only=False)
    return selected


def select_daily_entries(daily: Sequence[P], limit: int = FORECAST_DAYS) -> List[P]:
    """Skip today's entry of a daily array and keep the next ``limit`` days."""
    return list(daily[1 : limit + 1])


__all__ = ["FORECAST_DAYS", "local_datetime", "select_daily_entries", "select_interval_points"]
