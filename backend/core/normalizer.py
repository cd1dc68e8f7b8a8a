"""Turn validated OpenWeather documents into :class:`NormalizedWeather`."""
from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional

from backend.core.abstractions import (
    CurrentConditions,
    DailyForecast,
    Location,
    NormalizedWeather,
    OneCallPayload,
    RawWeatherPayload,
    SplitPayload,
)
from backend.core.conditions import map_icon
from backend.core.forecast import local_datetime, select_daily_entries, select_interval_points
from backend.core.providers.schemas import ForecastItem, OneCallDaily
from backend.core.units import celsius_to_fahrenheit, round_half_away


def day_label(moment: datetime) -> str:
    """``Mon 14`` style label: abbreviated weekday and day of month."""
    return f"{moment.strftime('%a')} {moment.day}"


def precipitation_chance(pop: Optional[float]) -> int:
    if pop is None:
        return 0
    return round_half_away(pop * 100)


def _daily(
    timestamp: int,
    temp_min: float,
    temp_max: float,
    icon: str,
    condition: str,
    pop: Optional[float],
    tz: tzinfo,
) -> DailyForecast:
    moment = local_datetime(timestamp, tz)
    return DailyForecast(
        date=moment.strftime("%Y-%m-%d"),
        day_label=day_label(moment),
        temp_min_c=round_half_away(temp_min),
        temp_max_c=round_half_away(temp_max),
        temp_min_f=celsius_to_fahrenheit(temp_min),
        temp_max_f=celsius_to_fahrenheit(temp_max),
        icon=map_icon(icon),
        condition=condition,
        precipitation_chance=precipitation_chance(pop),
    )


def _from_daily_entry(entry: OneCallDaily, tz: tzinfo) -> DailyForecast:
    return _daily(
        entry.dt,
        entry.temp.min,
        entry.temp.max,
        entry.condition.icon,
        entry.condition.main,
        entry.pop,
        tz,
    )


def _from_interval_point(point: ForecastItem, tz: tzinfo) -> DailyForecast:
    return _daily(
        point.dt,
        point.main.temp_min,
        point.main.temp_max,
        point.condition.icon,
        point.condition.main,
        point.pop,
        tz,
    )


def _normalize_onecall(payload: OneCallPayload, tz: tzinfo):
    current = payload.document.current
    conditions = CurrentConditions(
        temp_c=round_half_away(current.temp),
        temp_f=celsius_to_fahrenheit(current.temp),
        condition=current.condition.main,
        icon=map_icon(current.condition.icon),
        wind_speed=round_half_away(current.wind_speed),
        humidity=current.humidity,
        feels_like_c=round_half_away(current.feels_like),
        precipitation=float(current.rain.get("1h", 0.0)),
        uv_index=float(current.uvi) if current.uvi is not None else 0.0,
    )
    forecast = [_from_daily_entry(entry, tz) for entry in select_daily_entries(payload.document.daily)]
    return conditions, forecast


def _normalize_split(payload: SplitPayload, tz: tzinfo, now: datetime):
    current = payload.current
    conditions = CurrentConditions(
        temp_c=round_half_away(current.main.temp),
        temp_f=celsius_to_fahrenheit(current.main.temp),
        condition=current.condition.main,
        icon=map_icon(current.condition.icon),
        wind_speed=round_half_away(current.wind.speed),
        humidity=current.main.humidity,
        feels_like_c=round_half_away(current.main.feels_like),
        precipitation=float(current.rain.get("1h", 0.0)),
        # The free-tier endpoints carry no UV index.
        uv_index=0.0,
    )
    today = now.astimezone(tz).date()
    points = select_interval_points(payload.forecast.list, today=today, tz=tz)
    forecast = [_from_interval_point(point, tz) for point in points]
    return conditions, forecast


def normalize(
    payload: RawWeatherPayload,
    location: Location,
    *,
    now: Optional[datetime] = None,
    tz: tzinfo = timezone.utc,
) -> NormalizedWeather:
    """Build the client document from a raw payload and its location.

    ``now`` defaults to the current UTC time and becomes ``last_updated``; for
    the split shape it also decides which calendar day counts as today.
    Forecast dates and day labels are rendered in ``tz``.
    """
    now = now or datetime.now(tz=timezone.utc)
    if isinstance(payload, OneCallPayload):
        conditions, forecast = _normalize_onecall(payload, tz)
    elif isinstance(payload, SplitPayload):
        conditions, forecast = _normalize_split(payload, tz, now)
    else:
        raise TypeError(f"unsupported payload type {type(payload).__name__}")
    return NormalizedWeather(
        location=location,
        current=conditions,
        forecast=forecast,
        last_updated=now.astimezone(timezone.utc).replace(microsecond=0),
    )


__all__ = ["day_label", "normalize", "precipitation_chance"]
