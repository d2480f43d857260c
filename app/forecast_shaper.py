"""Reshape raw forecast entries into the hourly strip and the daily outlook."""
from __future__ import annotations

import datetime as dt
import math
from typing import Iterable, List, Sequence
from zoneinfo import ZoneInfo

from app.models import DailyPoint, ForecastEntry, HourlyPoint

HOURLY_POINTS = 8
DAILY_POINTS = 5

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%d/%m/%Y"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (unlike round(), which goes to even)."""
    return int(math.floor(value + 0.5))


def to_local(timestamp_utc: dt.datetime, tz: ZoneInfo) -> dt.datetime:
    """Convert a UTC instant to wall-clock time in `tz`."""
    if timestamp_utc.tzinfo is None:
        # naive values are UTC by convention
        timestamp_utc = timestamp_utc.replace(tzinfo=dt.timezone.utc)
    return timestamp_utc.astimezone(tz)


def format_local_time(timestamp_utc: dt.datetime, tz: ZoneInfo) -> str:
    return to_local(timestamp_utc, tz).strftime(TIME_FORMAT)


def format_local_date(timestamp_utc: dt.datetime, tz: ZoneInfo) -> str:
    return to_local(timestamp_utc, tz).strftime(DATE_FORMAT)


def to_hourly(entries: Sequence[ForecastEntry], tz: ZoneInfo, limit: int = HOURLY_POINTS) -> List[HourlyPoint]:
    """First `limit` entries in provider order, with local HH:MM labels.

    A shorter input yields a shorter output; nothing is padded.
    """
    return [
        HourlyPoint(
            local_time=format_local_time(entry.timestamp_utc, tz),
            temperature_celsius=round_half_up(entry.temperature_celsius),
            humidity_percent=entry.humidity_percent,
            icon_code=entry.icon_code,
        )
        for entry in entries[:limit]
    ]


def to_daily(entries: Iterable[ForecastEntry], tz: ZoneInfo, limit: int = DAILY_POINTS) -> List[DailyPoint]:
    """One point per local calendar date, up to `limit` dates.

    The first entry seen for a date represents the whole day: values are not
    averaged and no min/max is computed.
    """
    seen = set()
    out: List[DailyPoint] = []
    for entry in entries:
        if len(out) >= limit:
            break
        local_date = format_local_date(entry.timestamp_utc, tz)
        if local_date in seen:
            continue
        seen.add(local_date)
        out.append(
            DailyPoint(
                local_date=local_date,
                temperature_celsius=round_half_up(entry.temperature_celsius),
                humidity_percent=entry.humidity_percent,
                icon_code=entry.icon_code,
            )
        )
    return out
