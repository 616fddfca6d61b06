"""Local civil time to UTC conversion for ephemeris lookups."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytz

from .errors import ChartCalculationError
from .models import BirthData, UtcMoment


def to_utc(birth: BirthData) -> UtcMoment:
    """Shift the local birth time by its UTC offset and split it for the provider.

    Uses datetime arithmetic so day, month and year boundaries roll over.
    Raises ChartCalculationError when the shift leaves the years 1..9999.
    """

    try:
        dt_utc = birth.local_datetime - timedelta(hours=birth.utc_offset_hours)
    except OverflowError as exc:
        raise ChartCalculationError(
            f"UTC time for {birth.local_datetime.isoformat()} (offset {birth.utc_offset_hours:+g}h) "
            "is outside the supported date range"
        ) from exc
    return UtcMoment(
        datetime_utc=dt_utc,
        year=dt_utc.year,
        month=dt_utc.month,
        day=dt_utc.day,
        fractional_hour=fractional_hour(dt_utc),
    )


def fractional_hour(dt: datetime) -> float:
    return dt.hour + dt.minute / 60.0 + dt.second / 3600.0


def utc_offset_for_zone(local_dt: datetime, zone_name: str, is_dst: bool | None = None) -> float:
    """
    Return the UTC offset (hours) that ``zone_name`` had at a local wall-clock time.

    Historical offsets come from the tz database. Wall-clock times that are
    ambiguous or skipped by a DST change raise ValueError unless ``is_dst``
    picks a side.
    """

    try:
        zone = pytz.timezone(zone_name)
    except pytz.UnknownTimeZoneError as exc:
        raise ValueError(f"Unknown time zone: {zone_name}") from exc

    naive = local_dt.replace(tzinfo=None)
    try:
        aware = zone.localize(naive, is_dst=is_dst)
    except pytz.AmbiguousTimeError as exc:
        raise ValueError(f"{naive.isoformat()} is ambiguous in {zone_name}; pass is_dst") from exc
    except pytz.NonExistentTimeError as exc:
        raise ValueError(f"{naive.isoformat()} does not exist in {zone_name}; pass is_dst") from exc

    return aware.utcoffset().total_seconds() / 3600.0
