"""Ephemeris provider interface and the Swiss Ephemeris implementation."""

from __future__ import annotations

import logging
import os
from typing import Protocol

import swisseph as swe

from .errors import EphemerisError
from .models import Body, RawBodyPosition, RawHouses

logger = logging.getLogger(__name__)

GREGORIAN_CALENDAR = "gregorian"
JULIAN_CALENDAR = "julian"

# Day numbers the Swiss Ephemeris files cover (-13000 .. +17191 CE). Outside this
# range results are still produced but flagged as low confidence.
MIN_DAY_NUMBER = 625673.5
MAX_DAY_NUMBER = 2816787.5

SWISS_BODY_IDS: dict[Body, int] = {
    Body.SUN: swe.SUN,
    Body.MOON: swe.MOON,
    Body.MERCURY: swe.MERCURY,
    Body.VENUS: swe.VENUS,
    Body.MARS: swe.MARS,
    Body.JUPITER: swe.JUPITER,
    Body.SATURN: swe.SATURN,
    Body.URANUS: swe.URANUS,
    Body.NEPTUNE: swe.NEPTUNE,
    Body.PLUTO: swe.PLUTO,
    Body.NORTH_NODE: swe.TRUE_NODE,
    Body.CHIRON: swe.CHIRON,
    Body.LILITH: swe.MEAN_APOG,
    Body.PROSERPINE: swe.PROSERPINA,
}
# Speed is required for retrograde detection.
FLAGS = swe.FLG_SWIEPH | swe.FLG_SPEED

_CALENDARS = {
    GREGORIAN_CALENDAR: swe.GREG_CAL,
    JULIAN_CALENDAR: swe.JUL_CAL,
}


class EphemerisProvider(Protocol):
    """What the chart engine needs from an ephemeris backend.

    Every call raises EphemerisError on failure.
    """

    min_day_number: float
    max_day_number: float

    @property
    def closed(self) -> bool: ...

    def day_number(
        self, year: int, month: int, day: int, fractional_hour: float, calendar: str = GREGORIAN_CALENDAR
    ) -> float: ...

    def body_position(self, day_number: float, body: Body) -> RawBodyPosition: ...

    def houses(self, day_number: float, latitude: float, longitude: float, house_code: str) -> RawHouses: ...

    def close(self) -> None: ...


class SwissEphemerisProvider:
    """
    Swiss Ephemeris backed provider.

    The ephemeris directory comes from ``ephe_path`` or the SWISSEPH_EPHE
    environment variable. Without one, Swiss Ephemeris falls back to its
    built-in Moshier model for the major planets; bodies that need data files
    (Chiron, Proserpine) then fail individually.

    One instance owns the library state; call ``close`` exactly once when done,
    or use it as a context manager.
    """

    min_day_number = MIN_DAY_NUMBER
    max_day_number = MAX_DAY_NUMBER

    def __init__(self, ephe_path: str | None = None) -> None:
        self.ephe_path = ephe_path or os.environ.get("SWISSEPH_EPHE")
        self._closed = False
        if self.ephe_path:
            swe.set_ephe_path(self.ephe_path)
            logger.debug("Swiss Ephemeris path set to %s", self.ephe_path)
        else:
            logger.info("No Swiss Ephemeris path configured; using built-in fallback data")

    @property
    def closed(self) -> bool:
        return self._closed

    def day_number(
        self, year: int, month: int, day: int, fractional_hour: float, calendar: str = GREGORIAN_CALENDAR
    ) -> float:
        try:
            cal_flag = _CALENDARS[calendar]
        except KeyError:
            raise EphemerisError(f"Unsupported calendar convention: {calendar}") from None
        return swe.julday(year, month, day, fractional_hour, cal_flag)

    def body_position(self, day_number: float, body: Body) -> RawBodyPosition:
        """Return tropical ecliptic coordinates and daily speeds for ``body``."""

        body_id = SWISS_BODY_IDS.get(body)
        if body_id is None:
            raise EphemerisError(f"{body.value} has no Swiss Ephemeris identifier")
        try:
            result = swe.calc_ut(day_number, body_id, FLAGS)
        except swe.Error as exc:
            raise EphemerisError(f"{body.value}: {exc}") from exc

        # pyswisseph returns either a flat tuple of floats or (position_tuple, retflag).
        if len(result) == 2 and isinstance(result[0], (tuple, list)):
            position, retflag = result
            if retflag & swe.FLG_MOSEPH:
                logger.debug("%s computed with Moshier fallback", body.value)
        else:
            position = result
        if len(position) < 6:
            raise EphemerisError(f"{body.value}: incomplete position data {position!r}")

        return RawBodyPosition(
            longitude=float(position[0]),
            latitude=float(position[1]),
            distance=float(position[2]),
            longitude_speed=float(position[3]),
            latitude_speed=float(position[4]),
            distance_speed=float(position[5]),
        )

    def houses(self, day_number: float, latitude: float, longitude: float, house_code: str) -> RawHouses:
        """Return 12 raw cusps plus the angle vector (Asc at 0, MC at 1)."""

        try:
            cusps, ascmc = swe.houses(day_number, latitude, longitude, house_code.encode("ascii"))
        except swe.Error as exc:
            raise EphemerisError(f"house calculation failed ({house_code}): {exc}") from exc

        # Older builds return a 13-slot array with a dummy at index 0.
        if len(cusps) == 13:
            cusps = cusps[1:]
        if len(cusps) != 12 or len(ascmc) < 2:
            raise EphemerisError(
                f"house calculation returned {len(cusps)} cusps and {len(ascmc)} angles"
            )
        return RawHouses(
            cusps=tuple(float(c) for c in cusps),
            angles=tuple(float(a) for a in ascmc),
        )

    def close(self) -> None:
        """Release Swiss Ephemeris resources. Further calls are no-ops."""

        if self._closed:
            return
        swe.close()
        self._closed = True
        logger.debug("Swiss Ephemeris closed")

    def __enter__(self) -> SwissEphemerisProvider:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
