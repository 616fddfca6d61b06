from __future__ import annotations

from datetime import datetime

import pytest

from natal_tools.config import EngineConfig
from natal_tools.errors import EphemerisError
from natal_tools.models import BirthData, Body, HouseSystem, RawBodyPosition, RawHouses, ZodiacMode
from natal_tools.provider import MAX_DAY_NUMBER, MIN_DAY_NUMBER

# Raw tropical longitudes handed out by the stub, one per provider-resolved body.
RAW_LONGITUDES = {
    Body.SUN: 84.25,
    Body.MOON: 312.5,
    Body.MERCURY: 70.0,
    Body.VENUS: 40.75,
    Body.MARS: 3.5,
    Body.JUPITER: 100.0,
    Body.SATURN: 295.0,
    Body.URANUS: 277.0,
    Body.NEPTUNE: 283.0,
    Body.PLUTO: 225.0,
    Body.NORTH_NODE: 314.0,
    Body.CHIRON: 108.0,
    Body.LILITH: 180.0,
    Body.PROSERPINE: 12.0,
}

RAW_CUSPS = (200.0, 228.0, 259.0, 292.0, 323.0, 351.0, 20.0, 48.0, 79.0, 112.0, 143.0, 171.0)
RAW_ASC = 200.0
RAW_MC = 112.0


class StubProvider:
    """In-memory ephemeris provider that records calls and fails on demand."""

    min_day_number = MIN_DAY_NUMBER
    max_day_number = MAX_DAY_NUMBER

    def __init__(
        self,
        failing_bodies=(),
        fail_houses: bool = False,
        day_number_value: float = 2448058.0,
        longitudes=None,
        cusps=RAW_CUSPS,
        angles=(RAW_ASC, RAW_MC, 0.0, 0.0),
        speeds=None,
    ) -> None:
        self.failing_bodies = set(failing_bodies)
        self.fail_houses = fail_houses
        self.day_number_value = day_number_value
        self.longitudes = dict(RAW_LONGITUDES if longitudes is None else longitudes)
        self.speeds = dict(speeds or {})
        self.cusps = tuple(cusps)
        self.angles = tuple(angles)
        self.day_number_calls: list[tuple] = []
        self.body_calls: list[Body] = []
        self.house_calls: list[tuple] = []
        self.close_calls = 0

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def day_number(self, year, month, day, fractional_hour, calendar="gregorian"):
        self.day_number_calls.append((year, month, day, fractional_hour, calendar))
        return self.day_number_value

    def body_position(self, day_number, body):
        self.body_calls.append(body)
        if body in self.failing_bodies or body not in self.longitudes:
            raise EphemerisError(f"{body.value}: no data")
        return RawBodyPosition(
            longitude=self.longitudes[body],
            latitude=1.5,
            distance=2.25,
            longitude_speed=self.speeds.get(body, 0.5),
            latitude_speed=0.01,
            distance_speed=0.002,
        )

    def houses(self, day_number, latitude, longitude, house_code):
        self.house_calls.append((day_number, latitude, longitude, house_code))
        if self.fail_houses:
            raise EphemerisError("house calculation failed")
        return RawHouses(cusps=self.cusps, angles=self.angles)

    def close(self):
        self.close_calls += 1


def fixed_clock(year: int = 2024):
    return lambda: datetime(year, 1, 1, 12, 0, 0)


@pytest.fixture
def moscow_birth() -> BirthData:
    return BirthData(
        local_datetime=datetime(1990, 6, 15, 14, 30, 0),
        latitude=55.7558,
        longitude=37.6176,
        utc_offset_hours=3.0,
        name="Moscow example",
    )


@pytest.fixture
def stub_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def tropical_config() -> EngineConfig:
    return EngineConfig(zodiac=ZodiacMode.TROPICAL, house_system=HouseSystem.KOCH)


@pytest.fixture
def sidereal_config() -> EngineConfig:
    return EngineConfig(zodiac=ZodiacMode.SIDEREAL, house_system=HouseSystem.KOCH)
