"""Dataclasses and enums that describe birth data and computed natal charts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ZodiacMode(str, Enum):
    TROPICAL = "Tropical"
    SIDEREAL = "Sidereal"


class HouseSystem(str, Enum):
    """House systems understood by the engine.

    The value is the display name; ``code`` is the single-letter house code
    passed to the ephemeris provider.
    """

    KOCH = "Koch"
    PLACIDUS = "Placidus"
    EQUAL = "Equal"
    REGIOMONTANUS = "Regiomontanus"
    CAMPANUS = "Campanus"
    PORPHYRY = "Porphyry"
    WHOLE_SIGN = "Whole Sign"

    @property
    def code(self) -> str:
        return HOUSE_CODES[self]

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def is_direct_cusp(self) -> bool:
        """True when cusps come straight from the provider rather than the Ascendant."""
        return self not in (HouseSystem.EQUAL, HouseSystem.WHOLE_SIGN)


HOUSE_CODES: dict[HouseSystem, str] = {
    HouseSystem.KOCH: "K",
    HouseSystem.PLACIDUS: "P",
    HouseSystem.EQUAL: "E",
    HouseSystem.REGIOMONTANUS: "R",
    HouseSystem.CAMPANUS: "C",
    HouseSystem.PORPHYRY: "O",
    HouseSystem.WHOLE_SIGN: "W",
}


class Body(str, Enum):
    """Supported bodies, declared in fixed resolution order."""

    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"
    NORTH_NODE = "North Node"
    SOUTH_NODE = "South Node"
    CHIRON = "Chiron"
    LILITH = "Lilith"
    PROSERPINE = "Proserpine"


class ZodiacSign(int, Enum):
    ARIES = 0
    TAURUS = 1
    GEMINI = 2
    CANCER = 3
    LEO = 4
    VIRGO = 5
    LIBRA = 6
    SCORPIO = 7
    SAGITTARIUS = 8
    CAPRICORN = 9
    AQUARIUS = 10
    PISCES = 11

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class BirthData:
    """Local civil birth time and place, as entered by the caller."""

    local_datetime: datetime
    latitude: float
    longitude: float
    utc_offset_hours: float
    name: str = ""

    def __post_init__(self) -> None:
        if self.local_datetime.tzinfo is not None:
            raise ValueError(
                "local_datetime must be naive local time; pass the zone via utc_offset_hours"
            )
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range [-180, 180]: {self.longitude}")


@dataclass(frozen=True)
class CalculationSettings:
    """Per-chart calculation choices, resolved once and passed everywhere."""

    zodiac: ZodiacMode
    house_system: HouseSystem
    ayanamsa_year: int
    ayanamsa: float

    @property
    def is_sidereal(self) -> bool:
        return self.zodiac is ZodiacMode.SIDEREAL


@dataclass(frozen=True)
class UtcMoment:
    """Birth moment in UTC, split the way the provider's day-number call wants it."""

    datetime_utc: datetime
    year: int
    month: int
    day: int
    fractional_hour: float


@dataclass(frozen=True)
class RawBodyPosition:
    """Unprojected provider output for one body (tropical frame)."""

    longitude: float
    latitude: float
    distance: float
    longitude_speed: float
    latitude_speed: float
    distance_speed: float


@dataclass(frozen=True)
class RawHouses:
    """Unprojected provider house output: 12 cusps and the angle vector."""

    cusps: tuple[float, ...]
    angles: tuple[float, ...]

    @property
    def ascendant(self) -> float:
        return self.angles[0]

    @property
    def midheaven(self) -> float:
        return self.angles[1]


@dataclass(frozen=True)
class BodyPosition:
    """Projected placement for a single body."""

    body: Body
    longitude: float
    latitude: float
    distance: float
    longitude_speed: float
    latitude_speed: float
    distance_speed: float
    zodiac_sign: ZodiacSign
    degree_in_sign: float
    retrograde: bool


@dataclass(frozen=True)
class HouseCusp:
    number: int
    longitude: float
    zodiac_sign: ZodiacSign


@dataclass(frozen=True)
class ChartAngle:
    name: str
    longitude: float
    zodiac_sign: ZodiacSign


@dataclass(frozen=True)
class BodyFailure:
    """A body left out of the chart because the provider could not resolve it."""

    body: Body
    reason: str


@dataclass(frozen=True)
class NatalChart:
    """Complete natal chart. Built once per request, never mutated."""

    birth: BirthData
    moment: UtcMoment
    day_number: float
    settings: CalculationSettings
    bodies: tuple[BodyPosition, ...]
    houses: tuple[HouseCusp, ...]
    ascendant: ChartAngle
    midheaven: ChartAngle
    failures: tuple[BodyFailure, ...] = ()
    advisories: tuple[str, ...] = ()

    @property
    def ayanamsa(self) -> float:
        return self.settings.ayanamsa

    def body(self, body: Body) -> BodyPosition | None:
        """Return the position for ``body`` or None if it was omitted."""
        return next((p for p in self.bodies if p.body is body), None)
