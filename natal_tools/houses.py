"""House cusps and chart angles for the supported house systems."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .angles import normalize, sign_index, zodiac_sign
from .errors import EphemerisError, HouseResolutionError
from .models import CalculationSettings, ChartAngle, HouseCusp, HouseSystem, RawHouses
from .projection import project_longitude
from .provider import EphemerisProvider

logger = logging.getLogger(__name__)

ASCENDANT = "Ascendant"
MIDHEAVEN = "Midheaven"


@dataclass(frozen=True)
class HouseResolution:
    cusps: tuple[HouseCusp, ...]
    ascendant: ChartAngle
    midheaven: ChartAngle


def _cusp(number: int, longitude: float) -> HouseCusp:
    return HouseCusp(number=number, longitude=longitude, zodiac_sign=zodiac_sign(longitude))


def _angle(name: str, longitude: float) -> ChartAngle:
    return ChartAngle(name=name, longitude=longitude, zodiac_sign=zodiac_sign(longitude))


def direct_cusps(raw_cusps: tuple[float, ...], settings: CalculationSettings) -> tuple[HouseCusp, ...]:
    """Project the provider's 12 cusps in order as houses 1-12."""

    return tuple(_cusp(i, project_longitude(raw, settings)) for i, raw in enumerate(raw_cusps, start=1))


def equal_cusps(ascendant: float) -> tuple[HouseCusp, ...]:
    """30° houses starting exactly at the (projected) Ascendant."""

    return tuple(_cusp(i, normalize(ascendant + (i - 1) * 30.0)) for i in range(1, 13))


def whole_sign_cusps(ascendant: float) -> tuple[HouseCusp, ...]:
    """30° houses starting at the beginning of the Ascendant's sign."""

    start = sign_index(ascendant) * 30.0
    return tuple(_cusp(i, normalize(start + (i - 1) * 30.0)) for i in range(1, 13))


def cusps_for_system(raw: RawHouses, settings: CalculationSettings) -> tuple[HouseCusp, ...]:
    """Pick the cusp strategy for the settings' house system."""

    system = settings.house_system
    if system.is_direct_cusp:
        if len(raw.cusps) != 12:
            raise HouseResolutionError(f"expected 12 cusps, provider returned {len(raw.cusps)}")
        return direct_cusps(raw.cusps, settings)

    # Equal-division systems ignore the raw cusps entirely.
    ascendant = project_longitude(raw.ascendant, settings)
    if system is HouseSystem.WHOLE_SIGN:
        return whole_sign_cusps(ascendant)
    return equal_cusps(ascendant)


def resolve_houses(
    provider: EphemerisProvider,
    day_number: float,
    latitude: float,
    longitude: float,
    settings: CalculationSettings,
) -> HouseResolution:
    """
    Compute house cusps plus Ascendant and Midheaven.

    One provider call per chart. Any failure raises HouseResolutionError, which
    is fatal to the whole chart.
    """

    try:
        raw = provider.houses(day_number, latitude, longitude, settings.house_system.code)
    except EphemerisError as exc:
        logger.error("Error calculating houses: %s", exc)
        raise HouseResolutionError(f"house calculation failed: {exc}") from exc

    if len(raw.angles) < 2:
        raise HouseResolutionError(f"provider returned {len(raw.angles)} angles, need Ascendant and Midheaven")

    return HouseResolution(
        cusps=cusps_for_system(raw, settings),
        ascendant=_angle(ASCENDANT, project_longitude(raw.ascendant, settings)),
        midheaven=_angle(MIDHEAVEN, project_longitude(raw.midheaven, settings)),
    )
