"""Engine configuration read from the environment.

Recognised variables:

    NATAL_ZODIAC        tropical | sidereal (default tropical)
    NATAL_HOUSE_SYSTEM  house system name or single-letter code (default Koch)
    SWISSEPH_EPHE       Swiss Ephemeris data directory
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .errors import ChartConfigurationError
from .models import HOUSE_CODES, HouseSystem, ZodiacMode

_ZODIAC_ALIASES = {
    "t": ZodiacMode.TROPICAL,
    "tropical": ZodiacMode.TROPICAL,
    "s": ZodiacMode.SIDEREAL,
    "sidereal": ZodiacMode.SIDEREAL,
}

_HOUSE_ALIASES = {
    "ws": HouseSystem.WHOLE_SIGN,
    "wholesign": HouseSystem.WHOLE_SIGN,
    "whole_sign": HouseSystem.WHOLE_SIGN,
    "whole sign": HouseSystem.WHOLE_SIGN,
}


@dataclass(frozen=True)
class EngineConfig:
    zodiac: ZodiacMode = ZodiacMode.TROPICAL
    house_system: HouseSystem = HouseSystem.KOCH
    ephe_path: str | None = None


def parse_zodiac(value: str | ZodiacMode) -> ZodiacMode:
    if isinstance(value, ZodiacMode):
        return value
    mode = _ZODIAC_ALIASES.get(value.strip().lower())
    if mode is None:
        raise ChartConfigurationError(f"Unknown zodiac mode: {value!r} (use tropical or sidereal)")
    return mode


def parse_house_system(value: str | HouseSystem) -> HouseSystem:
    """Accept a HouseSystem, its display name, an alias or its single-letter code."""

    if isinstance(value, HouseSystem):
        return value
    token = value.strip()
    lowered = token.lower()
    if lowered in _HOUSE_ALIASES:
        return _HOUSE_ALIASES[lowered]
    for system in HouseSystem:
        if lowered == system.value.lower() or lowered == system.name.lower():
            return system
    if len(token) == 1:
        for system, code in HOUSE_CODES.items():
            if code == token.upper():
                return system
    names = ", ".join(s.value for s in HouseSystem)
    raise ChartConfigurationError(f"Unknown house system: {value!r} (choose from {names})")


def load_config(environ: Mapping[str, str] | None = None) -> EngineConfig:
    """Build an EngineConfig from environment variables, falling back to defaults."""

    env = os.environ if environ is None else environ
    zodiac = env.get("NATAL_ZODIAC")
    house_system = env.get("NATAL_HOUSE_SYSTEM")
    return EngineConfig(
        zodiac=parse_zodiac(zodiac) if zodiac else ZodiacMode.TROPICAL,
        house_system=parse_house_system(house_system) if house_system else HouseSystem.KOCH,
        ephe_path=env.get("SWISSEPH_EPHE") or None,
    )
