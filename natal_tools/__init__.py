"""Natal chart assembly on top of Swiss Ephemeris: bodies, houses, angles, tropical or sidereal."""

from .angles import degree_in_sign, normalize, zodiac_sign
from .ayanamsa import ayanamsa
from .config import EngineConfig, load_config
from .engine import ChartEngine
from .errors import (
    ChartCalculationError,
    ChartConfigurationError,
    EphemerisError,
    HouseResolutionError,
    NatalToolsError,
)
from .models import (
    BirthData,
    Body,
    BodyPosition,
    CalculationSettings,
    ChartAngle,
    HouseCusp,
    HouseSystem,
    NatalChart,
    ZodiacMode,
    ZodiacSign,
)
from .provider import SwissEphemerisProvider
from .time_convert import to_utc

__all__ = [
    "BirthData",
    "Body",
    "BodyPosition",
    "CalculationSettings",
    "ChartAngle",
    "ChartEngine",
    "HouseCusp",
    "HouseSystem",
    "NatalChart",
    "ZodiacMode",
    "ZodiacSign",
    "EngineConfig",
    "SwissEphemerisProvider",
    "NatalToolsError",
    "EphemerisError",
    "ChartConfigurationError",
    "ChartCalculationError",
    "HouseResolutionError",
    "ayanamsa",
    "degree_in_sign",
    "load_config",
    "normalize",
    "to_utc",
    "zodiac_sign",
]
