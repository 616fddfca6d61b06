"""Reproject tropical provider longitudes into the chart's zodiac frame."""

from __future__ import annotations

from .angles import normalize
from .models import CalculationSettings


def project_longitude(raw_longitude: float, settings: CalculationSettings) -> float:
    """Subtract the ayanamsa in sidereal mode, then normalize to [0, 360).

    Only ever applied to ecliptic longitudes (bodies, cusps, angles).
    """

    if settings.is_sidereal:
        return normalize(raw_longitude - settings.ayanamsa)
    return normalize(raw_longitude)
