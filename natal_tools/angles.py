"""Angle helpers shared by every projection step."""

from __future__ import annotations

import math

from .models import ZodiacSign

SIGNS = [
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
]


def normalize(angle: float) -> float:
    """Normalize to [0, 360) for any finite angle, however large."""

    if not math.isfinite(angle):
        raise ValueError(f"cannot normalize non-finite angle: {angle}")
    result = angle % 360.0
    # Tiny negative inputs round up to exactly 360.0.
    if result >= 360.0:
        result -= 360.0
    return result


def sign_index(longitude: float) -> int:
    return int(normalize(longitude) // 30) % 12


def zodiac_sign(longitude: float) -> ZodiacSign:
    """Return the sign holding ``longitude`` (normalized first)."""

    return ZodiacSign(sign_index(longitude))


def degree_in_sign(longitude: float) -> float:
    """Degrees past the start of the sign, in [0, 30)."""

    return normalize(longitude) % 30.0
