"""Linear precession model for the tropical/sidereal offset."""

from __future__ import annotations

import logging

from .angles import normalize

logger = logging.getLogger(__name__)

# Zero point of the model (285 CE) and the fixed precession rate (50.29"/year).
AYANAMSA_BASE_YEAR = 285.0
PRECESSION_PER_YEAR = 50.29 / 3600.0

ANCIENT_YEAR_LIMIT = -2000
FUTURE_YEAR_LIMIT = 3000


def ayanamsa(year: int) -> float:
    """
    Return the ayanamsa in degrees for a calendar year.

    Years outside [-2000, 3000] still get a value; an advisory is logged because
    the linear model drifts from real precession that far from the epoch.
    """

    advisory = ayanamsa_advisory(year)
    if advisory:
        logger.warning(advisory)
    return normalize((year - AYANAMSA_BASE_YEAR) * PRECESSION_PER_YEAR)


def ayanamsa_advisory(year: int) -> str | None:
    """Advisory text for extreme years, or None when the model is trusted."""

    if year < ANCIENT_YEAR_LIMIT:
        return f"Ancient year {year}: ayanamsa precision may vary for extreme dates"
    if year > FUTURE_YEAR_LIMIT:
        return f"Future year {year}: ayanamsa is extrapolated"
    return None
