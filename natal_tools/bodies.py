"""Resolve body positions from the provider and project them into the chart frame."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .angles import degree_in_sign, normalize, zodiac_sign
from .errors import EphemerisError
from .models import Body, BodyFailure, BodyPosition, CalculationSettings, RawBodyPosition
from .projection import project_longitude
from .provider import EphemerisProvider

logger = logging.getLogger(__name__)

PRIMARY_BODIES: tuple[Body, ...] = (
    Body.SUN,
    Body.MOON,
    Body.MERCURY,
    Body.VENUS,
    Body.MARS,
    Body.JUPITER,
    Body.SATURN,
    Body.URANUS,
    Body.NEPTUNE,
    Body.PLUTO,
)


def derive_south_node(north: BodyPosition) -> BodyPosition:
    """
    Mirror the North Node through the ecliptic centre.

    Longitude is opposite, latitude and both angular speeds are negated;
    distance and distance speed carry over. The retrograde flag is copied from
    the North Node rather than recomputed from the negated speed.
    """

    longitude = normalize(north.longitude + 180.0)
    return BodyPosition(
        body=Body.SOUTH_NODE,
        longitude=longitude,
        latitude=-north.latitude,
        distance=north.distance,
        longitude_speed=-north.longitude_speed,
        latitude_speed=-north.latitude_speed,
        distance_speed=north.distance_speed,
        zodiac_sign=zodiac_sign(longitude),
        degree_in_sign=degree_in_sign(longitude),
        retrograde=north.retrograde,
    )


@dataclass(frozen=True)
class ResolutionStep:
    """One entry of the resolution plan.

    Steps without ``derive_from`` are fetched from the provider. Derived steps
    transform an earlier, already resolved body and never touch the provider.
    """

    body: Body
    derive_from: Body | None = None
    transform: Callable[[BodyPosition], BodyPosition] | None = None

    @property
    def is_derived(self) -> bool:
        return self.derive_from is not None


RESOLUTION_PLAN: tuple[ResolutionStep, ...] = tuple(ResolutionStep(b) for b in PRIMARY_BODIES) + (
    ResolutionStep(Body.NORTH_NODE),
    ResolutionStep(Body.SOUTH_NODE, derive_from=Body.NORTH_NODE, transform=derive_south_node),
    ResolutionStep(Body.CHIRON),
    ResolutionStep(Body.LILITH),
    ResolutionStep(Body.PROSERPINE),
)


@dataclass(frozen=True)
class BodyResolution:
    """Bodies that resolved (in plan order) and the ones that were left out."""

    positions: tuple[BodyPosition, ...]
    failures: tuple[BodyFailure, ...]


def build_position(body: Body, raw: RawBodyPosition, settings: CalculationSettings) -> BodyPosition:
    """Project a raw provider position; only the longitude changes frame."""

    longitude = project_longitude(raw.longitude, settings)
    return BodyPosition(
        body=body,
        longitude=longitude,
        latitude=raw.latitude,
        distance=raw.distance,
        longitude_speed=raw.longitude_speed,
        latitude_speed=raw.latitude_speed,
        distance_speed=raw.distance_speed,
        zodiac_sign=zodiac_sign(longitude),
        degree_in_sign=degree_in_sign(longitude),
        retrograde=raw.longitude_speed < 0,
    )


def resolve_bodies(
    provider: EphemerisProvider,
    day_number: float,
    settings: CalculationSettings,
    plan: tuple[ResolutionStep, ...] = RESOLUTION_PLAN,
) -> BodyResolution:
    """
    Walk the resolution plan once.

    A provider error for one body is logged and recorded as a BodyFailure; the
    body is omitted and the rest of the plan continues. A derived body whose
    source failed is omitted as well.
    """

    resolved: dict[Body, BodyPosition] = {}
    positions: list[BodyPosition] = []
    failures: list[BodyFailure] = []

    for step in plan:
        if step.is_derived:
            source = resolved.get(step.derive_from)
            if source is None:
                reason = f"depends on {step.derive_from.value}, which was not resolved"
                logger.warning("Skipping %s: %s", step.body.value, reason)
                failures.append(BodyFailure(step.body, reason))
                continue
            position = step.transform(source)
        else:
            try:
                raw = provider.body_position(day_number, step.body)
            except EphemerisError as exc:
                logger.warning("Error calculating %s: %s", step.body.value, exc)
                failures.append(BodyFailure(step.body, str(exc)))
                continue
            position = build_position(step.body, raw, settings)

        resolved[step.body] = position
        positions.append(position)

    return BodyResolution(positions=tuple(positions), failures=tuple(failures))
