"""Chart assembly: time conversion, bodies, houses and the failure policy."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

from . import output
from .ayanamsa import ayanamsa, ayanamsa_advisory
from .bodies import resolve_bodies
from .config import EngineConfig, load_config
from .errors import ChartCalculationError, ChartConfigurationError, EphemerisError
from .houses import resolve_houses
from .models import BirthData, BodyPosition, CalculationSettings, NatalChart
from .provider import GREGORIAN_CALENDAR, EphemerisProvider
from .time_convert import to_utc

logger = logging.getLogger(__name__)


class ChartEngine:
    """
    Builds natal charts against one ephemeris provider.

    The engine owns the provider for its lifetime and closes it exactly once
    (``close`` or the context manager). Chart requests are serialized; the
    provider is not assumed to be thread-safe.

    The ayanamsa is computed for the current calendar year taken from ``clock``
    unless a caller passes ``ayanamsa_year`` explicitly.
    """

    def __init__(
        self,
        provider: EphemerisProvider | None,
        config: EngineConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.provider = provider
        self.config = config if config is not None else load_config()
        self.clock = clock or datetime.now
        self._lock = threading.Lock()

    def resolve_settings(self, ayanamsa_year: int | None = None) -> CalculationSettings:
        """Freeze the configuration into the settings used for one chart."""

        year = ayanamsa_year if ayanamsa_year is not None else self.clock().year
        return CalculationSettings(
            zodiac=self.config.zodiac,
            house_system=self.config.house_system,
            ayanamsa_year=year,
            ayanamsa=ayanamsa(year),
        )

    def compute_chart(self, birth: BirthData | None, ayanamsa_year: int | None = None) -> NatalChart:
        """
        Compute a full natal chart.

        Raises ChartConfigurationError when the provider is unavailable or no
        birth data was given, and ChartCalculationError when houses/angles fail.
        Individual body failures do not raise; those bodies are omitted and
        listed in ``chart.failures``.
        """

        self._check_preconditions(birth)
        with self._lock:
            try:
                return self._assemble(birth, self.resolve_settings(ayanamsa_year))
            except ChartCalculationError as exc:
                logger.error("Chart calculation failed: %s", exc)
                raise

    def describe_calculation_system(self, ayanamsa_year: int | None = None) -> str:
        return output.describe_calculation_system(self.resolve_settings(ayanamsa_year))

    def describe_body(self, position: BodyPosition) -> str:
        return output.describe_body(position)

    def close(self) -> None:
        """Release the provider. Safe to call more than once."""

        if self.provider is not None and not self.provider.closed:
            self.provider.close()

    def __enter__(self) -> ChartEngine:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _check_preconditions(self, birth: BirthData | None) -> None:
        if self.provider is None or self.provider.closed:
            message = "Ephemeris provider not initialized"
        elif birth is None:
            message = "Birth data is null"
        else:
            return
        logger.error("ChartEngine: %s", message)
        raise ChartConfigurationError(message)

    def _assemble(self, birth: BirthData, settings: CalculationSettings) -> NatalChart:
        advisories: list[str] = []
        year_advisory = ayanamsa_advisory(settings.ayanamsa_year)
        if year_advisory and settings.is_sidereal:
            advisories.append(year_advisory)

        moment = to_utc(birth)
        try:
            day_number = self.provider.day_number(
                moment.year, moment.month, moment.day, moment.fractional_hour, GREGORIAN_CALENDAR
            )
        except EphemerisError as exc:
            raise ChartCalculationError(f"day number conversion failed: {exc}") from exc
        if not self.provider.min_day_number <= day_number <= self.provider.max_day_number:
            range_advisory = (
                f"Date {birth.local_datetime.year} may be outside the ephemeris range; "
                "calculation may be less accurate"
            )
            logger.warning(range_advisory)
            advisories.append(range_advisory)

        bodies = resolve_bodies(self.provider, day_number, settings)
        houses = resolve_houses(self.provider, day_number, birth.latitude, birth.longitude, settings)

        logger.info(
            "Chart computed: JD %.5f, %d bodies, %d omitted, %s",
            day_number,
            len(bodies.positions),
            len(bodies.failures),
            settings.house_system.display_name,
        )
        return NatalChart(
            birth=birth,
            moment=moment,
            day_number=day_number,
            settings=settings,
            bodies=bodies.positions,
            houses=houses.cusps,
            ascendant=houses.ascendant,
            midheaven=houses.midheaven,
            failures=bodies.failures,
            advisories=tuple(advisories),
        )
