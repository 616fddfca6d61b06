"""Exception types raised by the chart engine."""

from __future__ import annotations


class NatalToolsError(Exception):
    """Base class for every error raised by natal_tools."""


class EphemerisError(NatalToolsError):
    """The ephemeris provider could not complete a call."""


class ChartConfigurationError(NatalToolsError):
    """The engine cannot run: provider missing/closed, no birth data or bad settings."""


class ChartCalculationError(NatalToolsError):
    """A fatal failure while assembling a chart. No chart is produced."""


class HouseResolutionError(ChartCalculationError):
    """House cusps or chart angles could not be resolved."""
