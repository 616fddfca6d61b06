"""Command line entry point: compute and print a natal chart."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from .config import load_config, parse_house_system, parse_zodiac
from .engine import ChartEngine
from .errors import NatalToolsError
from .logging_config import LOG_LEVEL_ENV, level_from_name, setup_logging
from .models import BirthData
from . import output
from .provider import SwissEphemerisProvider
from .time_convert import utc_offset_for_zone

DEFAULT_OUTPUT_DIR = Path("outputs")


def parse_local_datetime(date_str: str, time_str: str) -> datetime:
    """Combine YYYY-MM-DD and HH:MM[:SS] into a naive local datetime."""

    for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M"):
        try:
            return datetime.strptime(f"{date_str.strip()} {time_str.strip()}", fmt)
        except ValueError:
            continue
    raise ValueError(f"invalid date/time: {date_str} {time_str}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="natal-chart",
        description="Compute a natal chart (bodies, houses, angles) with Swiss Ephemeris.",
    )
    parser.add_argument("date", help="local birth date, YYYY-MM-DD")
    parser.add_argument("time", help="local birth time, HH:MM[:SS]")
    parser.add_argument("--lat", type=float, required=True, help="latitude, north positive")
    parser.add_argument("--lon", type=float, required=True, help="longitude, east positive")
    zone = parser.add_mutually_exclusive_group(required=True)
    zone.add_argument("--offset", type=float, help="UTC offset in hours, e.g. 3 or -5.5")
    zone.add_argument("--tz", help="IANA time zone name, e.g. Europe/Moscow")
    parser.add_argument("--name", default="", help="chart label")
    parser.add_argument("--zodiac", help="tropical or sidereal (default: NATAL_ZODIAC or tropical)")
    parser.add_argument("--house-system", help="Koch, Placidus, Equal, ... or a one-letter code")
    parser.add_argument("--ayanamsa-year", type=int, help="year used for the ayanamsa (default: current year)")
    parser.add_argument("--ephe", help="Swiss Ephemeris data directory (default: SWISSEPH_EPHE)")
    parser.add_argument("--md", help="also write a Markdown report to this path")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default), ERROR; also NATAL_LOG_LEVEL")
    return parser


def resolve_output_path(path_str: str | None) -> Path | None:
    if not path_str:
        return None
    p = Path(path_str)
    if not p.is_absolute() and p.parent == Path("."):
        p = DEFAULT_OUTPUT_DIR / p
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Usage:
        natal-chart 1990-06-15 14:30 --offset 3 --lat 55.7558 --lon 37.6176
    """

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=level_from_name(args.log_level or os.environ.get(LOG_LEVEL_ENV)))

    try:
        local_dt = parse_local_datetime(args.date, args.time)
        offset = args.offset if args.offset is not None else utc_offset_for_zone(local_dt, args.tz)
        birth = BirthData(
            local_datetime=local_dt,
            latitude=args.lat,
            longitude=args.lon,
            utc_offset_hours=offset,
            name=args.name,
        )
        config = load_config()
        overrides = {}
        if args.zodiac:
            overrides["zodiac"] = parse_zodiac(args.zodiac)
        if args.house_system:
            overrides["house_system"] = parse_house_system(args.house_system)
        if args.ephe:
            overrides["ephe_path"] = str(Path(args.ephe).expanduser())
        config = replace(config, **overrides)
    except (ValueError, NatalToolsError) as exc:
        parser.error(str(exc))

    with ChartEngine(SwissEphemerisProvider(config.ephe_path), config=config) as engine:
        try:
            chart = engine.compute_chart(birth, ayanamsa_year=args.ayanamsa_year)
        except NatalToolsError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    output.print_rich_chart(chart)

    md_path = resolve_output_path(args.md)
    if md_path:
        md_path.write_text(output.build_markdown_report(chart), encoding="utf-8")
        print(f"\nMarkdown report written to {md_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
