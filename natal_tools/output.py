"""Output helpers for presenting computed chart data."""

from __future__ import annotations

from .angles import SIGNS
from .models import BodyPosition, CalculationSettings, NatalChart, ZodiacSign

BODY_SYMBOLS = {
    "Sun": "☉",
    "Moon": "☽",
    "Mercury": "☿",
    "Venus": "♀",
    "Mars": "♂",
    "Jupiter": "♃",
    "Saturn": "♄",
    "Uranus": "♅",
    "Neptune": "♆",
    "Pluto": "♇",
    "North Node": "☊",
    "South Node": "☋",
    "Chiron": "⚷",
    "Lilith": "⚸",
}

SIGN_SYMBOLS = dict(zip(SIGNS, "♈♉♊♋♌♍♎♏♐♑♒♓"))


def describe_calculation_system(settings: CalculationSettings) -> str:
    """Zodiac (with ayanamsa when sidereal) over the house system name."""

    house_name = settings.house_system.display_name
    if settings.is_sidereal:
        return f"{settings.zodiac.value} {settings.ayanamsa:.0f}°\n{house_name}"
    return f"{settings.zodiac.value}\n{house_name}"


def describe_body(position: BodyPosition) -> str:
    """One-line label, e.g. ``Sun: 84.3° - Gemini 24.3° (R)``."""

    retro = " (R)" if position.retrograde else ""
    return (
        f"{position.body.value}: {position.longitude:.1f}° - "
        f"{position.zodiac_sign.label} {position.degree_in_sign:.1f}°{retro}"
    )


def _format_coord(value: float, positive_label: str, negative_label: str, precision: int = 4) -> str:
    """Return a signed coordinate with cardinal direction."""

    hemi = positive_label if value >= 0 else negative_label
    return f"{abs(value):.{precision}f}° {hemi}"


def _tz_offset_str(offset_hours: float) -> str:
    """Format timezone offset hours as UTC±HH:MM."""

    sign = "+" if offset_hours >= 0 else "-"
    hours = int(abs(offset_hours))
    minutes = int(round((abs(offset_hours) - hours) * 60))
    return f"UTC{sign}{hours:02d}:{minutes:02d}"


def format_dms(longitude: float) -> str:
    """Degrees within sign as D°MM', never past 29°59'."""

    total_minutes = min(int(round(longitude * 60)), 30 * 60 - 1)
    whole, minutes = divmod(total_minutes, 60)
    return f"{whole}°{minutes:02d}'"


def _sign_label(sign: ZodiacSign, use_sign_symbols: bool) -> str:
    name = SIGNS[sign]
    if use_sign_symbols:
        return f"{SIGN_SYMBOLS[name]} {name}"
    return name


def chart_header_lines(chart: NatalChart) -> list[str]:
    """Human-readable chart basics for the top of a report."""

    birth = chart.birth
    system = describe_calculation_system(chart.settings).replace("\n", " | ")
    lines = []
    if birth.name:
        lines.append(f"Chart: {birth.name}")
    lines.extend(
        [
            f"Local: {birth.local_datetime.strftime('%Y-%m-%d %H:%M:%S')} ({_tz_offset_str(birth.utc_offset_hours)})",
            f"UTC:   {chart.moment.datetime_utc.strftime('%Y-%m-%d %H:%M:%S')} (UTC)",
            f"Location: {_format_coord(birth.latitude, 'N', 'S')}, {_format_coord(birth.longitude, 'E', 'W')}",
            f"Julian day: {chart.day_number:.6f}",
            f"System: {system}",
        ]
    )
    return lines


def build_markdown_report(chart: NatalChart) -> str:
    """Markdown version of the chart: header, bodies, houses, angles, notes."""

    out: list[str] = ["# Natal chart", ""]
    out.extend(f"- {line}" for line in chart_header_lines(chart))
    out.append("")

    out.extend(["## Bodies", "", "| Body | Longitude | Sign | Degree | Speed | R |", "|---|---:|---|---:|---:|:-:|"])
    for p in chart.bodies:
        out.append(
            f"| {p.body.value} | {p.longitude:.4f} | {p.zodiac_sign.label} | {format_dms(p.degree_in_sign)} "
            f"| {p.longitude_speed:+.4f} | {'R' if p.retrograde else ''} |"
        )
    out.append("")

    out.extend([f"## Houses ({chart.settings.house_system.display_name})", "", "| House | Cusp | Sign |", "|---:|---:|---|"])
    for cusp in chart.houses:
        out.append(f"| {cusp.number} | {cusp.longitude:.4f} | {cusp.zodiac_sign.label} |")
    out.append("")

    out.extend(["## Angles", ""])
    for angle in (chart.ascendant, chart.midheaven):
        out.append(f"- {angle.name}: {angle.longitude:.4f} ({angle.zodiac_sign.label})")

    if chart.failures or chart.advisories:
        out.extend(["", "## Notes", ""])
        out.extend(f"- {f.body.value} omitted: {f.reason}" for f in chart.failures)
        out.extend(f"- {advisory}" for advisory in chart.advisories)

    out.append("")
    return "\n".join(out)


def print_rich_chart(chart: NatalChart, console=None, use_sign_symbols: bool = True) -> None:
    """Render the chart as rich tables."""

    from rich import box
    from rich.console import Console
    from rich.table import Table

    console = console or Console()
    for line in chart_header_lines(chart):
        console.print(line)
    console.print()

    body_table = Table(title="Bodies", box=box.ROUNDED, expand=False, padding=(0, 1))
    body_table.add_column("Body", no_wrap=True)
    body_table.add_column("Longitude", justify="right", style="cyan", no_wrap=True)
    body_table.add_column("Sign", style="magenta", no_wrap=True)
    body_table.add_column("Deg", justify="right", no_wrap=True)
    body_table.add_column("Lat", justify="right", no_wrap=True)
    body_table.add_column("Speed", justify="right", no_wrap=True)
    body_table.add_column("R", justify="center", no_wrap=True)
    for p in chart.bodies:
        symbol = BODY_SYMBOLS.get(p.body.value, "")
        body_table.add_row(
            f"{symbol} {p.body.value}".strip(),
            f"{p.longitude:.4f}",
            _sign_label(p.zodiac_sign, use_sign_symbols),
            format_dms(p.degree_in_sign),
            f"{p.latitude:+.4f}",
            f"{p.longitude_speed:+.4f}",
            "[bold red]R[/]" if p.retrograde else "",
        )
    console.print(body_table)

    house_table = Table(
        title=f"Houses ({chart.settings.house_system.display_name})",
        box=box.MINIMAL_DOUBLE_HEAD,
        expand=False,
        padding=(0, 1),
    )
    house_table.add_column("House", justify="center", no_wrap=True)
    house_table.add_column("Cusp", justify="right", style="cyan", no_wrap=True)
    house_table.add_column("Sign", style="magenta", no_wrap=True)
    for cusp in chart.houses:
        house_table.add_row(f"{cusp.number:02d}", f"{cusp.longitude:.4f}", _sign_label(cusp.zodiac_sign, use_sign_symbols))
    console.print(house_table)

    angle_table = Table(title="Angles", box=box.MINIMAL, expand=False, padding=(0, 1))
    angle_table.add_column("Point", justify="center", no_wrap=True)
    angle_table.add_column("Position", style="cyan", no_wrap=True)
    for angle in (chart.ascendant, chart.midheaven):
        angle_table.add_row(
            angle.name,
            f"{_sign_label(angle.zodiac_sign, use_sign_symbols)} {format_dms(angle.longitude % 30.0)}",
        )
    console.print(angle_table)

    for failure in chart.failures:
        console.print(f"[yellow]{failure.body.value} omitted:[/] {failure.reason}")
    for advisory in chart.advisories:
        console.print(f"[dim]{advisory}[/]")
