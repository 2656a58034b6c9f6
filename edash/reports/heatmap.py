"""
Heatmap report for EDASH.

Generates the --heatmap, --insights, --cell and --legend views.
"""

from typing import Dict, Any, Optional

from edash.heatmap.aggregation import LEGEND_STOPS, PEAK_HOURS
from edash.heatmap.engine import HeatmapEngine
from edash.heatmap.overlay import format_tooltip
from edash.models.entities import DAYS, HOURS, OverlayState
from edash.output.formatter import (
    format_energy, format_percentage, format_number,
    bold, colorize, dim, Colors, shade, create_bar, format_table
)


def generate_heatmap(
    engine: HeatmapEngine,
    config: Dict[str, Any],
    color_enabled: bool = True
) -> str:
    """
    Generate the weekly consumption heatmap.

    Args:
        engine: Heatmap engine
        config: Configuration dict
        color_enabled: Whether to apply colors
    """
    unit = config["display"]["unit"]
    lines = []
    lines.append(bold("ENERGY CONSUMPTION HEATMAP", color_enabled))
    lines.append(dim("Weekly consumption patterns by hour and day", color_enabled))
    lines.append("")

    # Hour labels every 4 hours, two columns per cell
    header = "".join(f"{hour:02d}" if hour % 4 == 0 else "  " for hour in HOURS)
    lines.append(f"{'':5}{header}")

    for day in DAYS:
        row = []
        for hour in HOURS:
            cell = engine.lookup(day, hour)
            block = shade(cell.intensity if cell else None) * 2
            row.append(colorize(block, Colors.ORANGE, color_enabled) if cell else block)
        lines.append(f"{day.value:5}{''.join(row)}")

    lines.append("")
    lines.append(_legend_line(color_enabled))
    lines.append("")

    insights = engine.insights
    lines.append(f"Weekday Avg: {format_energy(insights.weekday_average, unit)}   "
                 f"Peak Hours: {format_energy(insights.peak_hours_average, unit)}")
    lines.append(f"{bold('Usage Pattern', color_enabled)}: {engine.pattern}")

    return '\n'.join(lines)


def generate_insights(
    engine: HeatmapEngine,
    config: Dict[str, Any],
    color_enabled: bool = True
) -> str:
    """Generate the insight averages table."""
    unit = config["display"]["unit"]
    insights = engine.insights
    start, end = PEAK_HOURS
    top = max(insights.weekday_average, insights.weekend_average, insights.peak_hours_average)

    rows = [
        ["Weekday average", "120", format_energy(insights.weekday_average, unit, 1),
         create_bar(insights.weekday_average, top)],
        ["Weekend average", "48", format_energy(insights.weekend_average, unit, 1),
         create_bar(insights.weekend_average, top)],
        [f"Peak hours ({start}-{end}h)", "63", format_energy(insights.peak_hours_average, unit, 1),
         create_bar(insights.peak_hours_average, top)],
    ]

    delta = insights.weekend_delta_pct
    color = Colors.GREEN if delta < 0 else Colors.RED

    lines = []
    lines.append(bold("CONSUMPTION INSIGHTS", color_enabled))
    lines.append("")
    lines.append(format_table(["Metric", "Cells", "Average", ""], rows,
                              ['l', 'r', 'r', 'l'], color_enabled))
    lines.append("")
    lines.append(f"Weekend vs weekday: "
                 f"{colorize(format_percentage(delta, 1, include_sign=True), color, color_enabled)}"
                 f" ({insights.weekend_direction})")
    lines.append(f"{bold('Usage Pattern', color_enabled)}: {engine.pattern}")

    return '\n'.join(lines)


def generate_cell(
    engine: HeatmapEngine,
    day: str,
    hour: int,
    config: Dict[str, Any],
    color_enabled: bool = True
) -> Optional[str]:
    """Describe one cell as its tooltip would, or None when absent."""
    cell = engine.lookup(day, hour)
    if cell is None:
        return None

    unit = config["display"]["unit"]
    tooltip = format_tooltip(OverlayState(day=cell.day, hour=cell.hour, value=cell.value), unit)
    lines = [bold(tooltip.splitlines()[0], color_enabled)]
    lines.extend(tooltip.splitlines()[1:])
    lines.append(dim(f"Intensity: {format_number(cell.intensity, 3)}", color_enabled))
    return '\n'.join(lines)


def generate_legend(color_enabled: bool = True) -> str:
    """Generate the intensity legend."""
    return _legend_line(color_enabled)


def _legend_line(color_enabled: bool) -> str:
    stops = "".join(colorize(shade(stop) * 2, Colors.ORANGE, color_enabled) for stop in LEGEND_STOPS)
    return f"Low {stops} High"
