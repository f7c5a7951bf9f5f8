"""Text rendering of the dashboard - pure functions for testability."""
from datetime import datetime
from typing import List, Optional

from alerts import AlertLog
from weather_data import DailySummary, Reading, TrendPoint, format_number

SPARK_CHARS = "▁▂▃▄▅▆▇█"
RAIN_ICON = "☂"
SUN_ICON = "☀"


def get_condition_icon(condition: Optional[str]) -> str:
    """
    Get an icon for a condition label.

    Rain gets an umbrella; everything else, including a missing label,
    gets the sun.
    """
    if condition and condition.lower() == "rain":
        return RAIN_ICON
    return SUN_ICON


def format_time(moment: datetime) -> str:
    return moment.astimezone().strftime("%H:%M:%S")


def format_current(reading: Optional[Reading]) -> List[str]:
    if reading is None:
        return ["Current Weather: waiting for first reading..."]
    return [
        f"{get_condition_icon(reading.condition)} Current Weather - {reading.city} ({reading.condition})",
        f"  Temperature: {reading.temperature:.1f}°C",
        f"  Feels like: {reading.feels_like:.1f}°C",
        f"  Humidity: {reading.humidity:g}%",
        f"  Wind: {reading.wind_speed:g} m/s",
        f"  Updated {format_time(reading.timestamp)}",
    ]


def sparkline(values: List[float]) -> str:
    """
    Render values as a one-line sparkline.

    A flat series renders at the lowest level.
    """
    if not values:
        return ""
    low, high = min(values), max(values)
    span = high - low
    top = len(SPARK_CHARS) - 1
    chars = []
    for value in values:
        level = 0 if span == 0 else round((value - low) / span * top)
        chars.append(SPARK_CHARS[level])
    return "".join(chars)


def format_trend(points: List[TrendPoint]) -> List[str]:
    if not points:
        return ["Temperature Trend: no readings yet"]
    temps = [p.temperature for p in points]
    return [
        f"Temperature Trend ({len(points)} readings)",
        f"  {sparkline(temps)}",
        f"  min {min(temps):.1f}°C  max {max(temps):.1f}°C  "
        f"{format_time(points[0].time)} -> {format_time(points[-1].time)}",
    ]


def format_alerts(alerts: AlertLog, limit: int = 3) -> List[str]:
    lines = ["Recent Alerts"]
    recent = alerts.recent(limit)
    if not recent:
        lines.append("  none")
    for alert in recent:
        lines.append(f"  ! Temperature Alert: {alert.message} at {format_time(alert.timestamp)}")
    return lines


def format_weekly(summaries: List[DailySummary]) -> List[str]:
    lines = ["Weekly Weather Summaries"]
    if not summaries:
        lines.append("  no data")
        return lines
    lines.append(f"  {'Date':<10}  {'Avg':>7}  {'Max':>7}  {'Min':>7}  {'Readings':>8}  Weather")
    for s in summaries:
        lines.append(
            f"  {s.date.isoformat():<10}  {s.avg_temp:>6.1f}°  {s.max_temp:>6.1f}°  "
            f"{s.min_temp:>6.1f}°  {s.readings:>8}  "
            f"{get_condition_icon(s.dominant_condition)} {s.dominant_condition}"
        )
    return lines


def render_dashboard(controller) -> str:
    """
    Render the full dashboard for a polling controller.

    Args:
        controller: PollingController whose state is displayed

    Returns:
        Multi-line dashboard text
    """
    sections = [
        [f"Weather Monitoring System - {controller.city.name} "
         f"(alert above {format_number(controller.threshold)}°C)"],
        format_current(controller.current),
        format_trend(controller.trend_points()),
        format_alerts(controller.alerts),
        format_weekly(controller.weekly),
    ]
    return "\n\n".join("\n".join(section) for section in sections)
