"""PNG line chart of the temperature trend, drawn with Pillow."""
import logging
from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont

from weather_data import TrendPoint

BACKGROUND = (255, 255, 255)
GRID_COLOR = (220, 220, 220)
AXIS_COLOR = (120, 120, 120)
LINE_COLOR = (136, 132, 216)
MARGIN = 32
GRID_LINES = 4


def get_temperature_color(temp_c: float) -> Tuple[int, int, int]:
    """
    Get RGB color for temperature using a simple gradient.

    Cold (< 0°C) = blue
    Cool (0-15°C) = cyan
    Mild (15-25°C) = green/yellow
    Warm (25-35°C) = yellow/orange
    Hot (> 35°C) = red
    """
    if temp_c < 0:
        return (0, 0, 255)
    elif temp_c < 15:
        ratio = temp_c / 15.0
        return (0, int(255 * ratio), 255)
    elif temp_c < 25:
        ratio = (temp_c - 15) / 10.0
        return (int(255 * ratio), 255, int(255 * (1 - ratio)))
    elif temp_c < 35:
        ratio = (temp_c - 25) / 10.0
        return (255, int(255 * (1 - ratio * 0.5)), 0)
    else:
        ratio = min((temp_c - 35) / 10.0, 1.0)
        return (255, int(255 * (1 - ratio)), 0)


def chart_coordinates(
    points: List[TrendPoint], width: int, height: int
) -> List[Tuple[int, int]]:
    """
    Map trend points to pixel coordinates inside the chart margins.

    Points are spaced evenly on the x axis in buffer order. The y axis spans
    the min..max temperature, padded by one degree so a flat series sits in
    the middle.
    """
    if not points:
        return []

    temps = [p.temperature for p in points]
    low, high = min(temps) - 1.0, max(temps) + 1.0
    plot_w = width - 2 * MARGIN
    plot_h = height - 2 * MARGIN
    if len(points) == 1:
        return [(MARGIN + plot_w // 2, MARGIN + plot_h // 2)]
    step = plot_w / (len(points) - 1)

    coords = []
    for i, temp in enumerate(temps):
        x = MARGIN + int(round(i * step))
        y = MARGIN + int(round((high - temp) / (high - low) * plot_h))
        coords.append((x, y))
    return coords


def render_trend_chart(points: List[TrendPoint], width: int = 480, height: int = 240) -> Image.Image:
    """
    Draw the trend as a line chart.

    Args:
        points: Trend points, oldest first
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        The rendered PIL image (blank grid if there are no points)
    """
    if width <= 2 * MARGIN or height <= 2 * MARGIN:
        raise ValueError(f"chart must be larger than {2 * MARGIN}px in each direction")

    image = Image.new("RGB", (width, height), BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    for i in range(GRID_LINES + 1):
        y = MARGIN + (height - 2 * MARGIN) * i // GRID_LINES
        draw.line([(MARGIN, y), (width - MARGIN, y)], fill=GRID_COLOR)
    draw.line([(MARGIN, MARGIN), (MARGIN, height - MARGIN)], fill=AXIS_COLOR)
    draw.line([(MARGIN, height - MARGIN), (width - MARGIN, height - MARGIN)], fill=AXIS_COLOR)
    draw.text((MARGIN, 8), "Temperature (C)", fill=AXIS_COLOR, font=font)

    coords = chart_coordinates(points, width, height)
    if len(coords) > 1:
        draw.line(coords, fill=LINE_COLOR, width=2)
    for point, (x, y) in zip(points, coords):
        color = get_temperature_color(point.temperature)
        draw.ellipse([(x - 3, y - 3), (x + 3, y + 3)], fill=color)

    if points:
        temps = [p.temperature for p in points]
        draw.text((4, MARGIN - 6), f"{max(temps):.1f}", fill=AXIS_COLOR, font=font)
        draw.text((4, height - MARGIN - 6), f"{min(temps):.1f}", fill=AXIS_COLOR, font=font)

    return image


def save_trend_chart(points: List[TrendPoint], path: str, width: int = 480, height: int = 240) -> None:
    """Render the trend and save it as PNG."""
    render_trend_chart(points, width, height).save(path, format="PNG")
    logging.debug(f"Trend chart written to {path} ({len(points)} points)")
