"""Tests for the trend chart renderer."""
import pytest
from datetime import datetime, timedelta, timezone
from PIL import Image
from trend_chart import (
    BACKGROUND,
    MARGIN,
    chart_coordinates,
    get_temperature_color,
    render_trend_chart,
    save_trend_chart,
)
from weather_data import TrendPoint

START = datetime(2024, 5, 1, 6, 0, tzinfo=timezone.utc)


def make_points(temps):
    return [TrendPoint(time=START + timedelta(minutes=5 * i), temperature=t) for i, t in enumerate(temps)]


def test_temperature_color_cold():
    assert get_temperature_color(-10.0) == (0, 0, 255)


def test_temperature_color_hot():
    color = get_temperature_color(50.0)
    assert color == (255, 0, 0)


def test_temperature_color_warm():
    r, g, b = get_temperature_color(30.0)
    assert r == 255
    assert b == 0


def test_chart_coordinates_span_plot_area():
    coords = chart_coordinates(make_points([20.0, 25.0, 30.0]), width=200, height=100)
    xs = [x for x, _ in coords]
    ys = [y for _, y in coords]
    assert xs[0] == MARGIN
    assert xs[-1] == 200 - MARGIN
    # hotter is higher up
    assert ys[0] > ys[1] > ys[2]


def test_chart_coordinates_single_point_centered():
    coords = chart_coordinates(make_points([22.0]), width=200, height=100)
    assert coords == [(100, 50)]


def test_chart_coordinates_empty():
    assert chart_coordinates([], width=200, height=100) == []


def test_render_trend_chart_size():
    image = render_trend_chart(make_points([30.0, 31.0, 29.5]), width=320, height=160)
    assert isinstance(image, Image.Image)
    assert image.size == (320, 160)


def test_render_trend_chart_draws_points():
    points = make_points([10.0, 40.0])
    image = render_trend_chart(points, width=320, height=160)
    for (x, y) in chart_coordinates(points, 320, 160):
        assert image.getpixel((x, y)) != BACKGROUND


def test_render_empty_chart():
    image = render_trend_chart([])
    assert image.size == (480, 240)


def test_render_too_small():
    with pytest.raises(ValueError):
        render_trend_chart([], width=50, height=50)


def test_save_trend_chart(tmp_path):
    path = tmp_path / "trend.png"
    save_trend_chart(make_points([25.0, 26.0]), str(path))
    with Image.open(path) as image:
        assert image.format == "PNG"
