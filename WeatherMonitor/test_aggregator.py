"""Tests for daily and weekly summaries."""
import pytest
from datetime import date, datetime, time, timedelta, timezone
from aggregator import Aggregator, dominant_condition, summarize_readings
from storage import MemoryStore, ReadingStore, StorageError, reading_key
from weather_data import Reading

TODAY = date(2024, 5, 10)


def make_reading(temperature, condition="Clear", day=TODAY, minute=0):
    return Reading(
        city="Delhi",
        temperature=temperature,
        feels_like=temperature,
        humidity=50.0,
        wind_speed=3.0,
        condition=condition,
        timestamp=datetime.combine(day, time(12, minute), tzinfo=timezone.utc),
    )


@pytest.fixture
def reading_store():
    return ReadingStore(MemoryStore())


@pytest.fixture
def aggregator(reading_store):
    return Aggregator(reading_store, today=lambda: TODAY)


def test_summarize_day_example(reading_store, aggregator):
    """Test the three-reading example: 30, 34, 32."""
    for i, temp in enumerate([30.0, 34.0, 32.0]):
        reading_store.append("Delhi", make_reading(temp, minute=i))

    summary = aggregator.summarize_day("Delhi", TODAY)

    assert summary.date == TODAY
    assert summary.avg_temp == 32.0
    assert summary.max_temp == 34.0
    assert summary.min_temp == 30.0
    assert f"{summary.avg_temp:.1f}" == "32.0"
    assert summary.readings == 3


def test_summarize_day_accepts_iso_string(reading_store, aggregator):
    reading_store.append("Delhi", make_reading(25.0))
    summary = aggregator.summarize_day("Delhi", "2024-05-10")
    assert summary is not None
    assert summary.date == TODAY


def test_summarize_day_empty_log(aggregator):
    """Test that a day without readings has no summary."""
    assert aggregator.summarize_day("Delhi", TODAY) is None


def test_summarize_day_rounds_average(reading_store, aggregator):
    for i, temp in enumerate([30.1, 30.2, 30.2]):
        reading_store.append("Delhi", make_reading(temp, minute=i))
    summary = aggregator.summarize_day("Delhi", TODAY)
    assert summary.avg_temp == 30.2


@pytest.mark.parametrize("temps", [
    [12.3],
    [-4.0, 0.0, 4.4],
    [31.15, 31.25, 31.35, 40.0],
    [22.2, 22.2, 22.2],
])
def test_average_within_bounds(temps):
    readings = [make_reading(t, minute=i) for i, t in enumerate(temps)]
    summary = summarize_readings(TODAY, readings)
    assert summary.min_temp <= summary.avg_temp <= summary.max_temp
    assert summary.readings == len(temps)


def test_dominant_condition_tie_goes_to_first_seen():
    """Test the tie-break regression case."""
    assert dominant_condition(["Rain", "Clear", "Rain", "Clear"]) == "Rain"
    assert dominant_condition(["Clear", "Rain", "Rain", "Clear"]) == "Clear"


def test_dominant_condition_highest_count_wins():
    assert dominant_condition(["Clear", "Rain", "Rain", "Haze"]) == "Rain"


def test_dominant_condition_empty():
    with pytest.raises(ValueError):
        dominant_condition([])


def test_summary_dominant_condition(reading_store, aggregator):
    for i, condition in enumerate(["Rain", "Clear", "Rain", "Clear"]):
        reading_store.append("Delhi", make_reading(28.0, condition, minute=i))
    assert aggregator.summarize_day("Delhi", TODAY).dominant_condition == "Rain"


def test_summarize_week_most_recent_first_skips_empty_days(reading_store, aggregator):
    reading_store.append("Delhi", make_reading(30.0, day=TODAY))
    reading_store.append("Delhi", make_reading(28.0, day=TODAY - timedelta(days=2)))
    reading_store.append("Delhi", make_reading(26.0, day=TODAY - timedelta(days=6)))

    week = aggregator.summarize_week("Delhi")

    assert [s.date for s in week] == [
        TODAY,
        TODAY - timedelta(days=2),
        TODAY - timedelta(days=6),
    ]


def test_summarize_week_window(reading_store, aggregator):
    """Test that the week never exceeds 7 days and ignores older or future logs."""
    for offset in range(-1, 10):
        reading_store.append("Delhi", make_reading(20.0 + offset, day=TODAY - timedelta(days=offset)))

    week = aggregator.summarize_week("Delhi")

    assert len(week) == 7
    oldest = TODAY - timedelta(days=6)
    assert all(oldest <= s.date <= TODAY for s in week)


def test_summarize_week_no_data(aggregator):
    assert aggregator.summarize_week("Delhi") == []


def test_summarize_week_other_city_not_included(reading_store, aggregator):
    reading_store.append("Delhi", make_reading(30.0))
    assert aggregator.summarize_week("Mumbai") == []


def test_average_rounds_halves_up():
    """Test that an exact .x5 mean rounds away from zero: 32.2, 32.3 -> 32.3."""
    readings = [make_reading(32.2), make_reading(32.3, minute=1)]
    summary = summarize_readings(TODAY, readings)
    assert summary.avg_temp == 32.3
    assert f"{summary.avg_temp:.1f}" == "32.3"


def test_summarize_week_skips_unreadable_day(reading_store, aggregator):
    """Test that a corrupt log for one day does not hide the rest of the week."""
    reading_store.append("Delhi", make_reading(30.0))
    reading_store.append("Delhi", make_reading(27.0, day=TODAY - timedelta(days=4)))
    reading_store.store.set(reading_key("Delhi", TODAY - timedelta(days=2)), "garbage")

    week = aggregator.summarize_week("Delhi")

    assert [s.date for s in week] == [TODAY, TODAY - timedelta(days=4)]


def test_summarize_day_unreadable_log_raises(reading_store, aggregator):
    reading_store.store.set(reading_key("Delhi", TODAY), "garbage")
    with pytest.raises(StorageError):
        aggregator.summarize_day("Delhi", TODAY)
