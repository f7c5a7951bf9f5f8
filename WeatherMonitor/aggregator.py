"""Daily and weekly summaries computed from stored reading logs."""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Iterable, List, Optional, Union

from storage import ReadingStore, StorageError
from weather_data import DailySummary, Reading, round1

WEEK_DAYS = 7


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def dominant_condition(conditions: Iterable[str]) -> str:
    """
    Return the most frequent condition label.

    Ties go to the label that was seen first.

    Raises:
        ValueError: If no conditions are given
    """
    counts = {}
    for condition in conditions:
        counts[condition] = counts.get(condition, 0) + 1
    if not counts:
        raise ValueError("no conditions to tally")
    # max() keeps the first maximal key, and dicts keep insertion order
    return max(counts, key=counts.get)


def summarize_readings(day: date, readings: List[Reading]) -> Optional[DailySummary]:
    """Summarize one day's readings, or return None when there are none."""
    if not readings:
        return None

    temperatures = [r.temperature for r in readings]
    return DailySummary(
        date=day,
        avg_temp=round1(sum(temperatures) / len(temperatures)),
        max_temp=round1(max(temperatures)),
        min_temp=round1(min(temperatures)),
        dominant_condition=dominant_condition(r.condition for r in readings),
        readings=len(readings),
    )


class Aggregator:
    """Computes summaries on demand from the full reading logs."""

    def __init__(self, reading_store: ReadingStore, today: Callable[[], date] = utc_today):
        """
        Args:
            reading_store: Source of reading logs
            today: Returns the current calendar date (UTC by default)
        """
        self.reading_store = reading_store
        self.today = today

    def summarize_day(self, city: str, day: Union[date, str]) -> Optional[DailySummary]:
        """
        Summarize all readings for a city on one day.

        Args:
            city: City name
            day: Calendar date, or an ISO ``YYYY-MM-DD`` string

        Returns:
            DailySummary, or None if no readings exist for that day
        """
        if isinstance(day, str):
            day = date.fromisoformat(day)
        return summarize_readings(day, self.reading_store.read_log(city, day))

    def summarize_week(self, city: str) -> List[DailySummary]:
        """Summaries for today and the six days before it, most recent first.

        Days without readings are left out, as are days whose log cannot
        be read.
        """
        today = self.today()
        summaries = []
        for offset in range(WEEK_DAYS):
            day = today - timedelta(days=offset)
            try:
                summary = self.summarize_day(city, day)
            except StorageError as err:
                logging.error(f"Skipping {city} {day.isoformat()} in weekly summary: {err}")
                continue
            if summary is not None:
                summaries.append(summary)
        return summaries
