"""Temperature threshold alerts."""
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Iterator, List, Optional

from weather_data import Alert, Reading, format_number

DEFAULT_ALERT_CAPACITY = 100


def evaluate(reading: Reading, threshold: float, now: Optional[datetime] = None) -> Optional[Alert]:
    """
    Check a reading against the alert threshold.

    An alert is raised every time the temperature is strictly above the
    threshold. There is no hysteresis or deduplication, so a sustained hot
    spell raises one alert per poll cycle.

    Args:
        reading: Reading to check
        threshold: Temperature limit in °C
        now: Alert timestamp (defaults to now, UTC)

    Returns:
        Alert if the threshold is exceeded, otherwise None
    """
    if reading.temperature <= threshold:
        return None

    alert = Alert(
        message=f"Temperature exceeds {format_number(threshold)}°C in {reading.city}",
        timestamp=now or datetime.now(timezone.utc),
    )
    logging.warning(f"{alert.message} ({reading.temperature}°C)")
    return alert


class AlertLog:
    """Bounded alert history, oldest first."""

    def __init__(self, capacity: int = DEFAULT_ALERT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._alerts = deque(maxlen=capacity)

    def add(self, alert: Alert) -> None:
        self._alerts.append(alert)

    def recent(self, n: int = 3) -> List[Alert]:
        """Return the last n alerts, oldest first."""
        if n <= 0:
            return []
        return list(self._alerts)[-n:]

    def __len__(self) -> int:
        return len(self._alerts)

    def __iter__(self) -> Iterator[Alert]:
        return iter(list(self._alerts))
