"""Fixed-capacity buffer of recent temperatures for the trend view."""
from collections import deque
from typing import List

from weather_data import Reading, TrendPoint

DEFAULT_TREND_CAPACITY = 24


class TrendBuffer:
    """Most recent readings last; the oldest point is dropped when full."""

    def __init__(self, capacity: int = DEFAULT_TREND_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._points = deque(maxlen=capacity)

    def add(self, reading: Reading) -> TrendPoint:
        point = TrendPoint(time=reading.timestamp, temperature=reading.temperature)
        self._points.append(point)
        return point

    def points(self) -> List[TrendPoint]:
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)
