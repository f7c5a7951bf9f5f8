"""Fixed-interval polling loop feeding storage, alerts, trend and summaries."""
import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional

from aggregator import Aggregator
from alerts import AlertLog, DEFAULT_ALERT_CAPACITY, evaluate
from storage import ReadingStore, StorageError
from trend_buffer import DEFAULT_TREND_CAPACITY, TrendBuffer
from weather_data import City, DailySummary, Reading, TrendPoint, format_number
from weather_provider import WeatherProviderBase, WeatherProviderError

DEFAULT_POLL_INTERVAL = 300.0  # 5 minutes


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PollState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    SUCCESS = "success"
    FAILURE = "failure"


class ScheduledPoll:
    """
    Cancellable handle for a repeating poll.

    Runs the callback once immediately and then every ``interval_seconds``
    on a daemon thread until cancelled. Cancelling does not interrupt a
    callback that is already running.
    """

    def __init__(self, callback: Callable[[], object], interval_seconds: float):
        self._callback = callback
        self.interval_seconds = interval_seconds
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("ScheduledPoll already started")
        self._thread = threading.Thread(target=self._run, name="weather-poll", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        self._cancelled.set()

    def _run(self) -> None:
        while not self._cancelled.is_set():
            self._callback()
            if self._cancelled.wait(self.interval_seconds):
                break


class PollingController:
    """
    Owns the poll cycle for the selected city.

    Each successful cycle stores the reading, checks the alert threshold,
    extends the trend buffer and refreshes the weekly summaries. Failed
    cycles are logged and skipped; the next tick is the retry.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        reading_store: ReadingStore,
        city: City,
        threshold: float,
        interval_seconds: float = DEFAULT_POLL_INTERVAL,
        scheduler: Callable[[Callable[[], object], float], ScheduledPoll] = ScheduledPoll,
        trend_capacity: int = DEFAULT_TREND_CAPACITY,
        alert_capacity: int = DEFAULT_ALERT_CAPACITY,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            provider: Source of current readings
            reading_store: Where readings are persisted
            city: Initially selected city
            threshold: Alert threshold in °C
            interval_seconds: Time between poll cycles
            scheduler: Factory for the repeating timer handle
            trend_capacity: Number of points kept for the trend view
            alert_capacity: Number of alerts kept in history
            clock: Returns the current UTC time
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self.provider = provider
        self.reading_store = reading_store
        self.interval_seconds = interval_seconds
        self.clock = clock
        self.aggregator = Aggregator(reading_store, today=lambda: self.clock().date())

        self.trend = TrendBuffer(trend_capacity)
        self.alerts = AlertLog(alert_capacity)
        self.weekly: List[DailySummary] = []
        self.current: Optional[Reading] = None
        self.state = PollState.IDLE
        self.last_outcome: Optional[PollState] = None
        self.last_error: Optional[str] = None

        self._city = city
        self._threshold = threshold
        self._scheduler = scheduler
        self._handle: Optional[ScheduledPoll] = None
        self._generation = 0
        self._lock = threading.RLock()
        self._listeners: List[Callable[["PollingController"], None]] = []

    @property
    def city(self) -> City:
        return self._city

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def running(self) -> bool:
        return self._handle is not None

    def trend_points(self) -> List[TrendPoint]:
        return self.trend.points()

    def add_listener(self, callback: Callable[["PollingController"], None]) -> None:
        """Register a callback invoked after every successful cycle."""
        self._listeners.append(callback)

    def start(self) -> None:
        """Start polling: one cycle now, then one per interval."""
        with self._lock:
            if self._handle is not None:
                return
            self._arm()

    def stop(self) -> None:
        """Cancel the pending timer. A fetch already in flight is left to finish."""
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
                self._handle = None
            self._generation += 1
            self.state = PollState.IDLE
        logging.info("Polling stopped")

    def select_city(self, city: City) -> None:
        with self._lock:
            if city == self._city:
                return
            logging.info(f"City changed: {self._city.name} -> {city.name}")
            self._city = city
            self._rearm()

    def set_threshold(self, threshold: float) -> None:
        with self._lock:
            if threshold == self._threshold:
                return
            logging.info(f"Alert threshold changed: {format_number(self._threshold)}°C -> {format_number(threshold)}°C")
            self._threshold = threshold
            self._rearm()

    def _arm(self) -> None:
        self._handle = self._scheduler(self.poll_once, self.interval_seconds)
        self._handle.start()
        logging.info(f"Polling {self._city.name} every {self.interval_seconds:g}s")

    def _rearm(self) -> None:
        self._generation += 1
        self.state = PollState.IDLE
        if self._handle is None:
            return
        self._handle.cancel()
        self._arm()

    def poll_once(self) -> bool:
        """
        Run a single poll cycle.

        Returns:
            True if a reading was fetched and applied, False otherwise
        """
        with self._lock:
            generation = self._generation
            city = self._city
            threshold = self._threshold
            self.state = PollState.FETCHING

        logging.info(f"Fetching weather for {city.name}")
        try:
            reading = self.provider.get_current(city)
        except WeatherProviderError as err:
            return self._fail(generation, f"Weather fetch failed: {err}")
        except Exception as exc:
            logging.exception(f"Unexpected error while fetching weather: {exc}")
            return self._fail(generation, f"Unexpected error: {exc}")

        with self._lock:
            if generation != self._generation:
                logging.info(f"Discarding stale reading for {city.name}")
                return False

            try:
                self.reading_store.append(city.name, reading)
            except StorageError as err:
                return self._fail(generation, f"Storage failed: {err}")

            # unreadable days are skipped, so nothing below raises StorageError
            weekly = self.aggregator.summarize_week(city.name)
            alert = evaluate(reading, threshold, now=self.clock())
            if alert is not None:
                self.alerts.add(alert)
            self.trend.add(reading)
            self.weekly = weekly
            self.current = reading
            self.last_outcome = PollState.SUCCESS
            self.last_error = None
            self.state = PollState.SUCCESS

        logging.info(
            "Weather: temp=%s feels=%s humidity=%s wind=%.1f condition=%s",
            reading.temperature,
            reading.feels_like,
            reading.humidity,
            reading.wind_speed,
            reading.condition,
        )
        self._notify()

        with self._lock:
            if generation == self._generation:
                self.state = PollState.IDLE
        return True

    def _fail(self, generation: int, message: str) -> bool:
        logging.error(message)
        with self._lock:
            if generation != self._generation:
                return False
            self.last_outcome = PollState.FAILURE
            self.last_error = message
            self.state = PollState.IDLE
        return False

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as exc:
                logging.exception(f"Dashboard listener failed: {exc}")
