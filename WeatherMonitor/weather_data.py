"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, asdict
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP


KELVIN_OFFSET = 273.15


def round1(value: float) -> float:
    """Round to one decimal place, halves away from zero (32.25 -> 32.3)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Format a number without a trailing ".0" or exponent (35.0 -> "35")."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def kelvin_to_celsius(kelvin: float) -> float:
    """Convert Kelvin to Celsius, rounded to one decimal place."""
    return round1(kelvin - KELVIN_OFFSET)


@dataclass(frozen=True)
class City:
    """A selectable city and its coordinates."""
    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class Reading:
    """One normalized weather observation for a city."""
    city: str
    temperature: float  # °C
    feels_like: float  # °C
    humidity: float  # percentage
    wind_speed: float  # m/s
    condition: str  # e.g., "Clouds", "Rain", "Clear"
    timestamp: datetime  # timezone-aware, UTC

    @property
    def day(self) -> date:
        """UTC calendar date the reading belongs to."""
        return self.timestamp.astimezone(timezone.utc).date()

    def to_dict(self) -> dict:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Reading":
        timestamp = datetime.fromisoformat(data["timestamp"])
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            city=data["city"],
            temperature=float(data["temperature"]),
            feels_like=float(data["feels_like"]),
            humidity=float(data["humidity"]),
            wind_speed=float(data["wind_speed"]),
            condition=data["condition"],
            timestamp=timestamp,
        )


@dataclass(frozen=True)
class DailySummary:
    """Aggregate statistics over all readings for one city and date."""
    date: date
    avg_temp: float
    max_temp: float
    min_temp: float
    dominant_condition: str
    readings: int


@dataclass(frozen=True)
class TrendPoint:
    """A single point of the temperature trend."""
    time: datetime
    temperature: float


@dataclass(frozen=True)
class Alert:
    """Threshold alert raised for a reading."""
    message: str
    timestamp: datetime
