"""Environment configuration and the fixed city list."""
import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from weather_data import City

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_STORE_PATH = os.path.join(BASE_DIR, "weather-store.json")
DEFAULT_THRESHOLD = 35.0
DEFAULT_INTERVAL = 300.0

CITIES: Tuple[City, ...] = (
    City("Delhi", 28.6139, 77.209),
    City("Mumbai", 19.076, 72.8777),
    City("Chennai", 13.0827, 80.2707),
    City("Bangalore", 12.9716, 77.5946),
    City("Kolkata", 22.5726, 88.3639),
    City("Hyderabad", 17.385, 78.4867),
)


def find_city(name: str) -> Optional[City]:
    """Look up a city by name, ignoring case."""
    wanted = name.strip().lower()
    for city in CITIES:
        if city.name.lower() == wanted:
            return city
    return None


@dataclass
class Config:
    api_key: str
    city: City
    threshold: float
    interval_seconds: float
    store_path: str


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise SystemExit(f"Invalid {name}: {exc}") from exc


def load_config() -> Config:
    """
    Load configuration from the environment (and a .env file if present).

    Raises:
        SystemExit: If OPENWEATHER_API_KEY is missing or a value is invalid
    """
    load_dotenv()
    api_key = os.getenv("OPENWEATHER_API_KEY")
    if not api_key:
        raise SystemExit("Missing OPENWEATHER_API_KEY in environment")

    city_name = os.getenv("WEATHER_CITY")
    city = CITIES[0]
    if city_name:
        city = find_city(city_name)
        if city is None:
            raise SystemExit(f"Unknown WEATHER_CITY: {city_name}")

    interval = _float_env("WEATHER_POLL_INTERVAL", DEFAULT_INTERVAL)
    if interval <= 0:
        raise SystemExit("WEATHER_POLL_INTERVAL must be positive")

    config = Config(
        api_key=api_key,
        city=city,
        threshold=_float_env("WEATHER_ALERT_THRESHOLD", DEFAULT_THRESHOLD),
        interval_seconds=interval,
        store_path=os.getenv("WEATHER_STORE_PATH") or DEFAULT_STORE_PATH,
    )
    logging.info(
        "Configuration loaded: city=%s threshold=%s interval=%ss store=%s",
        config.city.name,
        config.threshold,
        config.interval_seconds,
        config.store_path,
    )
    return config
