"""Tests for configuration loading."""
import pytest
from unittest.mock import patch
from config import CITIES, DEFAULT_STORE_PATH, find_city, load_config

ENV_VARS = [
    "OPENWEATHER_API_KEY",
    "WEATHER_CITY",
    "WEATHER_ALERT_THRESHOLD",
    "WEATHER_POLL_INTERVAL",
    "WEATHER_STORE_PATH",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("config.load_dotenv"):
        yield monkeypatch


def test_six_cities():
    assert [c.name for c in CITIES] == ["Delhi", "Mumbai", "Chennai", "Bangalore", "Kolkata", "Hyderabad"]


def test_find_city_case_insensitive():
    assert find_city("mumbai").name == "Mumbai"
    assert find_city("  KOLKATA ").lat == 22.5726
    assert find_city("Paris") is None


def test_missing_api_key_is_fatal():
    with pytest.raises(SystemExit, match="OPENWEATHER_API_KEY"):
        load_config()


def test_defaults(clean_env):
    clean_env.setenv("OPENWEATHER_API_KEY", "abc123")
    config = load_config()
    assert config.api_key == "abc123"
    assert config.city.name == "Delhi"
    assert config.threshold == 35.0
    assert config.interval_seconds == 300.0
    assert config.store_path == DEFAULT_STORE_PATH


def test_overrides_from_env(clean_env):
    clean_env.setenv("OPENWEATHER_API_KEY", "abc123")
    clean_env.setenv("WEATHER_CITY", "chennai")
    clean_env.setenv("WEATHER_ALERT_THRESHOLD", "38.5")
    clean_env.setenv("WEATHER_POLL_INTERVAL", "60")
    clean_env.setenv("WEATHER_STORE_PATH", "/tmp/readings.json")

    config = load_config()

    assert config.city.name == "Chennai"
    assert config.threshold == 38.5
    assert config.interval_seconds == 60.0
    assert config.store_path == "/tmp/readings.json"


def test_unknown_city_is_fatal(clean_env):
    clean_env.setenv("OPENWEATHER_API_KEY", "abc123")
    clean_env.setenv("WEATHER_CITY", "Atlantis")
    with pytest.raises(SystemExit, match="Atlantis"):
        load_config()


def test_invalid_threshold_is_fatal(clean_env):
    clean_env.setenv("OPENWEATHER_API_KEY", "abc123")
    clean_env.setenv("WEATHER_ALERT_THRESHOLD", "hot")
    with pytest.raises(SystemExit, match="WEATHER_ALERT_THRESHOLD"):
        load_config()


def test_non_positive_interval_is_fatal(clean_env):
    clean_env.setenv("OPENWEATHER_API_KEY", "abc123")
    clean_env.setenv("WEATHER_POLL_INTERVAL", "0")
    with pytest.raises(SystemExit):
        load_config()
