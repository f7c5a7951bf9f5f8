"""OpenWeather Current Weather API provider implementation."""
import logging
import requests
from datetime import datetime, timezone
from typing import Optional
from weather_provider import WeatherProviderBase, WeatherProviderError
from weather_data import City, Reading, kelvin_to_celsius


def parse_reading(data: dict, city: City, observed_at: Optional[datetime] = None) -> Reading:
    """
    Normalize a Current Weather API payload into a Reading.

    The API is queried without a ``units`` parameter, so temperatures arrive
    in Kelvin and are converted to Celsius here.

    Args:
        data: Decoded JSON response
        city: City the request was made for
        observed_at: Observation time (defaults to now, UTC)

    Returns:
        Reading: Normalized reading

    Raises:
        WeatherProviderError: If a required field is missing or malformed
    """
    weather_array = data.get("weather") or []
    if not weather_array:
        logging.error("Response missing 'weather' array")
        raise WeatherProviderError("Response missing 'weather' array")

    main_data = data.get("main") or {}
    if not main_data:
        raise WeatherProviderError("Response missing 'main' block")

    wind_data = data.get("wind") or {}
    if "speed" not in wind_data:
        raise WeatherProviderError("Response missing 'wind.speed'")

    try:
        return Reading(
            city=city.name,
            temperature=kelvin_to_celsius(float(main_data["temp"])),
            feels_like=kelvin_to_celsius(float(main_data["feels_like"])),
            humidity=float(main_data["humidity"]),
            wind_speed=float(wind_data["speed"]),
            condition=weather_array[0]["main"],
            timestamp=observed_at or datetime.now(timezone.utc),
        )
    except (KeyError, ValueError, TypeError) as e:
        logging.error(f"Failed to parse API response: {e}", exc_info=True)
        raise WeatherProviderError(f"Failed to parse response: {e!r}")


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(self, api_key: str, timeout: int = 10):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.timeout = timeout

    def get_current(self, city: City) -> Reading:
        """
        Fetch current weather for a city from OpenWeather Current Weather API.

        Returns:
            Reading: Current weather, converted to Celsius

        Raises:
            WeatherProviderError: If the API request fails or the payload is malformed
        """
        params = {
            "lat": city.lat,
            "lon": city.lon,
            "appid": self.api_key,
        }

        try:
            logging.info(f"Making OpenWeather API request for {city.name}: {self.BASE_URL}")
            logging.debug(f"Request parameters: lat={city.lat}, lon={city.lon}")

            response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)

            logging.info(f"API response status: {response.status_code}")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                self._handle_error_response(response)

            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
        except ValueError as e:
            # requests' JSONDecodeError is also a RequestException
            logging.error(f"API returned invalid JSON: {e}")
            raise WeatherProviderError(f"Failed to parse response: {str(e)}")
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}")

        reading = parse_reading(data, city)
        logging.info(f"Successfully parsed weather data: {reading.temperature}°C, {reading.condition}")
        return reading

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

        cod = error_data.get("cod", response.status_code)
        message = error_data.get("message", "Unknown error")
        logging.error(f"OpenWeather API error response: {error_data}")
        raise WeatherProviderError(f"OpenWeather API error {cod}: {message}")
