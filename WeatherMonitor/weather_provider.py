"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from weather_data import City, Reading


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, city: City) -> Reading:
        """
        Fetch the current weather for a city as a normalized reading.

        Args:
            city: City to fetch weather for

        Returns:
            Reading: Current weather, temperatures in Celsius

        Raises:
            WeatherProviderError: If the provider fails to fetch or parse data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass
