"""Weather resolver abstractions feeding a weather bucket to the randomizer."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from logic.weather_rules import map_temp_to_condition

LOGGER = logging.getLogger(__name__)


@dataclass
class WeatherReading:
    """Already-resolved current weather."""

    temperature_c: float
    description: str = "unknown"
    city: str = "Unknown location"

    @property
    def condition(self) -> str:
        return map_temp_to_condition(self.temperature_c)


class WeatherResolver(ABC):
    """Turns external weather data into a reading the randomizer can use.

    Implementations own their network access and error reporting; the engine
    only ever sees the resulting bucket.
    """

    @abstractmethod
    def current_reading(self, location: str) -> Optional[WeatherReading]:
        """Return the current reading, or None when weather is unavailable."""

    def resolve_condition(self, location: str) -> Optional[str]:
        reading = self.current_reading(location)
        if reading is None:
            LOGGER.info("No weather reading available", extra={"location": location})
            return None
        condition = reading.condition
        LOGGER.info(
            "Resolved weather condition",
            extra={"location": location, "temperature_c": reading.temperature_c, "condition": condition},
        )
        return condition


class StaticWeatherResolver(WeatherResolver):
    """Offline resolver returning a fixed reading, for local runs and tests."""

    def __init__(self, reading: Optional[WeatherReading] = None) -> None:
        self.reading = reading

    @classmethod
    def from_temperature(cls, temperature_c: float, city: str = "Unknown location") -> "StaticWeatherResolver":
        return cls(WeatherReading(temperature_c=temperature_c, city=city))

    def current_reading(self, location: str) -> Optional[WeatherReading]:
        LOGGER.debug("Returning static reading", extra={"location": location})
        return self.reading


__all__ = ["WeatherReading", "WeatherResolver", "StaticWeatherResolver"]
