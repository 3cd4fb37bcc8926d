from typing import ClassVar

from migraine_weather_alert.domain import WeatherSnapshot
from migraine_weather_alert.scoring.base import FactorContribution, RiskFactor


def format_value(value: float) -> str:
    """Render a reading the way it is shown to users: ``1000`` not ``1000.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class PressureSwingFactor:
    name: str = "pressure_swing"

    SHARP_CHANGE: ClassVar[float] = 8
    MODERATE_CHANGE: ClassVar[float] = 4

    def evaluate(self, weather: WeatherSnapshot, pressure_change: float) -> FactorContribution | None:
        change = abs(pressure_change)
        if change >= self.SHARP_CHANGE:
            return FactorContribution(
                self.name, 35, f"Significant pressure change: {change:.1f} hPa"
            )
        if change >= self.MODERATE_CHANGE:
            return FactorContribution(
                self.name, 20, f"Moderate pressure change: {change:.1f} hPa"
            )
        return None


class LowPressureFactor:
    name: str = "low_pressure"

    THRESHOLD: ClassVar[float] = 1005

    def evaluate(self, weather: WeatherSnapshot, pressure_change: float) -> FactorContribution | None:
        if weather.pressure < self.THRESHOLD:
            return FactorContribution(
                self.name, 25, f"Low pressure system: {format_value(weather.pressure)} hPa"
            )
        return None


class HumidityFactor:
    name: str = "humidity"

    def evaluate(self, weather: WeatherSnapshot, pressure_change: float) -> FactorContribution | None:
        if weather.humidity > 80:
            return FactorContribution(
                self.name, 15, f"High humidity: {format_value(weather.humidity)}%"
            )
        if weather.humidity > 70:
            return FactorContribution(self.name, 8)
        return None


class TemperatureFactor:
    name: str = "temperature"

    def evaluate(self, weather: WeatherSnapshot, pressure_change: float) -> FactorContribution | None:
        temp = weather.temperature
        if temp > 32 or temp < 0:
            return FactorContribution(
                self.name, 15, f"Extreme temperature: {format_value(temp)}°C"
            )
        if temp > 28 or temp < 5:
            return FactorContribution(self.name, 8)
        return None


class StormFactor:
    name: str = "storm"

    STORM_CONDITIONS: ClassVar[tuple[str, ...]] = ("Thunderstorm", "Storm", "Rain", "Drizzle")

    def evaluate(self, weather: WeatherSnapshot, pressure_change: float) -> FactorContribution | None:
        if any(c in weather.conditions for c in self.STORM_CONDITIONS):
            return FactorContribution(self.name, 20, f"Storm activity: {weather.conditions}")
        return None


class UvIndexFactor:
    name: str = "uv_index"

    def evaluate(self, weather: WeatherSnapshot, pressure_change: float) -> FactorContribution | None:
        if weather.uv_index > 8:
            return FactorContribution(
                self.name, 10, f"High UV index: {format_value(weather.uv_index)}"
            )
        return None


class WindFactor:
    name: str = "wind"

    def evaluate(self, weather: WeatherSnapshot, pressure_change: float) -> FactorContribution | None:
        if weather.wind_speed > 40:
            return FactorContribution(
                self.name, 10, f"Strong winds: {format_value(weather.wind_speed)} km/h"
            )
        return None


def default_factors() -> list[RiskFactor]:
    """The migraine risk factors in trigger-reporting order."""
    return [
        PressureSwingFactor(),
        LowPressureFactor(),
        HumidityFactor(),
        TemperatureFactor(),
        StormFactor(),
        UvIndexFactor(),
        WindFactor(),
    ]
