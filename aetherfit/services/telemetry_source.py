"""Environmental telemetry feeds.

``MockTelemetrySource`` stands in for a sensor or weather/air-quality API and
produces plausible readings for a temperate coastal city.
"""
from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Protocol

from aetherfit.models.schemas import (
    AirQualityData,
    AqiTrendPoint,
    AtmosphericReading,
    WeatherData,
)

TREND_HOURS = 24
TREND_NOW_INDEX = 18

WEATHER_CONDITIONS = ("Clear", "Sunny", "Partly Cloudy", "Overcast", "Light Fog")


class TelemetrySource(Protocol):
    def get_weather(self) -> WeatherData:
        ...

    def get_air_quality(self, location: str) -> AirQualityData:
        ...

    def get_atmospheric_composition(self) -> dict[str, AtmosphericReading]:
        ...

    def get_aqi_trend(self, now: datetime | None = None) -> list[AqiTrendPoint]:
        ...


class MockTelemetrySource:
    """Random but bounded readings; pass ``seed`` for reproducible output."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def get_weather(self) -> WeatherData:
        return WeatherData(
            temperature_f=self._rng.randint(58, 78),
            condition=self._rng.choice(WEATHER_CONDITIONS),
            humidity_pct=self._rng.randint(30, 75),
            wind_speed_mph=self._rng.randint(2, 15),
        )

    def get_air_quality(self, location: str) -> AirQualityData:
        return AirQualityData(
            location=location,
            ozone_ppb=self._rng.randint(15, 60),
            no2_ppb=self._rng.randint(5, 30),
            pm25_ug_m3=round(self._rng.uniform(3.0, 20.0), 1),
        )

    def get_atmospheric_composition(self) -> dict[str, AtmosphericReading]:
        return {
            "co2": AtmosphericReading(label="Carbon Dioxide", value=round(self._rng.uniform(412, 425), 1), unit="ppm"),
            "ch4": AtmosphericReading(label="Methane", value=round(self._rng.uniform(1890, 1930), 1), unit="ppb"),
            "co": AtmosphericReading(label="Carbon Monoxide", value=round(self._rng.uniform(0.1, 0.6), 1), unit="ppm"),
            "so2": AtmosphericReading(label="Sulfur Dioxide", value=round(self._rng.uniform(0.5, 4.0), 1), unit="ppb"),
        }

    def get_aqi_trend(self, now: datetime | None = None) -> list[AqiTrendPoint]:
        """Hourly AQI for the last 18 hours plus a 5 hour forecast.

        The point at ``TREND_NOW_INDEX`` carries both values so the measured and
        predicted series join up when charted.
        """

        now = (now or datetime.now()).replace(minute=0, second=0, microsecond=0)
        start = now - timedelta(hours=TREND_NOW_INDEX)

        points: list[AqiTrendPoint] = []
        level = float(self._rng.randint(30, 60))
        for index in range(TREND_HOURS):
            level = min(150.0, max(10.0, level + self._rng.uniform(-6, 6)))
            value = round(level)
            label = (start + timedelta(hours=index)).strftime("%H:00")
            if index < TREND_NOW_INDEX:
                points.append(AqiTrendPoint(time=label, aqi=value))
            elif index == TREND_NOW_INDEX:
                points.append(AqiTrendPoint(time=label, aqi=value, prediction=value))
            else:
                points.append(AqiTrendPoint(time=label, prediction=value))
        return points
