"""Pydantic models describing telemetry, analysis and API payloads.

Field names are snake_case in Python; the JSON wire names (aliases) follow the
camelCase keys used by the dashboard client and the generation service.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Activity(str, Enum):
    """Outdoor activities an AQFA analysis can be requested for."""

    RUNNING = "Running"
    CYCLING = "Cycling"
    HIKING = "Hiking"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# Telemetry
class WeatherData(_WireModel):
    """Current weather readings."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    temperature_f: float = Field(alias="temperature", description="Air temperature in °F")
    condition: str
    humidity_pct: float = Field(alias="humidity", ge=0, le=100)
    wind_speed_mph: float = Field(alias="windSpeed", ge=0)


class AirQualityData(_WireModel):
    """Pollutant readings for a location (ppb for gases, µg/m³ for PM2.5)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    location: str = Field(min_length=1)
    ozone_ppb: float = Field(alias="ozone", ge=0)
    no2_ppb: float = Field(alias="no2", ge=0)
    pm25_ug_m3: float = Field(alias="pm25", ge=0)


class AtmosphericReading(_WireModel):
    label: str
    value: float
    unit: str


class AqiTrendPoint(_WireModel):
    time: str
    aqi: float | None = None
    prediction: float | None = None


# Analysis
class AnalysisRequest(_WireModel):
    """Inputs for one AQFA evaluation. Immutable; fully determines the prompt."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    activity: Activity
    weather: WeatherData
    air_quality: AirQualityData = Field(alias="airQuality")


class Recommendation(_WireModel):
    activity: str
    time: str = Field(description="Free-form time slot, e.g. '6:00 AM - 8:00 AM'")
    location: str
    score: float = Field(ge=1, le=10)


class PollutantEffect(_WireModel):
    pollutant: str
    level: str
    effect: str


class AnalysisResponse(_WireModel):
    """Typed view of an AQFA analysis."""

    aqfa_score: float = Field(alias="aqfaScore", ge=1, le=10)
    summary: str = Field(min_length=1)
    recommendations: list[Recommendation] = []
    pollutant_breakdown: list[PollutantEffect] = Field(default=[], alias="pollutantBreakdown")


class GenerationRequest(_WireModel):
    """Single call to the generation service."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    model: str
    prompt: str
    response_schema: dict[str, Any] = Field(alias="responseSchema")
    temperature: float = Field(ge=0.0, le=1.0)
    system_prompt: str | None = Field(default=None, alias="systemPrompt")
    max_tokens: int = Field(default=2048, alias="maxTokens")


# Session and alerts
class UserProfile(_WireModel):
    """Authenticated user's identity and preferences."""

    user_id: str = Field(alias="userId")
    name: str
    email: str
    location: str
    primary_activity: Activity = Field(default=Activity.RUNNING, alias="primaryActivity")


class AlertRule(_WireModel):
    id: int
    title: str
    description: str
    enabled: bool = True


class DashboardResponse(_WireModel):
    """Everything the dashboard screen needs in one payload."""

    user: UserProfile
    activity: Activity
    weather: WeatherData
    air_quality: AirQualityData = Field(alias="airQuality")
    atmosphere: dict[str, AtmosphericReading]
    aqi_trend: list[AqiTrendPoint] = Field(alias="aqiTrend")
    generation: int
    superseded: bool
    analysis: dict[str, Any] | None = None
