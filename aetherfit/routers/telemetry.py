"""Read-only telemetry endpoints backing the dashboard widgets."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from aetherfit.dependencies import get_telemetry_source
from aetherfit.services.telemetry_source import TelemetrySource

router = APIRouter(prefix="/api/telemetry", tags=["telemetry"])


@router.get("/weather")
async def get_weather(telemetry: TelemetrySource = Depends(get_telemetry_source)) -> dict[str, Any]:
    return telemetry.get_weather().to_wire()


@router.get("/air-quality")
async def get_air_quality(
    location: str = Query(..., min_length=1),
    telemetry: TelemetrySource = Depends(get_telemetry_source),
) -> dict[str, Any]:
    return telemetry.get_air_quality(location).to_wire()


@router.get("/atmosphere")
async def get_atmosphere(telemetry: TelemetrySource = Depends(get_telemetry_source)) -> dict[str, Any]:
    """Atmospheric composition keyed by gas."""
    return {key: reading.to_wire() for key, reading in telemetry.get_atmospheric_composition().items()}


@router.get("/aqi-trend")
async def get_aqi_trend(telemetry: TelemetrySource = Depends(get_telemetry_source)) -> list[dict[str, Any]]:
    """24 hourly AQI points: measured up to now, predicted afterwards."""
    return [point.to_wire() for point in telemetry.get_aqi_trend()]
