"""Dashboard endpoints combining session, telemetry and AQFA analysis."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from aetherfit.dependencies import get_coordinator, get_session_store, get_telemetry_source
from aetherfit.models.schemas import Activity, AnalysisRequest, DashboardResponse, UserProfile
from aetherfit.services.analysis_coordinator import AnalysisCoordinator
from aetherfit.services.session_store import SessionStore
from aetherfit.services.telemetry_source import TelemetrySource


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _require_user(user_id: str, sessions: SessionStore) -> UserProfile:
    user = sessions.get(user_id)
    if user is None:
        logger.warning("Dashboard requested for unknown user %s", user_id)
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}")
async def get_dashboard(
    user_id: str,
    activity: Activity | None = None,
    sessions: SessionStore = Depends(get_session_store),
    telemetry: TelemetrySource = Depends(get_telemetry_source),
    coordinator: AnalysisCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    """
    Build the dashboard for a user.

    Args:
        user_id: Session user id
        activity: Activity to evaluate (defaults to the user's primary activity)

    Returns:
        dict: Telemetry plus the AQFA analysis. ``superseded`` is true (and
        ``analysis`` null) when a newer request for the same user replaced
        this one while it was in flight.
    """

    user = _require_user(user_id, sessions)
    selected = activity or user.primary_activity

    weather = telemetry.get_weather()
    air_quality = telemetry.get_air_quality(user.location)
    request = AnalysisRequest(activity=selected, weather=weather, air_quality=air_quality)

    logger.info("Building dashboard | user=%s activity=%s", user_id, selected.value)
    outcome = await coordinator.submit(user_id, request)

    return DashboardResponse(
        user=user,
        activity=selected,
        weather=weather,
        air_quality=air_quality,
        atmosphere=telemetry.get_atmospheric_composition(),
        aqi_trend=telemetry.get_aqi_trend(),
        generation=outcome.generation,
        superseded=outcome.superseded,
        analysis=outcome.analysis,
    ).to_wire()


@router.get("/{user_id}/latest")
async def get_latest_analysis(
    user_id: str,
    sessions: SessionStore = Depends(get_session_store),
    coordinator: AnalysisCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    """Return the most recent non-superseded analysis for a user."""

    _require_user(user_id, sessions)
    analysis = coordinator.latest(user_id)
    if analysis is None:
        raise HTTPException(status_code=404, detail="No analysis available yet")
    return {
        "generation": coordinator.current_generation(user_id),
        "analysis": analysis,
    }
