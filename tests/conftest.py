"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
from fastapi.testclient import TestClient

os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["TELEMETRY_SEED"] = os.environ.get("TELEMETRY_SEED") or "42"
os.environ["ANALYSIS_DEBOUNCE_SECONDS"] = "0"

from aetherfit.logging_config import configure_logging

configure_logging()

from aetherfit.main import app
from aetherfit.models.schemas import AirQualityData, AnalysisRequest, GenerationRequest, WeatherData

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class StubGenerationService:
    """Generation service double that returns canned text or raises."""

    def __init__(self, reply: str | Callable[[GenerationRequest], str] | Exception) -> None:
        self.reply = reply
        self.requests: list[GenerationRequest] = []

    def generate(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        if isinstance(self.reply, Exception):
            raise self.reply
        if callable(self.reply):
            return self.reply(request)
        return self.reply


@pytest.fixture
def stub_service_factory() -> Callable[..., StubGenerationService]:
    return StubGenerationService


@pytest.fixture(scope="session")
def test_client() -> TestClient:
    """Provide a FastAPI test client."""

    return TestClient(app)


@pytest.fixture(autouse=True)
def clear_dependency_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def aqfa_fixture() -> Dict[str, Any]:
    """Return a well-formed AQFA payload as the generation service would send it."""

    with (FIXTURES_DIR / "aqfa_response.json").open("r", encoding="utf-8") as fh:
        return json.load(fh)


@pytest.fixture
def golden_gate_weather() -> WeatherData:
    return WeatherData(temperature=68, condition="Clear", humidity=40, windSpeed=5)


@pytest.fixture
def golden_gate_air() -> AirQualityData:
    return AirQualityData(location="Golden Gate Park", ozone=30, no2=10, pm25=8)


@pytest.fixture
def running_request(golden_gate_weather, golden_gate_air) -> AnalysisRequest:
    return AnalysisRequest(activity="Running", weather=golden_gate_weather, airQuality=golden_gate_air)
