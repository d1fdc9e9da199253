"""FastAPI dependency providers for process-wide services."""
from __future__ import annotations

from functools import lru_cache

from aetherfit.config import get_settings
from aetherfit.services.alert_rules import AlertRuleStore
from aetherfit.services.analysis_coordinator import AnalysisCoordinator
from aetherfit.services.analysis_pipeline import AnalysisPipeline
from aetherfit.services.session_store import InMemorySessionStore
from aetherfit.services.telemetry_source import MockTelemetrySource


@lru_cache()
def get_pipeline() -> AnalysisPipeline:
    return AnalysisPipeline.from_settings(get_settings())


@lru_cache()
def get_coordinator() -> AnalysisCoordinator:
    settings = get_settings()
    return AnalysisCoordinator(get_pipeline(), debounce_seconds=settings.analysis_debounce_seconds)


@lru_cache()
def get_telemetry_source() -> MockTelemetrySource:
    return MockTelemetrySource(seed=get_settings().telemetry_seed)


@lru_cache()
def get_session_store() -> InMemorySessionStore:
    return InMemorySessionStore.with_demo_user(get_settings())


@lru_cache()
def get_alert_rules() -> AlertRuleStore:
    return AlertRuleStore()
