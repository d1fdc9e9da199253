"""Tests for the mock telemetry feed."""
from datetime import datetime

from aetherfit.services.telemetry_source import TREND_HOURS, TREND_NOW_INDEX, MockTelemetrySource


def test_seeded_sources_are_reproducible():
    first = MockTelemetrySource(seed=7)
    second = MockTelemetrySource(seed=7)

    assert first.get_weather() == second.get_weather()
    assert first.get_air_quality("Presidio") == second.get_air_quality("Presidio")


def test_readings_stay_within_plausible_bounds():
    source = MockTelemetrySource(seed=1)

    for _ in range(50):
        weather = source.get_weather()
        air = source.get_air_quality("Presidio")
        assert 58 <= weather.temperature_f <= 78
        assert 0 <= weather.humidity_pct <= 100
        assert air.location == "Presidio"
        assert 3.0 <= air.pm25_ug_m3 <= 20.0


def test_atmosphere_lists_each_gas_with_units():
    atmosphere = MockTelemetrySource(seed=3).get_atmospheric_composition()

    assert set(atmosphere) == {"co2", "ch4", "co", "so2"}
    assert atmosphere["co2"].unit == "ppm"
    assert atmosphere["ch4"].unit == "ppb"


def test_aqi_trend_splits_actual_and_prediction_at_now():
    now = datetime(2025, 6, 1, 14, 37)
    trend = MockTelemetrySource(seed=5).get_aqi_trend(now=now)

    assert len(trend) == TREND_HOURS
    assert trend[0].time == "20:00"
    assert trend[TREND_NOW_INDEX].time == "14:00"
    assert trend[TREND_NOW_INDEX].aqi == trend[TREND_NOW_INDEX].prediction
    assert all(point.prediction is None for point in trend[:TREND_NOW_INDEX])
    assert all(point.aqi is None for point in trend[TREND_NOW_INDEX + 1:])
