"""Prompt rendering and response schema for AQFA analysis requests."""
from __future__ import annotations

import copy
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from aetherfit.models.schemas import AnalysisRequest

DEFAULT_PROMPT_PATH = Path(__file__).resolve().parent.parent / "prompts" / "analysis.yaml"
_REQUIRED_KEYS = ("system", "template", "response_schema")


@dataclass(frozen=True)
class PromptConfig:
    """System prompt, user prompt template and response schema loaded from YAML."""

    system_prompt: str
    template: str
    response_schema: dict[str, Any]


@lru_cache()
def load_prompt_config(path: str | Path | None = None) -> PromptConfig:
    """Read and validate the prompt configuration file (cached per path)."""

    config_path = Path(path) if path is not None else DEFAULT_PROMPT_PATH
    with config_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}

    missing = [key for key in _REQUIRED_KEYS if not raw.get(key)]
    if missing:
        raise ValueError(f"Prompt config {config_path} is missing: {', '.join(missing)}")
    if not isinstance(raw["response_schema"], dict):
        raise ValueError(f"Prompt config {config_path}: response_schema must be a mapping")

    return PromptConfig(
        system_prompt=str(raw["system"]).strip(),
        template=str(raw["template"]),
        response_schema=raw["response_schema"],
    )


def _format_number(value: float) -> str:
    """Render integral floats without a trailing '.0'."""

    if float(value).is_integer():
        return str(int(value))
    return str(float(value))


def build_prompt(request: AnalysisRequest, config: PromptConfig | None = None) -> str:
    """Render the analysis prompt. Pure: identical requests give identical text."""

    config = config or load_prompt_config()
    weather = request.weather
    air = request.air_quality
    return config.template.format(
        activity=request.activity.value.lower(),
        location=air.location,
        temperature=_format_number(weather.temperature_f),
        condition=weather.condition,
        humidity=_format_number(weather.humidity_pct),
        wind_speed=_format_number(weather.wind_speed_mph),
        ozone=_format_number(air.ozone_ppb),
        no2=_format_number(air.no2_ppb),
        pm25=_format_number(air.pm25_ug_m3),
    ).strip()


def response_schema(config: PromptConfig | None = None) -> dict[str, Any]:
    """Return a private copy of the declared response schema."""

    config = config or load_prompt_config()
    return copy.deepcopy(config.response_schema)
