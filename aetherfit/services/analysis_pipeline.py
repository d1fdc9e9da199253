"""AQFA analysis pipeline: prompt, generation call, validation and fallback."""
from __future__ import annotations

import asyncio
import copy
import json
import logging
import math
from typing import Any

from aetherfit.config import Settings
from aetherfit.models.schemas import (
    Activity,
    AirQualityData,
    AnalysisRequest,
    GenerationRequest,
    WeatherData,
)
from aetherfit.services.errors import AnalysisError, ParseError, SchemaViolation
from aetherfit.services.generation_service import AnthropicGenerationService, GenerationService
from aetherfit.services.prompt_builder import (
    PromptConfig,
    build_prompt,
    load_prompt_config,
    response_schema,
)


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_TEMPERATURE = 0.5

# Served whenever the generation service fails or answers with unusable data.
# Input-independent on purpose: it does not vary with activity or location.
FALLBACK_RESPONSE: dict[str, Any] = {
    "aqfaScore": 7.5,
    "summary": "Demo mode: Air quality conditions are favorable for outdoor activities.",
    "recommendations": [
        {
            "activity": "Running",
            "time": "6:00 AM - 8:00 AM",
            "location": "Golden Gate Park",
            "score": 8.2,
        },
        {
            "activity": "Cycling",
            "time": "5:00 PM - 7:00 PM",
            "location": "Embarcadero Trail",
            "score": 7.8,
        },
    ],
    "pollutantBreakdown": [
        {"pollutant": "Ozone", "level": "Low", "effect": "Minimal impact on respiratory function."},
        {
            "pollutant": "PM2.5",
            "level": "Moderate",
            "effect": "Slight reduction in lung capacity during intense exercise.",
        },
        {"pollutant": "NO2", "level": "Low", "effect": "No significant impact on performance."},
    ],
}


def fallback_response() -> dict[str, Any]:
    """Return a fresh copy of the fixed fallback analysis."""

    return copy.deepcopy(FALLBACK_RESPONSE)


def parse_payload(raw_text: str) -> Any:
    """Parse the generation service's text, which must be a JSON document on its own."""

    text = (raw_text or "").strip()
    if not text:
        raise ParseError("Generation response is empty")

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Generation response is not valid JSON: {exc}") from exc


def validate_payload(payload: Any) -> dict[str, Any]:
    """Check the fields every caller relies on and return the payload untouched.

    Only ``aqfaScore``, ``summary`` and ``recommendations`` are checked; nested
    items are passed through as the service produced them.
    """

    if not isinstance(payload, dict):
        raise SchemaViolation("Analysis payload must be a JSON object")

    score = payload.get("aqfaScore")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
        raise SchemaViolation(f"aqfaScore must be a finite number, got {score!r}")

    summary = payload.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise SchemaViolation("summary must be a non-empty string")

    if not isinstance(payload.get("recommendations"), list):
        raise SchemaViolation("recommendations must be an array")

    return payload


class AnalysisPipeline:
    """Turns (activity, weather, air quality) into an AQFA analysis.

    ``evaluate`` never raises for valid input: transport, credential, parse and
    schema failures all resolve to :func:`fallback_response`.

    Results are plain dicts in the wire shape of
    :class:`~aetherfit.models.schemas.AnalysisResponse`. A valid payload is
    returned exactly as the service produced it, so it is not round-tripped
    through the model.
    """

    def __init__(
        self,
        service: GenerationService,
        *,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = 2048,
        prompt_config: PromptConfig | None = None,
    ) -> None:
        self.service = service
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.prompt_config = prompt_config or load_prompt_config()

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisPipeline":
        service = AnthropicGenerationService(
            settings.anthropic_api_key,
            timeout=settings.generation_timeout_seconds,
        )
        return cls(
            service,
            model=settings.generation_model,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_tokens,
            prompt_config=load_prompt_config(settings.prompt_config_path),
        )

    def build_generation_request(self, request: AnalysisRequest) -> GenerationRequest:
        return GenerationRequest(
            model=self.model,
            prompt=build_prompt(request, self.prompt_config),
            response_schema=response_schema(self.prompt_config),
            temperature=self.temperature,
            system_prompt=self.prompt_config.system_prompt,
            max_tokens=self.max_tokens,
        )

    async def evaluate(
        self,
        activity: Activity | str,
        weather: WeatherData,
        air_quality: AirQualityData,
    ) -> dict[str, Any]:
        """Evaluate conditions for an activity."""

        request = AnalysisRequest(activity=Activity(activity), weather=weather, air_quality=air_quality)
        return await self.evaluate_request(request)

    async def evaluate_request(self, request: AnalysisRequest) -> dict[str, Any]:
        activity = request.activity.value
        location = request.air_quality.location
        logger.info("Starting AQFA analysis | activity=%s location=%s", activity, location)

        try:
            generation_request = self.build_generation_request(request)
            raw_text = await asyncio.to_thread(self.service.generate, generation_request)
            result = validate_payload(parse_payload(raw_text))
        except AnalysisError as exc:
            logger.warning(
                "AQFA analysis failed (%s: %s) | activity=%s location=%s - using fallback",
                type(exc).__name__,
                exc,
                activity,
                location,
            )
            return fallback_response()
        except Exception:
            logger.exception(
                "Unexpected error during AQFA analysis | activity=%s location=%s - using fallback",
                activity,
                location,
            )
            return fallback_response()

        logger.info(
            "AQFA analysis complete | activity=%s location=%s score=%s recommendations=%d",
            activity,
            location,
            result["aqfaScore"],
            len(result["recommendations"]),
        )
        return result
