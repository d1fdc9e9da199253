"""Per-user sequencing of AQFA evaluations.

Each trigger for a key (normally a user id) gets a new generation number. A
newer trigger cancels the previous in-flight evaluation and only the current
generation's result is published as that key's latest analysis, so a slow
stale response can never overwrite a fresher one.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from aetherfit.models.schemas import AnalysisRequest
from aetherfit.services.analysis_pipeline import AnalysisPipeline


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of one submitted evaluation. ``analysis`` is None when superseded."""

    generation: int
    superseded: bool
    analysis: dict[str, Any] | None = None


class AnalysisCoordinator:
    """Debounces triggers and discards results from superseded generations.

    All state is touched from the event loop only.
    """

    def __init__(self, pipeline: AnalysisPipeline, debounce_seconds: float = 0.0) -> None:
        self.pipeline = pipeline
        self.debounce_seconds = debounce_seconds
        self._generations: dict[str, int] = {}
        self._tasks: dict[str, asyncio.Task] = {}
        self._latest: dict[str, dict[str, Any]] = {}

    def current_generation(self, key: str) -> int:
        return self._generations.get(key, 0)

    def latest(self, key: str) -> dict[str, Any] | None:
        return self._latest.get(key)

    async def _run(self, request: AnalysisRequest) -> dict[str, Any]:
        if self.debounce_seconds > 0:
            await asyncio.sleep(self.debounce_seconds)
        return await self.pipeline.evaluate_request(request)

    async def submit(self, key: str, request: AnalysisRequest) -> AnalysisOutcome:
        generation = self.current_generation(key) + 1
        self._generations[key] = generation

        previous = self._tasks.get(key)
        if previous is not None and not previous.done():
            logger.debug("Cancelling superseded evaluation for %s", key)
            previous.cancel()

        task = asyncio.create_task(self._run(request))
        self._tasks[key] = task
        try:
            analysis = await task
        except asyncio.CancelledError:
            if generation != self.current_generation(key):
                logger.info("Evaluation %d for %s superseded before completion", generation, key)
                return AnalysisOutcome(generation=generation, superseded=True)
            raise
        finally:
            if self._tasks.get(key) is task:
                del self._tasks[key]

        if generation != self.current_generation(key):
            logger.info("Discarding stale evaluation %d for %s", generation, key)
            return AnalysisOutcome(generation=generation, superseded=True)

        self._latest[key] = analysis
        return AnalysisOutcome(generation=generation, superseded=False, analysis=analysis)
