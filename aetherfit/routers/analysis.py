"""API endpoint for direct AQFA analysis requests."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from aetherfit.dependencies import get_pipeline
from aetherfit.models.schemas import AnalysisRequest, AnalysisResponse
from aetherfit.services.analysis_pipeline import AnalysisPipeline


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


@router.post("", responses={200: {"model": AnalysisResponse}})
async def evaluate_conditions(
    request: AnalysisRequest,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> dict[str, Any]:
    """
    Score outdoor conditions for an activity.

    Always answers 200: if the generation service fails, the fixed demo
    analysis is returned instead of an error.

    Returns:
        dict: {aqfaScore, summary, recommendations, pollutantBreakdown}
    """

    logger.info(
        "Handling analysis request | activity=%s location=%s",
        request.activity.value,
        request.air_quality.location,
    )
    return await pipeline.evaluate_request(request)
