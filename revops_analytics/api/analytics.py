"""
FastAPI router module for attribution and cohort analytics endpoints.

Endpoints:
- GET  /analytics/models: Attribution model catalog
- POST /analytics/attribution: Full attribution analysis for one model
- POST /analytics/attribution/compare: Every model over the same snapshot
- POST /analytics/cohorts: Acquisition cohort retention/LTV curves

The caller posts already materialized touchpoints, revenue events and
clients; nothing is fetched or persisted here. Options left unset in a
request take their defaults from Settings.

Error mapping:
- Unsupported time window -> 400
- Schema violations (negative cost, probability outside 0-1, ...) -> 422
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, HTTPException

from revops_analytics.core.config import Settings
from revops_analytics.core.dependencies import SettingsDep
from revops_analytics.models import (
    AttributionAnalysis,
    AttributionAnalysisRequest,
    AttributionModelDefinition,
    CohortAnalysisRequest,
    CohortAnalysisResponse,
    ModelComparison,
)
from revops_analytics.services.cohort_analysis import build_cohort_report
from revops_analytics.services.model_registry import list_models
from revops_analytics.services.pipeline import compare_models, run_attribution_analysis
from revops_analytics.services.time_window import InvalidWindowError


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


# =============================================================================
# Helper Functions
# =============================================================================


def _resolve_window(request_window: Optional[Union[int, str]], settings: Settings) -> Union[int, str]:
    return request_window if request_window is not None else settings.default_time_window


def _invalid_window(exc: InvalidWindowError) -> HTTPException:
    logger.info(f"Rejected attribution request: {exc}")
    return HTTPException(status_code=400, detail=str(exc))


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/models", response_model=List[AttributionModelDefinition])
async def get_models() -> List[AttributionModelDefinition]:
    """Return the attribution model catalog in display order."""
    return list_models()


@router.post("/attribution", response_model=AttributionAnalysis)
async def analyze_attribution(
    request: AttributionAnalysisRequest,
    settings: SettingsDep,
) -> AttributionAnalysis:
    """
    Run the attribution pipeline over the posted snapshot.

    An unknown model key is not an error: the default model is used and the
    response carries modelFallback=true.

    Raises:
        HTTPException 400: If the time window is not 30d/90d/180d/1y.
    """
    model_key = request.model if request.model is not None else settings.default_attribution_model
    top_n = request.topN if request.topN is not None else settings.default_top_n

    try:
        return run_attribution_analysis(
            request.touchPoints,
            request.revenueEvents,
            model_key,
            _resolve_window(request.timeWindow, settings),
            top_n=top_n,
            client_id=request.clientId,
            as_of=request.asOf,
        )
    except InvalidWindowError as exc:
        raise _invalid_window(exc)


@router.post("/attribution/compare", response_model=List[ModelComparison])
async def compare_attribution_models(
    request: AttributionAnalysisRequest,
    settings: SettingsDep,
) -> List[ModelComparison]:
    """
    Run all six models over the posted snapshot. request.model and
    request.topN are ignored.

    Raises:
        HTTPException 400: If the time window is not 30d/90d/180d/1y.
    """
    try:
        return compare_models(
            request.touchPoints,
            request.revenueEvents,
            _resolve_window(request.timeWindow, settings),
            client_id=request.clientId,
            as_of=request.asOf,
        )
    except InvalidWindowError as exc:
        raise _invalid_window(exc)


@router.post("/cohorts", response_model=CohortAnalysisResponse)
async def analyze_cohort_curves(
    request: CohortAnalysisRequest,
    settings: SettingsDep,
) -> CohortAnalysisResponse:
    """Build acquisition cohort curves from the posted clients."""
    months = (
        request.monthsToTrack
        if request.monthsToTrack is not None
        else settings.cohort_months_to_track
    )
    return build_cohort_report(request.clients, months)
