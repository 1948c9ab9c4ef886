"""
Attribution Analysis Pipeline

Composes the attribution services into the result shown on the ROI
attribution view:

    resolve model -> client filter -> time-window filter -> attribute
        -> { activity ROI rollup, top-touchpoint ranking } -> AttributionAnalysis

Each call walks the full snapshot it is given; there is no incremental
state. Refreshing means calling again.

Model fallback:
    An unknown model key resolves to the registry default (data_driven). The
    pipeline logs a warning and sets modelFallback=True in the result so the
    substitution is visible to the caller.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple, Union

from revops_analytics.models.enums import AttributionAlgorithm, TimeWindow
from revops_analytics.models.schemas import (
    AttributionAnalysis,
    ModelComparison,
    RevenueEvent,
    TouchPoint,
)
from revops_analytics.services.activity_roi import aggregate_by_activity, safe_ratio
from revops_analytics.services.attribution import attribute
from revops_analytics.services.model_registry import list_models, resolve_model
from revops_analytics.services.ranking import DEFAULT_TOP_N, top_touchpoints
from revops_analytics.services.time_window import (
    filter_by_client,
    filter_by_window,
    parse_time_window,
    utc_now,
)


logger = logging.getLogger(__name__)


def _prepare_snapshot(
    touchpoints: Sequence[TouchPoint],
    revenue_events: Sequence[RevenueEvent],
    window: Union[int, str, TimeWindow],
    client_id: Optional[str],
    as_of: datetime,
) -> Tuple[int, List[TouchPoint], List[RevenueEvent]]:
    window_days = parse_time_window(window)
    scoped_touchpoints, scoped_events = filter_by_client(touchpoints, revenue_events, client_id)
    filtered_touchpoints, filtered_events = filter_by_window(
        scoped_touchpoints, scoped_events, window_days, as_of
    )
    return window_days, filtered_touchpoints, filtered_events


def run_attribution_analysis(
    touchpoints: Sequence[TouchPoint],
    revenue_events: Sequence[RevenueEvent],
    model_key: Union[str, AttributionAlgorithm, None],
    window: Union[int, str, TimeWindow],
    top_n: int = DEFAULT_TOP_N,
    client_id: Optional[str] = None,
    as_of: Optional[datetime] = None,
) -> AttributionAnalysis:
    """
    Run the full attribution pipeline over one input snapshot.

    Args:
        touchpoints: Touchpoint snapshot.
        revenue_events: Revenue event snapshot.
        model_key: Algorithm key; unknown keys fall back to data_driven.
        window: Trailing window as days (30/90/180/365) or label ("90d").
        top_n: Leaderboard size.
        client_id: Restrict to one client; None or "all" for every client.
        as_of: End of the window; defaults to now.

    Returns:
        AttributionAnalysis with scores, ROI, activity rollup, leaderboard,
        totals and model metadata.

    Raises:
        InvalidWindowError: If window is not a supported window.
        ValueError: If top_n is negative.
    """
    reference = as_of if as_of is not None else utc_now()

    model, fell_back = resolve_model(model_key)
    if fell_back:
        logger.warning(
            f"Unknown attribution model {model_key!r}; falling back to {model.algorithm.value}"
        )

    window_days, filtered_touchpoints, filtered_events = _prepare_snapshot(
        touchpoints, revenue_events, window, client_id, reference
    )

    result = attribute(filtered_touchpoints, filtered_events, model)
    activity_roi = aggregate_by_activity(filtered_touchpoints, result.touchPointROI)
    leaders = top_touchpoints(
        filtered_touchpoints,
        result.touchPointROI,
        result.attributionScores,
        n=top_n,
    )

    logger.info(
        f"Attribution run ({model.algorithm.value}, {window_days}d): "
        f"{len(filtered_touchpoints)} touchpoints, {len(filtered_events)} revenue events, "
        f"{len(result.touchPointROI)} credited"
    )

    return AttributionAnalysis(
        algorithm=model.algorithm,
        modelName=model.name,
        modelAccuracy=model.accuracy,
        modelFallback=fell_back,
        windowDays=window_days,
        asOf=reference,
        clientId=client_id,
        touchPointCount=len(filtered_touchpoints),
        revenueEventCount=len(filtered_events),
        attributionScores=result.attributionScores,
        touchPointROI=result.touchPointROI,
        activityROI=activity_roi,
        topTouchPoints=leaders,
        totalRevenue=result.totalRevenue,
        totalCost=result.totalCost,
        overallROI=safe_ratio(result.totalRevenue - result.totalCost, result.totalCost),
    )


def compare_models(
    touchpoints: Sequence[TouchPoint],
    revenue_events: Sequence[RevenueEvent],
    window: Union[int, str, TimeWindow],
    client_id: Optional[str] = None,
    as_of: Optional[datetime] = None,
) -> List[ModelComparison]:
    """
    Run every registered model over the same filtered snapshot.

    attributedRevenue is the expected value credited by the model: each
    matched event's amount x probability times the sum of its weights. Under
    data_driven it can differ from the matched expected value because those
    weights are not normalized.

    Returns:
        One ModelComparison per model, in registry order.
    """
    reference = as_of if as_of is not None else utc_now()
    _, filtered_touchpoints, filtered_events = _prepare_snapshot(
        touchpoints, revenue_events, window, client_id, reference
    )

    comparisons: List[ModelComparison] = []
    for model in list_models():
        result = attribute(filtered_touchpoints, filtered_events, model)
        comparisons.append(
            ModelComparison(
                algorithm=model.algorithm,
                name=model.name,
                accuracy=model.accuracy,
                attributedRevenue=result.attributedRevenue,
                totalWeight=sum(result.attributionScores.values()),
                netROI=sum(result.touchPointROI.values()),
            )
        )
    return comparisons
