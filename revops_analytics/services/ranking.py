"""
Touchpoint Ranker

Builds the top-touchpoint leaderboard: touchpoints with an ROI entry, sorted
by ROI descending. Python's sort is stable, so equal ROI keeps the order of
the ROI mapping (the order touchpoints were first credited).
"""

from typing import Dict, List, Mapping, Sequence

from revops_analytics.models.schemas import RankedTouchPoint, TouchPoint
from revops_analytics.services.activity_roi import safe_ratio


DEFAULT_TOP_N: int = 10


def top_touchpoints(
    touchpoints: Sequence[TouchPoint],
    touchpoint_roi: Mapping[str, float],
    attribution_scores: Mapping[str, float],
    n: int = DEFAULT_TOP_N,
) -> List[RankedTouchPoint]:
    """
    Return the n highest-ROI touchpoints.

    ROI ids that do not resolve to a touchpoint are dropped rather than
    zero-filled.

    Raises:
        ValueError: If n is negative.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    by_id: Dict[str, TouchPoint] = {}
    for tp in touchpoints:
        by_id.setdefault(tp.id, tp)

    ranked = [
        RankedTouchPoint(
            touchPoint=by_id[touchpoint_id],
            roi=roi,
            attribution=attribution_scores.get(touchpoint_id, 0.0),
            returnOnCost=safe_ratio(roi, by_id[touchpoint_id].cost),
        )
        for touchpoint_id, roi in touchpoint_roi.items()
        if touchpoint_id in by_id
    ]
    ranked.sort(key=lambda item: item.roi, reverse=True)
    return ranked[:n]
