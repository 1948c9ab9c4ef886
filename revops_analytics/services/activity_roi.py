"""
Activity ROI Aggregator

Rolls per-touchpoint ROI up by activity type. Attributed revenue is
back-derived from each ROI entry (roi + cost, since ROI was recorded as
attributed revenue minus cost), then summed with cost and count per type.

Final roi per type is (revenue - cost) / cost, or 0 when the type's cost is 0.
Touchpoints without an ROI entry (never credited) are not counted.
"""

from typing import Dict, Mapping, Sequence

from revops_analytics.models.enums import ActivityType
from revops_analytics.models.schemas import ActivityROI, TouchPoint


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def aggregate_by_activity(
    touchpoints: Sequence[TouchPoint],
    touchpoint_roi: Mapping[str, float],
) -> Dict[ActivityType, ActivityROI]:
    """
    Aggregate revenue, cost, count and ROI per activity type.

    Args:
        touchpoints: Filtered touchpoints used for the attribution run.
        touchpoint_roi: Touchpoint id -> cumulative ROI from the calculator.

    Returns:
        Mapping of activity type to its ActivityROI. Types with no credited
        touchpoints are absent.

    Example:
        >>> rollup = aggregate_by_activity(tps, {"tp-1": 4000.0})
        >>> rollup[ActivityType.DEMO].roi
        4.0
    """
    by_id: Dict[str, TouchPoint] = {}
    for tp in touchpoints:
        # First occurrence wins for duplicated ids.
        by_id.setdefault(tp.id, tp)

    totals: Dict[ActivityType, Dict[str, float]] = {}

    for touchpoint_id, roi in touchpoint_roi.items():
        tp = by_id.get(touchpoint_id)
        if tp is None:
            continue

        bucket = totals.setdefault(tp.type, {"revenue": 0.0, "cost": 0.0, "count": 0})
        bucket["revenue"] += roi + tp.cost
        bucket["cost"] += tp.cost
        bucket["count"] += 1

    return {
        activity_type: ActivityROI(
            revenue=bucket["revenue"],
            cost=bucket["cost"],
            count=int(bucket["count"]),
            roi=safe_ratio(bucket["revenue"] - bucket["cost"], bucket["cost"]),
            averageRevenue=safe_ratio(bucket["revenue"], bucket["count"]),
        )
        for activity_type, bucket in totals.items()
    }
