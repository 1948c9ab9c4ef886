"""
Multi-Touch Attribution Calculator

Splits the expected value of each revenue event across the touchpoints that
share its (engagementId, clientId) key, under one of six attribution models.

Algorithm Overview:
    1. Group touchpoints by (engagementId, clientId).
    2. For each revenue event, take its group (events with no group are
       skipped) and order it by timestamp. The sort is stable, so equal
       timestamps keep their input order.
    3. Assign weights with the selected model.
    4. attributed revenue = amount x weight x probability. Each touchpoint
       accumulates its weight (attribution score) and attributed revenue
       minus its cost (ROI) across every revenue event that credits it.
    5. Totals are taken over the full filtered inputs, whether or not a
       record was matched.

Weight Rules:
    - first_touch / last_touch: 1.0 to the earliest / latest touchpoint.
      Other touchpoints in the group receive no credit entry.
    - linear: 1/n to each touchpoint.
    - position_based: 1 -> 1.0; 2 -> 0.5/0.5; n>=3 -> 0.4 first, 0.4 last,
      0.2 split evenly across the interior.
    - time_decay: 0.7 ** (days before the event / 7), normalized to sum to 1.
    - data_driven: influence share x outcome multiplier x type multiplier.
      These weights are NOT renormalized; a group's weights can sum to more
      or less than 1. Cross-model totals are therefore not directly
      comparable with data_driven.

Every model except data_driven produces weights summing to 1.0 per revenue
event with at least one matched touchpoint.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

from revops_analytics.models.enums import (
    ActivityType,
    AttributionAlgorithm,
    TouchPointOutcome,
)
from revops_analytics.models.schemas import (
    AttributionModelDefinition,
    AttributionResult,
    RevenueEvent,
    TouchPoint,
)
from revops_analytics.services.model_registry import TIME_DECAY_RATE, get_model
from revops_analytics.services.time_window import to_utc_naive


logger = logging.getLogger(__name__)


# =============================================================================
# Model Parameters
# =============================================================================

POSITION_ENDPOINT_WEIGHT: float = 0.4
POSITION_MIDDLE_WEIGHT: float = 0.2

SECONDS_PER_DAY: float = 86400.0
DAYS_PER_DECAY_PERIOD: float = 7.0

OUTCOME_MULTIPLIERS: Dict[TouchPointOutcome, float] = {
    TouchPointOutcome.POSITIVE: 1.3,
    TouchPointOutcome.NEUTRAL: 1.0,
    TouchPointOutcome.NEGATIVE: 0.7,
}

# Activity types not listed here use a multiplier of 1.0.
TYPE_MULTIPLIERS: Dict[ActivityType, float] = {
    ActivityType.PROPOSAL: 1.4,
    ActivityType.DEMO: 1.2,
    ActivityType.NEGOTIATION: 1.3,
}

GroupKey = Tuple[str, str]
WeightAssignment = List[Tuple[TouchPoint, float]]


# =============================================================================
# Grouping and Ordering
# =============================================================================


def group_touchpoints(touchpoints: Sequence[TouchPoint]) -> Dict[GroupKey, List[TouchPoint]]:
    """Partition touchpoints by (engagementId, clientId), keeping input order."""
    groups: Dict[GroupKey, List[TouchPoint]] = defaultdict(list)
    for tp in touchpoints:
        groups[(tp.engagementId, tp.clientId)].append(tp)
    return dict(groups)


def order_touchpoints(touchpoints: Sequence[TouchPoint]) -> List[TouchPoint]:
    """Sort ascending by timestamp; ties keep input order."""
    return sorted(touchpoints, key=lambda tp: to_utc_naive(tp.timestamp))


# =============================================================================
# Per-Model Weights
# =============================================================================


def first_touch_weights(ordered: Sequence[TouchPoint]) -> WeightAssignment:
    return [(ordered[0], 1.0)]


def last_touch_weights(ordered: Sequence[TouchPoint]) -> WeightAssignment:
    return [(ordered[-1], 1.0)]


def linear_weights(ordered: Sequence[TouchPoint]) -> WeightAssignment:
    equal_weight = 1.0 / len(ordered)
    return [(tp, equal_weight) for tp in ordered]


def position_based_weights(ordered: Sequence[TouchPoint]) -> WeightAssignment:
    """
    40/20/40 split between first, interior and last touchpoints.

    One touchpoint takes all the credit; two split it evenly.
    """
    n = len(ordered)
    if n == 1:
        return [(ordered[0], 1.0)]
    if n == 2:
        return [(ordered[0], 0.5), (ordered[1], 0.5)]

    middle_weight = POSITION_MIDDLE_WEIGHT / (n - 2)
    weights: WeightAssignment = [(ordered[0], POSITION_ENDPOINT_WEIGHT)]
    weights.extend((tp, middle_weight) for tp in ordered[1:-1])
    weights.append((ordered[-1], POSITION_ENDPOINT_WEIGHT))
    return weights


def time_decay_weights(
    ordered: Sequence[TouchPoint],
    revenue_event: RevenueEvent,
    decay_rate: float = TIME_DECAY_RATE,
) -> WeightAssignment:
    """
    Weekly exponential decay measured back from the revenue event.

    Raw weight is decay_rate ** (days_between / 7). Weights are normalized to
    sum to 1; if the raw total is 0 (underflow on very old touchpoints) the
    raw weights are returned unchanged.

    Example:
        Touchpoints 10, 3 and 0 days before the event get raw weights
        0.6008, 0.8583 and 1.0, normalized to roughly 0.245, 0.349, 0.407.
    """
    event_time = to_utc_naive(revenue_event.timestamp)
    days_before = np.array(
        [
            (event_time - to_utc_naive(tp.timestamp)).total_seconds() / SECONDS_PER_DAY
            for tp in ordered
        ],
        dtype=np.float64,
    )
    raw = np.power(decay_rate, days_before / DAYS_PER_DECAY_PERIOD)

    total = float(raw.sum())
    if total > 0 and np.isfinite(total):
        raw = raw / total

    return [(tp, float(w)) for tp, w in zip(ordered, raw)]


def data_driven_weights(ordered: Sequence[TouchPoint]) -> WeightAssignment:
    """
    Influence-share weighting adjusted by outcome and activity type.

    base = influenceScore / sum(influenceScore); weight = base x outcome
    multiplier x type multiplier. The result is intentionally left
    unnormalized. A group whose influence scores sum to 0 gets base 0.
    """
    influence = np.array([tp.influenceScore for tp in ordered], dtype=np.float64)
    total_influence = float(influence.sum())
    if total_influence > 0:
        base = influence / total_influence
    else:
        base = np.zeros_like(influence)

    multipliers = np.array(
        [
            OUTCOME_MULTIPLIERS.get(tp.outcome, 1.0) * TYPE_MULTIPLIERS.get(tp.type, 1.0)
            for tp in ordered
        ],
        dtype=np.float64,
    )
    weights = base * multipliers
    return [(tp, float(w)) for tp, w in zip(ordered, weights)]


def compute_weights(
    ordered: Sequence[TouchPoint],
    revenue_event: RevenueEvent,
    algorithm: AttributionAlgorithm,
) -> WeightAssignment:
    """
    Assign credit weights for one revenue event's ordered touchpoints.

    Args:
        ordered: Touchpoints sharing the event's key, sorted by timestamp.
        revenue_event: The event being credited.
        algorithm: Attribution algorithm to apply.

    Returns:
        List of (touchpoint, weight) pairs. Empty when ordered is empty.
    """
    if not ordered:
        return []

    if algorithm == AttributionAlgorithm.FIRST_TOUCH:
        return first_touch_weights(ordered)
    if algorithm == AttributionAlgorithm.LAST_TOUCH:
        return last_touch_weights(ordered)
    if algorithm == AttributionAlgorithm.LINEAR:
        return linear_weights(ordered)
    if algorithm == AttributionAlgorithm.POSITION_BASED:
        return position_based_weights(ordered)
    if algorithm == AttributionAlgorithm.TIME_DECAY:
        return time_decay_weights(ordered, revenue_event)
    if algorithm == AttributionAlgorithm.DATA_DRIVEN:
        return data_driven_weights(ordered)
    raise ValueError(f"Unhandled attribution algorithm: {algorithm}")


# =============================================================================
# Attribution
# =============================================================================


def attribute(
    touchpoints: Sequence[TouchPoint],
    revenue_events: Sequence[RevenueEvent],
    model: Union[AttributionModelDefinition, AttributionAlgorithm, str],
) -> AttributionResult:
    """
    Credit revenue events to touchpoints under one attribution model.

    Inputs are expected to be pre-filtered to the analysis window. Neither
    sequence is modified.

    Args:
        touchpoints: Filtered touchpoints.
        revenue_events: Filtered revenue events.
        model: Model definition, algorithm, or algorithm key. Unknown keys
            resolve to the registry default.

    Returns:
        AttributionResult with per-touchpoint attribution scores and ROI,
        per-event weights, and totals over the full inputs.

    Example:
        >>> result = attribute(touchpoints, events, "linear")
        >>> result.attributionScores["tp-1"]
        0.5
    """
    if isinstance(model, AttributionModelDefinition):
        algorithm = model.algorithm
    else:
        algorithm = get_model(model).algorithm

    total_revenue = float(sum(ev.expected_value for ev in revenue_events))
    total_cost = float(sum(tp.cost for tp in touchpoints))

    if not touchpoints:
        return AttributionResult(totalRevenue=total_revenue, totalCost=total_cost)

    groups = group_touchpoints(touchpoints)
    ordered_groups: Dict[GroupKey, List[TouchPoint]] = {}

    attribution_scores: Dict[str, float] = {}
    touchpoint_roi: Dict[str, float] = {}
    event_weights: Dict[str, Dict[str, float]] = {}
    credited_revenue = 0.0
    skipped_events = 0

    for event in revenue_events:
        key = (event.engagementId, event.clientId)
        if key not in groups:
            skipped_events += 1
            continue

        if key not in ordered_groups:
            ordered_groups[key] = order_touchpoints(groups[key])

        weights = compute_weights(ordered_groups[key], event, algorithm)
        # events sharing an id are merged rather than overwritten
        per_event = event_weights.setdefault(event.id, {})

        for tp, weight in weights:
            attributed_revenue = event.amount * weight * event.probability
            attribution_scores[tp.id] = attribution_scores.get(tp.id, 0.0) + weight
            touchpoint_roi[tp.id] = touchpoint_roi.get(tp.id, 0.0) + (attributed_revenue - tp.cost)
            per_event[tp.id] = per_event.get(tp.id, 0.0) + weight
            credited_revenue += attributed_revenue

    if skipped_events:
        logger.debug(
            f"{skipped_events} of {len(revenue_events)} revenue events had no matching touchpoints"
        )

    return AttributionResult(
        attributionScores=attribution_scores,
        touchPointROI=touchpoint_roi,
        eventWeights=event_weights,
        attributedRevenue=credited_revenue,
        totalRevenue=total_revenue,
        totalCost=total_cost,
    )
