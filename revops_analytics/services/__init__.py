"""
Analytics Services Module

Pure, synchronous computations over immutable input snapshots. No service
holds state between calls, performs I/O, or mutates its inputs, so every
function is safe to call concurrently with separate snapshots.

Services:
- model_registry: Static catalog of the six attribution models
- time_window: Trailing-window and client filters
- attribution: Per-touchpoint credit weights and ROI
- activity_roi: ROI rollup by activity type
- ranking: Top touchpoints by ROI
- cohort_analysis: Acquisition cohort retention/LTV curves
- pipeline: End-to-end attribution analysis and model comparison
"""

# =============================================================================
# Model Registry Exports
# =============================================================================

from revops_analytics.services.model_registry import (
    DEFAULT_ALGORITHM,
    MODEL_REGISTRY,
    TIME_DECAY_RATE,
    get_model,
    list_models,
    resolve_model,
)

# =============================================================================
# Time-Window Filter Exports
# =============================================================================

from revops_analytics.services.time_window import (
    SUPPORTED_WINDOW_DAYS,
    InvalidWindowError,
    filter_by_client,
    filter_by_window,
    parse_time_window,
    utc_now,
)

# =============================================================================
# Attribution Calculator Exports
# =============================================================================

from revops_analytics.services.attribution import (
    attribute,
    compute_weights,
    group_touchpoints,
    order_touchpoints,
)

# =============================================================================
# Aggregation and Ranking Exports
# =============================================================================

from revops_analytics.services.activity_roi import aggregate_by_activity
from revops_analytics.services.ranking import DEFAULT_TOP_N, top_touchpoints

# =============================================================================
# Cohort Analyzer Exports
# =============================================================================

from revops_analytics.services.cohort_analysis import (
    DEFAULT_MONTHS_TO_TRACK,
    analyze_cohorts,
    build_cohort_report,
    retention_curve,
)

# =============================================================================
# Pipeline Exports
# =============================================================================

from revops_analytics.services.pipeline import compare_models, run_attribution_analysis

__all__ = [
    # Model registry
    "DEFAULT_ALGORITHM",
    "MODEL_REGISTRY",
    "TIME_DECAY_RATE",
    "get_model",
    "list_models",
    "resolve_model",
    # Time window
    "SUPPORTED_WINDOW_DAYS",
    "InvalidWindowError",
    "filter_by_client",
    "filter_by_window",
    "parse_time_window",
    "utc_now",
    # Attribution
    "attribute",
    "compute_weights",
    "group_touchpoints",
    "order_touchpoints",
    # Aggregation and ranking
    "aggregate_by_activity",
    "DEFAULT_TOP_N",
    "top_touchpoints",
    # Cohorts
    "DEFAULT_MONTHS_TO_TRACK",
    "analyze_cohorts",
    "build_cohort_report",
    "retention_curve",
    # Pipeline
    "compare_models",
    "run_attribution_analysis",
]
