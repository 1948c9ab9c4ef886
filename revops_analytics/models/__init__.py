"""
Package initialization file for engine models.

Re-exports the Pydantic schemas and enumerations from schemas.py and enums.py
so that services, routers and tests can import them from
revops_analytics.models directly.

Usage:
    from revops_analytics.models import (
        ActivityType,
        AttributionAlgorithm,
        TouchPoint,
        RevenueEvent,
        CohortData,
    )
"""

# =============================================================================
# Enums
# =============================================================================

from revops_analytics.models.enums import (
    ActivityType,
    AttributionAlgorithm,
    DealStage,
    RevenueEventType,
    TimeWindow,
    TouchPointOutcome,
)

# =============================================================================
# Schemas
# =============================================================================

from revops_analytics.models.schemas import (
    # Input records
    TouchPoint,
    RevenueEvent,
    Client,
    # Registry
    AttributionModelDefinition,
    # Attribution results
    AttributionResult,
    ActivityROI,
    RankedTouchPoint,
    ModelComparison,
    AttributionAnalysis,
    # Cohort results
    CohortData,
    CohortAnalysisResponse,
    # API requests
    AttributionAnalysisRequest,
    CohortAnalysisRequest,
)

__all__ = [
    # Enums
    "ActivityType",
    "AttributionAlgorithm",
    "DealStage",
    "RevenueEventType",
    "TimeWindow",
    "TouchPointOutcome",
    # Input records
    "TouchPoint",
    "RevenueEvent",
    "Client",
    # Registry
    "AttributionModelDefinition",
    # Attribution results
    "AttributionResult",
    "ActivityROI",
    "RankedTouchPoint",
    "ModelComparison",
    "AttributionAnalysis",
    # Cohort results
    "CohortData",
    "CohortAnalysisResponse",
    # API requests
    "AttributionAnalysisRequest",
    "CohortAnalysisRequest",
]
