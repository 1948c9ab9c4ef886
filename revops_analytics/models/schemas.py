"""
Pydantic models for the revenue attribution and cohort analytics engine.

Input records (TouchPoint, RevenueEvent, Client) arrive already materialized
from the surrounding application and are frozen once validated: the engine
never mutates them. Result models are plain data returned by the services
and serialized unchanged by the API layer.

Field names keep the camelCase keys used by the dashboard so that payloads
round-trip without an alias layer.

All models use Pydantic v2 syntax with field validation and examples.
"""

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from revops_analytics.models.enums import (
    ActivityType,
    AttributionAlgorithm,
    DealStage,
    RevenueEventType,
    TouchPointOutcome,
)


# =============================================================================
# Input Records
# =============================================================================


class TouchPoint(BaseModel):
    """
    A single logged sales/marketing interaction.

    leadScore and influenceScore are supplied by the activity log and are
    never derived by this engine.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "id": "tp-001",
                "timestamp": "2026-03-02T15:00:00",
                "type": "demo",
                "engagementId": "eng-42",
                "clientId": "client-7",
                "cost": 1200.0,
                "durationMinutes": 60,
                "participants": ["agent-3", "client-7-cto"],
                "outcome": "positive",
                "leadScore": 72,
                "influenceScore": 0.6,
                "artifacts": ["demo-deck.pdf"],
            }
        },
    )

    id: str = Field(..., min_length=1, description="Unique touchpoint identifier")
    timestamp: datetime = Field(..., description="When the interaction took place")
    type: ActivityType = Field(..., description="Activity type")
    engagementId: str = Field(..., description="Engagement the touchpoint belongs to")
    clientId: str = Field(..., description="Client the touchpoint was held with")
    cost: float = Field(default=0.0, ge=0.0, description="Fully loaded cost of the interaction")
    durationMinutes: int = Field(default=0, ge=0, description="Duration in minutes")
    participants: List[str] = Field(default_factory=list, description="Participant identifiers")
    outcome: TouchPointOutcome = Field(
        default=TouchPointOutcome.NEUTRAL,
        description="Logged outcome of the interaction",
    )
    leadScore: float = Field(default=0.0, ge=0.0, le=100.0, description="Lead score (0-100)")
    influenceScore: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Externally supplied causal-weight signal (0-1)",
    )
    artifacts: List[str] = Field(default_factory=list, description="Documents or deliverables produced")
    nextSteps: List[str] = Field(default_factory=list, description="Agreed follow-up actions")


class RevenueEvent(BaseModel):
    """
    A monetary outcome credited to the touchpoints that preceded it.

    Matching to touchpoints is structural on (engagementId, clientId).
    attributedTouchPoints is carried for display only and is not used for
    matching.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "id": "rev-001",
                "engagementId": "eng-42",
                "clientId": "client-7",
                "timestamp": "2026-03-20T10:00:00",
                "amount": 50000.0,
                "type": "contract_signed",
                "probability": 0.9,
                "stage": "closed_won",
            }
        },
    )

    id: str = Field(..., min_length=1, description="Unique revenue event identifier")
    engagementId: str = Field(..., description="Engagement the revenue belongs to")
    clientId: str = Field(..., description="Client the revenue came from")
    timestamp: datetime = Field(..., description="When the revenue event was recorded")
    amount: float = Field(..., ge=0.0, description="Gross amount")
    type: RevenueEventType = Field(..., description="Revenue event type")
    probability: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Confidence that the amount will be realized (0-1)",
    )
    stage: DealStage = Field(default=DealStage.CLOSED_WON, description="Deal stage")
    attributedTouchPoints: List[str] = Field(
        default_factory=list,
        description="Touchpoint ids the upstream system associated with this event",
    )

    @property
    def expected_value(self) -> float:
        """amount x probability, the value used for all revenue math."""
        return self.amount * self.probability


class Client(BaseModel):
    """Acquisition-cohort subject."""
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "id": "client-7",
                "acquisitionDate": "2025-11-14T00:00:00",
                "lifetimeValue": 12000.0,
                "name": "Northwind",
            }
        },
    )

    id: str = Field(..., min_length=1, description="Unique client identifier")
    acquisitionDate: datetime = Field(..., description="Date the client was acquired")
    lifetimeValue: float = Field(default=0.0, ge=0.0, description="Cumulative realized revenue")
    name: Optional[str] = Field(default=None, description="Display name")
    industry: Optional[str] = Field(default=None, description="Industry label")


# =============================================================================
# Model Registry
# =============================================================================


class AttributionModelDefinition(BaseModel):
    """Static catalog entry describing one attribution model."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name")
    description: str = Field(..., description="One-line description of the credit rule")
    algorithm: AttributionAlgorithm = Field(..., description="Algorithm key")
    weights: Dict[str, float] = Field(default_factory=dict, description="Static model parameters")
    accuracy: float = Field(..., ge=0.0, le=1.0, description="Reported accuracy score")


# =============================================================================
# Attribution Results
# =============================================================================


class AttributionResult(BaseModel):
    """
    Raw output of the attribution calculator.

    attributionScores and touchPointROI accumulate across every revenue event
    that credits a touchpoint. eventWeights keeps the weights assigned for
    each revenue event so that per-event invariants can be inspected; events
    sharing an id have their weights summed under that id.
    """
    attributionScores: Dict[str, float] = Field(
        default_factory=dict,
        description="Cumulative credit weight per touchpoint id",
    )
    touchPointROI: Dict[str, float] = Field(
        default_factory=dict,
        description="Cumulative attributed revenue minus cost per touchpoint id",
    )
    eventWeights: Dict[str, Dict[str, float]] = Field(
        default_factory=dict,
        description="Revenue event id -> touchpoint id -> weight",
    )
    attributedRevenue: float = Field(
        default=0.0,
        description="Expected value credited to touchpoints (amount x weight x probability, summed)",
    )
    totalRevenue: float = Field(default=0.0, description="Sum of expected value over filtered revenue events")
    totalCost: float = Field(default=0.0, description="Sum of cost over filtered touchpoints")


class ActivityROI(BaseModel):
    """ROI rolled up for one activity type."""
    revenue: float = Field(default=0.0, description="Attributed revenue")
    cost: float = Field(default=0.0, ge=0.0, description="Total touchpoint cost")
    count: int = Field(default=0, ge=0, description="Touchpoints with an ROI entry")
    roi: float = Field(default=0.0, description="(revenue - cost) / cost, 0 when cost is 0")
    averageRevenue: float = Field(default=0.0, description="Attributed revenue per touchpoint")


class RankedTouchPoint(BaseModel):
    """One row of the top-touchpoint leaderboard."""
    touchPoint: TouchPoint
    roi: float = Field(..., description="Attributed revenue minus cost")
    attribution: float = Field(..., description="Cumulative credit weight")
    returnOnCost: float = Field(default=0.0, description="roi / cost, 0 when cost is 0")


class ModelComparison(BaseModel):
    """Side-by-side summary of one model over a shared input snapshot."""
    algorithm: AttributionAlgorithm
    name: str
    accuracy: float
    attributedRevenue: float = Field(..., description="Sum of attributed revenue across touchpoints")
    totalWeight: float = Field(..., description="Sum of attribution scores across touchpoints")
    netROI: float = Field(..., description="Sum of per-touchpoint ROI")


class AttributionAnalysis(BaseModel):
    """
    Aggregated output of the attribution pipeline.

    modelFallback is True when the requested model key was not in the
    registry and the default model was used instead.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "algorithm": "data_driven",
                "modelName": "Data-Driven Attribution",
                "modelAccuracy": 0.91,
                "modelFallback": False,
                "windowDays": 90,
                "asOf": "2026-04-01T00:00:00",
                "touchPointCount": 12,
                "revenueEventCount": 3,
                "totalRevenue": 82000.0,
                "totalCost": 9400.0,
                "overallROI": 7.72,
            }
        },
    )

    algorithm: AttributionAlgorithm
    modelName: str
    modelAccuracy: float
    modelFallback: bool = False
    windowDays: int
    asOf: datetime
    clientId: Optional[str] = None
    touchPointCount: int = 0
    revenueEventCount: int = 0
    attributionScores: Dict[str, float] = Field(default_factory=dict)
    touchPointROI: Dict[str, float] = Field(default_factory=dict)
    activityROI: Dict[ActivityType, ActivityROI] = Field(default_factory=dict)
    topTouchPoints: List[RankedTouchPoint] = Field(default_factory=list)
    totalRevenue: float = 0.0
    totalCost: float = 0.0
    overallROI: float = Field(default=0.0, description="(totalRevenue - totalCost) / totalCost, 0 when cost is 0")


# =============================================================================
# Cohort Results
# =============================================================================


class CohortData(BaseModel):
    """
    Retention and revenue curve for one acquisition month.

    retention and revenue are indexed by months since acquisition.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "cohortMonth": "2025-11",
                "clientsAcquired": 1,
                "retention": [0.95, 0.9, 0.85],
                "revenue": [950.0, 900.0, 850.0],
                "cumulativeLTV": 12000.0,
                "averageEngagementValue": 12000.0,
                "churnRate": 0.6,
            }
        },
    )

    cohortMonth: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="YYYY-MM key")
    clientsAcquired: int = Field(..., ge=1)
    retention: List[float] = Field(default_factory=list)
    revenue: List[float] = Field(default_factory=list)
    cumulativeLTV: float = 0.0
    averageEngagementValue: float = 0.0
    churnRate: float = Field(default=0.0, ge=0.0, le=1.0, description="12-month churn")


class CohortAnalysisResponse(BaseModel):
    """Cohort curves plus the totals the dashboard shows above them."""
    monthsToTrack: int
    totalClients: int
    cohorts: List[CohortData] = Field(default_factory=list)


# =============================================================================
# API Requests
# =============================================================================


class AttributionAnalysisRequest(BaseModel):
    """
    Request body for the attribution endpoints.

    Unset options fall back to the configured defaults. timeWindow accepts the
    dashboard labels ("30d", "90d", "180d", "1y") or a day count.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    touchPoints: List[TouchPoint] = Field(default_factory=list)
    revenueEvents: List[RevenueEvent] = Field(default_factory=list)
    model: Optional[str] = Field(default=None, description="Attribution algorithm key")
    timeWindow: Optional[Union[int, str]] = Field(
        default=None,
        description="Trailing window label (\"90d\") or day count (90)",
    )
    topN: Optional[int] = Field(default=None, ge=0, le=1000)
    clientId: Optional[str] = Field(default=None, description="Restrict to one client ('all' for every client)")
    asOf: Optional[datetime] = Field(default=None, description="Reference time for the window; defaults to now")


class CohortAnalysisRequest(BaseModel):
    """Request body for the cohort endpoint."""
    clients: List[Client] = Field(default_factory=list)
    monthsToTrack: Optional[int] = Field(default=None, ge=1, le=120)
