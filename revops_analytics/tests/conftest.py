"""
Pytest Configuration and Shared Fixtures for the analytics engine tests.

Provides:
- Custom marker registration
- A fixed reference time so window filtering is deterministic
- Factories for TouchPoint, RevenueEvent and Client records
- A small multi-engagement dataset shared by pipeline and API tests

Dependencies:
- pytest
- pytest-asyncio (API tests)
- httpx (API tests, via ASGITransport)
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List

import pytest

from revops_analytics.models import (
    ActivityType,
    Client,
    RevenueEvent,
    RevenueEventType,
    TouchPoint,
    TouchPointOutcome,
)


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Register custom markers.

    - slow: marks tests as slow (deselect with -m "not slow")
    - api: marks tests exercising the HTTP layer
    """
    config.addinivalue_line(
        'markers',
        'slow: marks tests as slow (deselect with -m "not slow")'
    )
    config.addinivalue_line(
        'markers',
        'api: marks tests exercising the FastAPI routes'
    )


# ============================================================
# REFERENCE TIME
# ============================================================

@pytest.fixture
def as_of() -> datetime:
    """Fixed end of the analysis window."""
    return datetime(2026, 4, 1, 12, 0, 0)


# ============================================================
# RECORD FACTORIES
# ============================================================

@pytest.fixture
def make_touchpoint() -> Callable[..., TouchPoint]:
    """
    Factory for TouchPoint records with sensible defaults.

    Usage:
        tp = make_touchpoint("tp-1", datetime(2026, 3, 1), cost=500.0)
    """
    def _make(
        tp_id: str,
        timestamp: datetime,
        engagement_id: str = "eng-1",
        client_id: str = "client-1",
        activity_type: ActivityType = ActivityType.MEETING,
        cost: float = 100.0,
        outcome: TouchPointOutcome = TouchPointOutcome.NEUTRAL,
        influence: float = 0.5,
        **overrides: Any,
    ) -> TouchPoint:
        fields: Dict[str, Any] = {
            "id": tp_id,
            "timestamp": timestamp,
            "type": activity_type,
            "engagementId": engagement_id,
            "clientId": client_id,
            "cost": cost,
            "durationMinutes": 45,
            "participants": ["agent-1"],
            "outcome": outcome,
            "leadScore": 60,
            "influenceScore": influence,
            "artifacts": [],
        }
        fields.update(overrides)
        return TouchPoint(**fields)

    return _make


@pytest.fixture
def make_revenue_event() -> Callable[..., RevenueEvent]:
    """Factory for RevenueEvent records."""
    def _make(
        event_id: str,
        timestamp: datetime,
        amount: float,
        engagement_id: str = "eng-1",
        client_id: str = "client-1",
        probability: float = 1.0,
        event_type: RevenueEventType = RevenueEventType.CONTRACT_SIGNED,
    ) -> RevenueEvent:
        return RevenueEvent(
            id=event_id,
            engagementId=engagement_id,
            clientId=client_id,
            timestamp=timestamp,
            amount=amount,
            type=event_type,
            probability=probability,
        )

    return _make


@pytest.fixture
def make_client() -> Callable[..., Client]:
    """Factory for Client records."""
    def _make(client_id: str, acquired: datetime, lifetime_value: float) -> Client:
        return Client(id=client_id, acquisitionDate=acquired, lifetimeValue=lifetime_value)

    return _make


# ============================================================
# SHARED DATASET
# ============================================================

@pytest.fixture
def engagement_touchpoints(as_of: datetime, make_touchpoint) -> List[TouchPoint]:
    """
    Touchpoints for two engagements plus one stale record.

    eng-1/client-1: meeting (-40d), demo (-25d), proposal (-12d), negotiation (-5d)
    eng-2/client-2: workshop (-20d), follow_up (-8d)
    eng-3/client-3: consultation (-200d), outside a 90 day window
    """
    return [
        make_touchpoint("tp-1", as_of - timedelta(days=40), activity_type=ActivityType.MEETING,
                        cost=200.0, influence=0.3),
        make_touchpoint("tp-2", as_of - timedelta(days=25), activity_type=ActivityType.DEMO,
                        cost=800.0, outcome=TouchPointOutcome.POSITIVE, influence=0.6),
        make_touchpoint("tp-3", as_of - timedelta(days=12), activity_type=ActivityType.PROPOSAL,
                        cost=1500.0, outcome=TouchPointOutcome.POSITIVE, influence=0.8),
        make_touchpoint("tp-4", as_of - timedelta(days=5), activity_type=ActivityType.NEGOTIATION,
                        cost=500.0, influence=0.7),
        make_touchpoint("tp-5", as_of - timedelta(days=20), engagement_id="eng-2",
                        client_id="client-2", activity_type=ActivityType.WORKSHOP,
                        cost=2500.0, outcome=TouchPointOutcome.NEGATIVE, influence=0.4),
        make_touchpoint("tp-6", as_of - timedelta(days=8), engagement_id="eng-2",
                        client_id="client-2", activity_type=ActivityType.FOLLOW_UP,
                        cost=0.0, influence=0.2),
        make_touchpoint("tp-7", as_of - timedelta(days=200), engagement_id="eng-3",
                        client_id="client-3", activity_type=ActivityType.CONSULTATION,
                        cost=300.0, influence=0.9),
    ]


@pytest.fixture
def engagement_revenue_events(as_of: datetime, make_revenue_event) -> List[RevenueEvent]:
    """
    Revenue events: one per live engagement plus one with no touchpoints.
    """
    return [
        make_revenue_event("rev-1", as_of - timedelta(days=2), 40000.0, probability=0.9),
        make_revenue_event("rev-2", as_of - timedelta(days=1), 10000.0, engagement_id="eng-2",
                           client_id="client-2", probability=0.5,
                           event_type=RevenueEventType.MILESTONE_PAYMENT),
        make_revenue_event("rev-3", as_of - timedelta(days=3), 7000.0, engagement_id="eng-9",
                           client_id="client-9", probability=1.0,
                           event_type=RevenueEventType.UPSELL),
    ]
