"""
Enumeration definitions for the revenue attribution and cohort analytics engine.

All enums inherit from both `str` and `Enum` so that Pydantic models serialize
them as their plain string values in API responses and accept the same strings
on input.

Enum groups:
- Activity log: ActivityType, TouchPointOutcome
- Revenue pipeline: RevenueEventType, DealStage
- Attribution: AttributionAlgorithm, TimeWindow
"""

from enum import Enum


class ActivityType(str, Enum):
    """
    Kind of sales/marketing interaction recorded as a touchpoint.

    Values are the activity log's own keys. The data-driven model gives extra
    weight to PROPOSAL, DEMO and NEGOTIATION; every other type is neutral.
    """
    MEETING = "meeting"
    PROPOSAL = "proposal"
    PRESENTATION = "presentation"
    WORKSHOP = "workshop"
    FOLLOW_UP = "follow_up"
    NEGOTIATION = "negotiation"
    DEMO = "demo"
    CONSULTATION = "consultation"


class TouchPointOutcome(str, Enum):
    """
    Qualitative result of a touchpoint as logged by the account owner.

    - positive: moved the deal forward (data-driven multiplier 1.3)
    - neutral: no visible effect (multiplier 1.0)
    - negative: set the deal back (multiplier 0.7)
    """
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class RevenueEventType(str, Enum):
    """Type of monetary outcome recorded against an engagement."""
    CONTRACT_SIGNED = "contract_signed"
    MILESTONE_PAYMENT = "milestone_payment"
    EXPANSION = "expansion"
    RENEWAL = "renewal"
    UPSELL = "upsell"


class DealStage(str, Enum):
    """Pipeline stage of the deal at the time the revenue event was recorded."""
    PROSPECT = "prospect"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed_won"
    CLOSED_LOST = "closed_lost"


class AttributionAlgorithm(str, Enum):
    """
    Algorithm keys for the six supported attribution models.

    - first_touch: 100% credit to the earliest touchpoint
    - last_touch: 100% credit to the latest touchpoint
    - linear: equal credit to every touchpoint
    - position_based: 40% first, 40% last, 20% split across the middle
    - time_decay: weekly exponential decay (rate 0.7) before the revenue event
    - data_driven: influence-score weighting with outcome/type multipliers,
      intentionally not renormalized to 1
    """
    FIRST_TOUCH = "first_touch"
    LAST_TOUCH = "last_touch"
    LINEAR = "linear"
    POSITION_BASED = "position_based"
    TIME_DECAY = "time_decay"
    DATA_DRIVEN = "data_driven"


class TimeWindow(str, Enum):
    """
    Trailing analysis periods offered by the dashboard timeframe selector.

    Each label maps to a day count through the `days` property; those day
    counts are the only windows the time-window filter accepts.
    """
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    LAST_180_DAYS = "180d"
    LAST_YEAR = "1y"

    @property
    def days(self) -> int:
        return {
            TimeWindow.LAST_30_DAYS: 30,
            TimeWindow.LAST_90_DAYS: 90,
            TimeWindow.LAST_180_DAYS: 180,
            TimeWindow.LAST_YEAR: 365,
        }[self]
