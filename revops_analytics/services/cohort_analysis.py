"""
Acquisition Cohort Analyzer

Groups clients by the calendar month of their acquisition date and derives a
retention curve, a monthly revenue curve and 12-month churn for each cohort.

Retention Model (placeholder):
    retention[m] = max(0.10, 0.95 - 0.05 * m)

    This is a fixed synthetic curve, not an observation of actual client
    churn. It is identical for every cohort and exists so the dashboard can
    render cohort curves before observed retention is available. Treat the
    outputs as illustrative, not as measured retention.

Per-cohort outputs:
    - clientsAcquired: clients whose acquisition month is the cohort month
    - cumulativeLTV: sum of lifetimeValue
    - averageEngagementValue: cumulativeLTV / clientsAcquired
    - revenue[m]: clientsAcquired x retention[m] x averageEngagementValue / 12
    - churnRate: 1 - retention at month 11

Cohort month keys are YYYY-MM in UTC. Results are ordered ascending by key
and recomputed on every call.
"""

import logging
from typing import List, Sequence

import numpy as np
import pandas as pd

from revops_analytics.models.schemas import Client, CohortAnalysisResponse, CohortData
from revops_analytics.services.time_window import to_utc_naive


logger = logging.getLogger(__name__)


# =============================================================================
# Retention Curve Parameters
# =============================================================================

BASE_RETENTION: float = 0.95
MONTHLY_RETENTION_DECAY: float = 0.05
RETENTION_FLOOR: float = 0.10

DEFAULT_MONTHS_TO_TRACK: int = 12

# Churn is always read at month 11 (the 12th tracked month).
CHURN_MONTH_INDEX: int = 11

MONTHS_PER_YEAR: float = 12.0


def retention_curve(months: int) -> np.ndarray:
    """Placeholder retention fraction for relative months 0..months-1."""
    offsets = np.arange(months, dtype=np.float64)
    return np.maximum(RETENTION_FLOOR, BASE_RETENTION - MONTHLY_RETENTION_DECAY * offsets)


def churn_rate() -> float:
    """12-month churn implied by the retention curve."""
    return 1.0 - float(retention_curve(CHURN_MONTH_INDEX + 1)[CHURN_MONTH_INDEX])


def cohort_month(client: Client) -> str:
    """YYYY-MM key of a client's acquisition date."""
    return to_utc_naive(client.acquisitionDate).strftime("%Y-%m")


def analyze_cohorts(
    clients: Sequence[Client],
    months_to_track: int = DEFAULT_MONTHS_TO_TRACK,
) -> List[CohortData]:
    """
    Build cohort curves from a client snapshot.

    Args:
        clients: Client snapshot. Not modified.
        months_to_track: Length of the retention and revenue curves.

    Returns:
        One CohortData per acquisition month, ascending by month. Empty when
        there are no clients.

    Raises:
        ValueError: If months_to_track is less than 1.

    Example:
        >>> cohorts = analyze_cohorts([Client(id="c1", acquisitionDate=datetime(2025, 11, 3),
        ...                                   lifetimeValue=12000.0)])
        >>> cohorts[0].revenue[0]
        950.0
    """
    if months_to_track < 1:
        raise ValueError(f"months_to_track must be at least 1, got {months_to_track}")

    if not clients:
        return []

    frame = pd.DataFrame(
        {
            "cohortMonth": [cohort_month(client) for client in clients],
            "lifetimeValue": [client.lifetimeValue for client in clients],
        }
    )
    grouped = frame.groupby("cohortMonth", sort=True)["lifetimeValue"].agg(["count", "sum"])

    retention = retention_curve(months_to_track)
    churn = churn_rate()

    cohorts: List[CohortData] = []
    for month_key, row in grouped.iterrows():
        clients_acquired = int(row["count"])
        cumulative_ltv = float(row["sum"])
        average_value = cumulative_ltv / clients_acquired

        revenue = clients_acquired * retention * (average_value / MONTHS_PER_YEAR)

        cohorts.append(
            CohortData(
                cohortMonth=str(month_key),
                clientsAcquired=clients_acquired,
                retention=[float(r) for r in retention],
                revenue=[float(r) for r in revenue],
                cumulativeLTV=cumulative_ltv,
                averageEngagementValue=average_value,
                churnRate=churn,
            )
        )

    logger.debug(f"Built {len(cohorts)} cohorts from {len(clients)} clients")
    return cohorts


def build_cohort_report(
    clients: Sequence[Client],
    months_to_track: int = DEFAULT_MONTHS_TO_TRACK,
) -> CohortAnalysisResponse:
    """Wrap analyze_cohorts output with the horizon and client total."""
    cohorts = analyze_cohorts(clients, months_to_track)
    return CohortAnalysisResponse(
        monthsToTrack=months_to_track,
        totalClients=sum(cohort.clientsAcquired for cohort in cohorts),
        cohorts=cohorts,
    )
