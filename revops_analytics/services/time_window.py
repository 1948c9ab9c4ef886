"""
Time-Window Filter Service

Restricts touchpoints and revenue events to a trailing period ending at a
reference time (as_of). Only the dashboard's four periods are accepted:
30, 90, 180 and 365 days. Any other value is rejected with
InvalidWindowError rather than clamped to the nearest supported window.

Timezone-aware timestamps are compared in UTC; naive timestamps are taken
as UTC. When as_of is omitted the reference time is the current UTC time,
so the window does not depend on the host timezone.
"""

from datetime import datetime, timedelta, timezone
from typing import FrozenSet, List, Optional, Sequence, Tuple, Union

from revops_analytics.models.enums import TimeWindow
from revops_analytics.models.schemas import RevenueEvent, TouchPoint


SUPPORTED_WINDOW_DAYS: FrozenSet[int] = frozenset(w.days for w in TimeWindow)

# Client selector value meaning "no client restriction".
ALL_CLIENTS: str = "all"


class InvalidWindowError(ValueError):
    """Raised for a time window outside SUPPORTED_WINDOW_DAYS."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Unsupported time window: {value!r}. "
            f"Valid values: {sorted(SUPPORTED_WINDOW_DAYS)} days or "
            f"{[w.value for w in TimeWindow]}"
        )


def parse_time_window(value: Union[str, int, TimeWindow]) -> int:
    """
    Convert a window label or day count to a validated day count.

    Args:
        value: A TimeWindow, a label such as "90d" or "1y", or a day count
            (int or numeric string).

    Returns:
        Number of days in the window.

    Raises:
        InvalidWindowError: If the value does not name a supported window.
    """
    if isinstance(value, TimeWindow):
        return value.days
    if isinstance(value, bool):
        raise InvalidWindowError(value)
    if isinstance(value, int):
        days = value
    elif isinstance(value, str):
        label = value.strip().lower()
        try:
            return TimeWindow(label).days
        except ValueError:
            pass
        if not label.isdigit():
            raise InvalidWindowError(value)
        days = int(label)
    else:
        raise InvalidWindowError(value)

    if days not in SUPPORTED_WINDOW_DAYS:
        raise InvalidWindowError(value)
    return days


def to_utc_naive(ts: datetime) -> datetime:
    """Drop tzinfo after converting aware timestamps to UTC."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now() -> datetime:
    """Current time as a naive UTC timestamp."""
    return to_utc_naive(datetime.now(timezone.utc))


def window_cutoff(window_days: int, as_of: Optional[datetime] = None) -> datetime:
    """Return the earliest timestamp kept by a window ending at as_of."""
    if window_days not in SUPPORTED_WINDOW_DAYS:
        raise InvalidWindowError(window_days)
    reference = as_of if as_of is not None else utc_now()
    return to_utc_naive(reference) - timedelta(days=window_days)


def filter_by_window(
    touchpoints: Sequence[TouchPoint],
    revenue_events: Sequence[RevenueEvent],
    window_days: int,
    as_of: Optional[datetime] = None,
) -> Tuple[List[TouchPoint], List[RevenueEvent]]:
    """
    Keep only records whose timestamp is on or after as_of - window_days.

    Args:
        touchpoints: Touchpoint snapshot.
        revenue_events: Revenue event snapshot.
        window_days: One of 30, 90, 180, 365.
        as_of: End of the window; defaults to now.

    Returns:
        Tuple of (touchpoints, revenue_events) inside the window, in their
        original order.

    Raises:
        InvalidWindowError: If window_days is not a supported window.
    """
    cutoff = window_cutoff(window_days, as_of)

    kept_touchpoints = [tp for tp in touchpoints if to_utc_naive(tp.timestamp) >= cutoff]
    kept_events = [ev for ev in revenue_events if to_utc_naive(ev.timestamp) >= cutoff]
    return kept_touchpoints, kept_events


def filter_by_client(
    touchpoints: Sequence[TouchPoint],
    revenue_events: Sequence[RevenueEvent],
    client_id: Optional[str] = None,
) -> Tuple[List[TouchPoint], List[RevenueEvent]]:
    """
    Keep only records for one client.

    A client_id of None or "all" keeps every record.
    """
    if client_id is None or client_id == ALL_CLIENTS:
        return list(touchpoints), list(revenue_events)

    return (
        [tp for tp in touchpoints if tp.clientId == client_id],
        [ev for ev in revenue_events if ev.clientId == client_id],
    )
