"""
Tests for the time-window and client filters.
"""

import os
import time
from datetime import datetime, timedelta, timezone

import pytest

from revops_analytics.models import TimeWindow
from revops_analytics.services.time_window import (
    SUPPORTED_WINDOW_DAYS,
    InvalidWindowError,
    filter_by_client,
    filter_by_window,
    parse_time_window,
    utc_now,
    window_cutoff,
)


class TestParseTimeWindow:

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("30d", 30),
            ("90d", 90),
            ("180d", 180),
            ("1y", 365),
            (" 1Y ", 365),
            (30, 30),
            (365, 365),
            ("180", 180),
            (TimeWindow.LAST_90_DAYS, 90),
        ],
    )
    def test_supported_values(self, value, expected: int) -> None:
        assert parse_time_window(value) == expected

    @pytest.mark.parametrize("value", [0, 7, 60, 366, -30, "2y", "", "ninety", 90.0, True, None])
    def test_unsupported_values_are_rejected(self, value) -> None:
        with pytest.raises(InvalidWindowError):
            parse_time_window(value)

    def test_invalid_window_is_a_value_error(self) -> None:
        with pytest.raises(ValueError, match="Unsupported time window"):
            parse_time_window(45)

    def test_supported_set(self) -> None:
        assert SUPPORTED_WINDOW_DAYS == frozenset({30, 90, 180, 365})


class TestFilterByWindow:

    def test_keeps_records_on_or_after_cutoff(
        self, as_of, make_touchpoint, make_revenue_event
    ) -> None:
        touchpoints = [
            make_touchpoint("old", as_of - timedelta(days=31)),
            make_touchpoint("edge", as_of - timedelta(days=30)),
            make_touchpoint("new", as_of - timedelta(days=1)),
        ]
        events = [
            make_revenue_event("ev-old", as_of - timedelta(days=45), 100.0),
            make_revenue_event("ev-new", as_of - timedelta(days=10), 100.0),
        ]

        kept_tps, kept_events = filter_by_window(touchpoints, events, 30, as_of)

        assert [tp.id for tp in kept_tps] == ["edge", "new"]
        assert [ev.id for ev in kept_events] == ["ev-new"]

    def test_preserves_input_order(self, as_of, make_touchpoint) -> None:
        touchpoints = [
            make_touchpoint("b", as_of - timedelta(days=2)),
            make_touchpoint("a", as_of - timedelta(days=9)),
            make_touchpoint("c", as_of - timedelta(days=5)),
        ]
        kept, _ = filter_by_window(touchpoints, [], 90, as_of)
        assert [tp.id for tp in kept] == ["b", "a", "c"]

    def test_does_not_mutate_inputs(self, as_of, make_touchpoint) -> None:
        touchpoints = [make_touchpoint("old", as_of - timedelta(days=400))]
        filter_by_window(touchpoints, [], 365, as_of)
        assert len(touchpoints) == 1

    def test_empty_inputs(self, as_of) -> None:
        assert filter_by_window([], [], 180, as_of) == ([], [])

    def test_rejects_unsupported_window(self, as_of) -> None:
        with pytest.raises(InvalidWindowError):
            filter_by_window([], [], 45, as_of)

    def test_timezone_aware_timestamps_compare_in_utc(self, make_touchpoint) -> None:
        as_of = datetime(2026, 4, 1, 12, 0, tzinfo=timezone.utc)
        # 2026-03-02T13:00+02:00 is 11:00 UTC, one hour before the 30 day cutoff
        plus_two = timezone(timedelta(hours=2))
        touchpoints = [
            make_touchpoint("early", datetime(2026, 3, 2, 13, 0, tzinfo=plus_two)),
            make_touchpoint("late", datetime(2026, 3, 2, 15, 0, tzinfo=plus_two)),
        ]
        kept, _ = filter_by_window(touchpoints, [], 30, as_of)
        assert [tp.id for tp in kept] == ["late"]

    def test_cutoff(self, as_of) -> None:
        assert window_cutoff(90, as_of) == as_of - timedelta(days=90)


@pytest.fixture(params=["Asia/Tokyo", "UTC", "America/New_York"])
def host_timezone(request):
    """Run the test with the process local timezone set to each zone."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = request.param
    time.tzset()
    yield request.param
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()


class TestDefaultReferenceTime:

    def test_utc_now_is_naive_utc(self, host_timezone) -> None:
        expected = datetime.now(timezone.utc).replace(tzinfo=None)
        assert utc_now().tzinfo is None
        assert abs(utc_now() - expected) < timedelta(minutes=1)

    def test_aware_record_inside_window_is_kept(self, host_timezone, make_touchpoint) -> None:
        # two hours inside the 30 day window, measured in UTC
        stamp = datetime.now(timezone.utc) - timedelta(days=30) + timedelta(hours=2)
        kept, _ = filter_by_window([make_touchpoint("tp", stamp)], [], 30)
        assert [tp.id for tp in kept] == ["tp"]

    def test_aware_record_outside_window_is_dropped(self, host_timezone, make_touchpoint) -> None:
        stamp = datetime.now(timezone.utc) - timedelta(days=30) - timedelta(hours=2)
        kept, _ = filter_by_window([make_touchpoint("tp", stamp)], [], 30)
        assert kept == []

    def test_default_cutoff_tracks_utc(self, host_timezone) -> None:
        expected = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(days=90)
        assert abs(window_cutoff(90) - expected) < timedelta(minutes=1)


class TestFilterByClient:

    def test_restricts_to_one_client(
        self, engagement_touchpoints, engagement_revenue_events
    ) -> None:
        tps, events = filter_by_client(engagement_touchpoints, engagement_revenue_events, "client-2")
        assert {tp.id for tp in tps} == {"tp-5", "tp-6"}
        assert [ev.id for ev in events] == ["rev-2"]

    @pytest.mark.parametrize("client_id", [None, "all"])
    def test_all_clients_keeps_everything(
        self, client_id, engagement_touchpoints, engagement_revenue_events
    ) -> None:
        tps, events = filter_by_client(engagement_touchpoints, engagement_revenue_events, client_id)
        assert len(tps) == len(engagement_touchpoints)
        assert len(events) == len(engagement_revenue_events)
