"""
Tests for the touchpoint ranker.
"""

from datetime import datetime

import pytest

from revops_analytics.services.ranking import DEFAULT_TOP_N, top_touchpoints


STAMP = datetime(2026, 3, 1)


@pytest.fixture
def catalog(make_touchpoint):
    return [make_touchpoint(f"tp-{i}", STAMP, cost=100.0 * (i + 1)) for i in range(15)]


class TestTopTouchpoints:

    def test_sorted_by_roi_descending(self, catalog) -> None:
        roi = {"tp-0": 10.0, "tp-1": 500.0, "tp-2": -40.0, "tp-3": 120.0}
        scores = {"tp-0": 0.1, "tp-1": 0.9, "tp-2": 0.3, "tp-3": 0.5}

        ranked = top_touchpoints(catalog, roi, scores)

        assert [item.touchPoint.id for item in ranked] == ["tp-1", "tp-3", "tp-0", "tp-2"]
        assert ranked[0].roi == 500.0
        assert ranked[0].attribution == 0.9

    def test_default_limit_is_ten(self, catalog) -> None:
        roi = {tp.id: float(i) for i, tp in enumerate(catalog)}
        ranked = top_touchpoints(catalog, roi, {})

        assert DEFAULT_TOP_N == 10
        assert len(ranked) == 10
        assert ranked[0].touchPoint.id == "tp-14"

    def test_custom_limit(self, catalog) -> None:
        roi = {tp.id: float(i) for i, tp in enumerate(catalog)}
        assert len(top_touchpoints(catalog, roi, {}, n=3)) == 3
        assert top_touchpoints(catalog, roi, {}, n=0) == []

    def test_ties_keep_input_order(self, catalog) -> None:
        roi = {"tp-4": 50.0, "tp-2": 50.0, "tp-9": 50.0, "tp-1": 75.0}
        ranked = top_touchpoints(catalog, roi, {})
        assert [item.touchPoint.id for item in ranked] == ["tp-1", "tp-4", "tp-2", "tp-9"]

    def test_unresolvable_ids_are_excluded(self, catalog) -> None:
        ranked = top_touchpoints(catalog, {"ghost": 1e6, "tp-0": 1.0}, {"ghost": 1.0})
        assert [item.touchPoint.id for item in ranked] == ["tp-0"]

    def test_missing_attribution_defaults_to_zero(self, catalog) -> None:
        ranked = top_touchpoints(catalog, {"tp-0": 1.0}, {})
        assert ranked[0].attribution == 0.0

    def test_return_on_cost(self, catalog, make_touchpoint) -> None:
        free = make_touchpoint("free", STAMP, cost=0.0)
        ranked = top_touchpoints(catalog + [free], {"tp-1": 400.0, "free": 300.0}, {})

        by_id = {item.touchPoint.id: item for item in ranked}
        # tp-1 cost is 200
        assert by_id["tp-1"].returnOnCost == pytest.approx(2.0)
        assert by_id["free"].returnOnCost == 0.0

    def test_negative_limit_rejected(self, catalog) -> None:
        with pytest.raises(ValueError):
            top_touchpoints(catalog, {}, {}, n=-1)

    def test_empty(self) -> None:
        assert top_touchpoints([], {}, {}) == []
