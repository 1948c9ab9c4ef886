'''
Analytics Engine Test Suite

Test Modules:
-------------
- test_model_registry.py: Catalog contents, lookup, default fallback
- test_time_window.py: Window parsing, cutoff filtering, client filter
- test_attribution.py: Per-model weights, ROI accumulation, totals
- test_activity_roi.py: Activity rollup and zero-cost guard
- test_ranking.py: Leaderboard ordering and exclusion rules
- test_cohort_analysis.py: Cohort grouping, retention curve, churn
- test_pipeline.py: End-to-end attribution analysis and model comparison
- test_api.py: FastAPI routes over ASGITransport

Running Tests:
--------------
    pip install -e ".[test]"
    pytest revops_analytics/tests -v

Configuration:
--------------
See conftest.py for shared fixtures.
'''

__all__ = []
