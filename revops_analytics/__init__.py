"""
RevOps Analytics Package.

Multi-touch attribution and acquisition cohort analytics engine for the
revenue-operations dashboard, with a thin FastAPI layer over it.

Subpackages:
    - models: Pydantic schemas and enums
    - services: Attribution, ROI, ranking and cohort computations
    - api: FastAPI route handlers
    - core: Configuration and dependencies
"""

__version__ = "1.0.0"
