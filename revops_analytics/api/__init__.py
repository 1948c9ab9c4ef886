"""
API package initialization.

Router modules:
- analytics: Attribution model catalog, attribution analysis, model
  comparison and cohort curves
"""

from fastapi import APIRouter

from revops_analytics.api.analytics import router as analytics_router

api_router = APIRouter()

# analytics router has its own /analytics prefix
api_router.include_router(analytics_router)

__all__ = [
    "api_router",
    "analytics_router",
]
