"""
FastAPI dependency injection for the analytics service.

Routes receive configuration through SettingsDep instead of calling
get_settings() directly, so tests can swap settings with
app.dependency_overrides[get_settings_dependency].

Usage:
    @router.post("/attribution")
    async def analyze(request: AttributionAnalysisRequest, settings: SettingsDep):
        top_n = request.topN if request.topN is not None else settings.default_top_n
"""

from typing import Annotated

from fastapi import Depends

from revops_analytics.core.config import Settings, get_settings


def get_settings_dependency() -> Settings:
    """Return the cached Settings singleton."""
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]
