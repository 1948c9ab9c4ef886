"""
Settings and environment management for the analytics service.

Configuration is loaded with pydantic-settings from environment variables and
an optional .env file. Only the HTTP layer reads these settings: they supply
the defaults applied when a request leaves an option unset. The engine
functions in revops_analytics.services take every parameter explicitly and
never read the environment.

Environment Variables:
- APP_NAME: Service name reported by the root endpoint
- DEFAULT_ATTRIBUTION_MODEL: Algorithm key used when a request omits one (default: data_driven)
- DEFAULT_TIME_WINDOW: Window label or day count used when a request omits one (default: 90d)
- DEFAULT_TOP_N: Leaderboard size (default: 10)
- COHORT_MONTHS_TO_TRACK: Cohort curve horizon in months (default: 12)
- CORS_ORIGINS: JSON list of allowed browser origins
- LOG_LEVEL: Root log level (default: INFO)

Usage:
    from revops_analytics.core.config import get_settings

    settings = get_settings()
    model_key = settings.default_attribution_model
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service settings loaded from environment variables.

    Attributes:
        app_name: Name reported by the root endpoint.
        default_attribution_model: Algorithm key applied when a request omits
            the model. Unknown keys still fall back to data_driven at run time.
        default_time_window: Window label ("30d", "90d", "180d", "1y") or day
            count applied when a request omits the window.
        default_top_n: Number of touchpoints in the leaderboard.
        cohort_months_to_track: Length of cohort retention/revenue curves.
        cors_origins: Origins allowed to call the API from a browser.
        log_level: Root logging level.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    app_name: str = 'RevOps Attribution Analytics'

    # =========================================================================
    # Request Defaults
    # =========================================================================

    # Matches the model preselected on the attribution view
    default_attribution_model: str = 'data_driven'

    default_time_window: str = '90d'

    default_top_n: int = Field(default=10, ge=0)

    cohort_months_to_track: int = Field(default=12, ge=1)

    # =========================================================================
    # Web Server
    # =========================================================================

    cors_origins: List[str] = [
        'http://localhost:3000',
        'http://127.0.0.1:3000',
    ]

    log_level: str = 'INFO'


@lru_cache()
def get_settings() -> Settings:
    """
    Get the cached settings singleton.

    Environment variables are read once per process. Tests that change the
    environment should call get_settings.cache_clear().

    Raises:
        pydantic.ValidationError: If an environment variable has an invalid
            value (e.g. DEFAULT_TOP_N=-1).
    """
    return Settings()
