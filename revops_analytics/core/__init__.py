"""
Core infrastructure package for the analytics service.

Provides:
- Configuration management via pydantic-settings
- FastAPI dependency injection utilities

Re-exports the key components so other modules can write:

    from revops_analytics.core import get_settings, SettingsDep
"""

from revops_analytics.core.config import Settings, get_settings
from revops_analytics.core.dependencies import SettingsDep, get_settings_dependency

__all__ = [
    'Settings',
    'get_settings',
    'get_settings_dependency',
    'SettingsDep',
]
