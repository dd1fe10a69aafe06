"""Configuration management for compassrule.

This module provides configuration management using Pydantic models.

Key classes:
- SnappingConfig: Snapping threshold settings
- RenderConfig: Marker sizes used for bounding geometry
- LoggingConfig: Logging settings
- CompassruleSettings: Main application settings
"""

from compassrule.config.settings import (
    MIN_DISTANCE,
    CompassruleSettings,
    LoggingConfig,
    RenderConfig,
    SnappingConfig,
    get_default_settings,
)

__all__ = [
    "MIN_DISTANCE",
    "CompassruleSettings",
    "LoggingConfig",
    "RenderConfig",
    "SnappingConfig",
    "get_default_settings",
]
