"""Configuration module using Pydantic Settings.

Usage:
    from configure.config import ConfigureSettings, get_settings, use_settings

    settings = get_settings()
    with use_settings(ConfigureSettings(validate_types=False)):
        ...
"""

from configure.config.settings import ConfigureSettings, CopyMode, get_settings, use_settings

__all__ = [
    "ConfigureSettings",
    "CopyMode",
    "get_settings",
    "use_settings",
]
