"""Configuration settings using Pydantic Settings.

Controls how the configure helpers copy values and validate field types.

Usage:
    from configure.config import ConfigureSettings, get_settings, use_settings

    # Load from environment variables (CONFIGURE_*)
    settings = get_settings()

    # Temporarily override for a block
    with use_settings(ConfigureSettings(copy_mode="shallow")):
        ...
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

CopyMode = Literal["deep", "shallow"]


class ConfigureSettings(BaseSettings):  # type: ignore[misc]
    """Behaviour switches for the configure helpers.

    Attributes:
        copy_mode: How value-semantics ``then`` copies its receiver. ``deep``
            gives nested mutable fields value semantics too; ``shallow`` shares
            them with the original.
        validate_types: Check values passed to ``set`` against field annotations.
        warn_unresolved_annotations: Emit a RuntimeWarning when a host type's
            annotations cannot be resolved and validation is skipped for it.

    Environment Variables:
        CONFIGURE_COPY_MODE
        CONFIGURE_VALIDATE_TYPES
        CONFIGURE_WARN_UNRESOLVED_ANNOTATIONS
    """

    model_config = SettingsConfigDict(
        env_prefix="CONFIGURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    copy_mode: CopyMode = "deep"
    validate_types: bool = True
    warn_unresolved_annotations: bool = True


# Module-level settings instance, created on first use
_settings: ConfigureSettings | None = None


def get_settings() -> ConfigureSettings:
    """Access the process-wide settings, loading them from the environment once.

    Returns:
        The active ConfigureSettings instance.
    """
    global _settings
    if _settings is None:
        _settings = ConfigureSettings()
    return _settings


@contextmanager
def use_settings(settings: ConfigureSettings) -> Iterator[ConfigureSettings]:
    """Make settings active for the duration of a with-block.

    The previously active settings are restored on exit, also when the block raises.

    Args:
        settings: Settings to activate.

    Yields:
        The activated settings.
    """
    global _settings
    previous = _settings
    _settings = settings
    try:
        yield settings
    finally:
        _settings = previous
