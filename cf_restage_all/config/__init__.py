"""Configuration package for runtime settings and startup validation."""

from .settings import (
    PlatformSettings,
    PlatformTarget,
    SettingsLoadError,
    config_cli_config_path,
    config_load_settings,
    config_resolve_platform_target,
)

__all__ = [
    "PlatformSettings",
    "PlatformTarget",
    "SettingsLoadError",
    "config_cli_config_path",
    "config_load_settings",
    "config_resolve_platform_target",
]
