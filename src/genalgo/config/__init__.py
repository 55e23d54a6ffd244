"""Convenience exports for the configuration package."""

from .loader import ConfigError, build_run_configuration, load_config, load_run_configuration
from .logging_conf import JSONFormatter, configure_logging
from .schemas import ConfigurationBuilder, RunConfiguration, RunFileConfig
from .settings import ENV_PREFIX, Settings, get_settings, reset_settings_cache

__all__ = [
    "ConfigError",
    "build_run_configuration",
    "load_config",
    "load_run_configuration",
    "JSONFormatter",
    "configure_logging",
    "ConfigurationBuilder",
    "RunConfiguration",
    "RunFileConfig",
    "ENV_PREFIX",
    "Settings",
    "get_settings",
    "reset_settings_cache",
]
