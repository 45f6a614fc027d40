"""Unified configuration management for LocalWork.

Single source of truth for configuration, integrating environment variables,
.env files, and defaults.
"""

from localwork.config.env_loader import Environment, get_environment, load_env_files
from localwork.config.settings import AppConfig, get_settings, load_app_config

__all__ = [
    "AppConfig",
    "get_settings",
    "load_app_config",
    "load_env_files",
    "Environment",
    "get_environment",
]
