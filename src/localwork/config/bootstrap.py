"""Bootstrap configuration helpers (pre-settings).

These helpers exist for "chicken-and-egg" situations where a small amount of
configuration is needed before the settings singleton can be imported.

Keep this module dependency-light (no telemetry imports) to avoid circular imports.
"""

from __future__ import annotations

import os

from localwork.config.validators import validate_log_level


def get_bootstrap_log_level(default: str = "INFO") -> str:
    """Get logging level from environment without importing settings.

    Args:
        default: Default log level if not set or invalid.

    Returns:
        Uppercased, validated log level string.
    """
    value = os.getenv("APP_LOG_LEVEL", default)
    try:
        return validate_log_level(value)
    except ValueError:
        return validate_log_level(default)
