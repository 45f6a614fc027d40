"""Structured logging configuration using structlog.

This module configures structlog for structured logging with:
- JSON formatter for file output (rotated)
- Console output on stderr, pretty-printed or JSON per log_format
- UTC timestamps
- Component tracking derived from the logger name

Library modules only call get_logger(); nothing is configured on import.
Entry points (the CLI, or a hosting application) call configure_logging()
once at startup. Until then events go to structlog's defaults.
"""

import logging
import logging.handlers
import pathlib
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

# Handlers added to the root logger by configure_logging(); only these are
# replaced on reconfiguration.
_installed_handlers: list[logging.Handler] = []


def _get_log_level() -> str:
    """Get log level from the environment.

    Returns:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    # Bootstrap from environment to avoid circular imports during startup.
    from localwork.config.bootstrap import get_bootstrap_log_level  # noqa: PLC0415

    return get_bootstrap_log_level()


def _load_settings() -> Any:
    """Load settings, or None if they fail to validate."""
    try:
        from localwork.config.settings import get_settings  # noqa: PLC0415

        return get_settings()
    except Exception:
        return None


def _get_log_dir() -> pathlib.Path | None:
    """Get log directory path, or None when file logging is disabled.

    Returns:
        Path to the log directory, or None.
    """
    settings = _load_settings()
    if settings is None:
        # Settings failed to load (e.g. invalid env); fall back to project default
        project_root = pathlib.Path(__file__).parent.parent.parent.parent
        return project_root / "telemetry" / "logs"
    if not settings.log_to_file:
        return None
    return pathlib.Path(str(settings.log_dir))


def _get_console_options() -> tuple[str, bool]:
    """Get (log_format, debug) for the console handler."""
    settings = _load_settings()
    if settings is None:
        return "console", False
    return settings.log_format, settings.debug


def _add_timestamp(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add UTC timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_component(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name (last segment of the logger name) to a stdlib log event."""
    if logger is None or not hasattr(logger, "name"):
        event_dict["component"] = "unknown"
        return event_dict

    event_dict["component"] = logger.name.split(".")[-1]
    return event_dict


def _add_component_from_event_dict(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add component name to log event from the logger name in event_dict.

    Runs after structlog's add_logger_name processor, so "localwork.files.operations"
    becomes component "operations".
    """
    logger_name = event_dict.get("logger", "")
    event_dict["component"] = logger_name.split(".")[-1] if logger_name else "unknown"
    return event_dict


_FOREIGN_PRE_CHAIN = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    _add_timestamp,
    _add_component,
]


def _configure_file_handler(log_dir: pathlib.Path) -> logging.handlers.RotatingFileHandler:
    """Configure rotating file handler for JSON logs.

    Args:
        log_dir: Directory for log files.

    Returns:
        Configured RotatingFileHandler.

    Raises:
        OSError: If the directory or file cannot be created.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=str(log_dir / "current.jsonl"),
        maxBytes=20 * 1024 * 1024,  # 20 MB
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_FOREIGN_PRE_CHAIN,  # type: ignore[arg-type]
        )
    )
    return handler


def _configure_console_handler(log_format: str) -> logging.StreamHandler[Any]:
    """Configure the stderr handler: colored key-value lines, or JSON lines."""
    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_FOREIGN_PRE_CHAIN,  # type: ignore[arg-type]
        )
    )
    return handler


def configure_logging() -> None:
    """Configure structlog for structured logging.

    Call once at application startup. Sets up JSON file output (unless
    disabled in settings) and console output on stderr. Handlers installed
    by the host on the root logger are left alone; calling this again only
    replaces the handlers a previous call added.
    """
    log_level = _get_log_level()
    log_dir = _get_log_dir()
    log_format, debug = _get_console_options()

    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    # Root logger accepts all levels; individual handlers gate output.
    root_logger.setLevel(logging.DEBUG)

    configured_level = logging.DEBUG if debug else getattr(logging, log_level, logging.INFO)

    file_error: OSError | None = None
    if log_dir is not None:
        try:
            file_handler = _configure_file_handler(log_dir)
        except OSError as e:
            file_error = e
        else:
            # File handler captures INFO+ regardless of the console level
            file_handler.setLevel(logging.INFO)
            _installed_handlers.append(file_handler)

    console_handler = _configure_console_handler(log_format)
    console_handler.setLevel(configured_level)
    _installed_handlers.append(console_handler)

    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            _add_component_from_event_dict,  # type: ignore[list-item]
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if file_error is not None:
        structlog.get_logger(__name__).warning(
            "file_logging_disabled", log_dir=str(log_dir), error=str(file_error)
        )


def get_logger(name: str) -> Any:  # Returns structlog.stdlib.BoundLogger
    """Get a structured logger instance.

    Does not configure logging; the returned proxy picks up whatever
    configuration is in place when it is first used.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        structlog logger proxy.

    Example:
        >>> from localwork.telemetry import get_logger
        >>> log = get_logger(__name__)
        >>> log.info("grant_added", grant_id="123", root_path="/tmp/ws")
    """
    return structlog.get_logger(name)
