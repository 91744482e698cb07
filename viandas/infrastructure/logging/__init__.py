"""
Logging Infrastructure

Standard library logging handlers plus structlog structured loggers.
"""

from .logger_config import (
    LoggingConfig,
    LoggingConfigOptions,
    get_structured_logger,
    options_from_settings,
    setup_logging,
)

__all__ = [
    "LoggingConfig",
    "LoggingConfigOptions",
    "get_structured_logger",
    "options_from_settings",
    "setup_logging",
]
