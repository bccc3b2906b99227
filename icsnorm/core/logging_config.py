"""
Central logging configuration for icsnorm.

Keeps icsnorm diagnostics (dropped events, reconciliation warnings) visible
while quieting third-party parser libraries.
"""

import logging
import os
from typing import Optional

# Third-party loggers that are noisy at DEBUG level
THIRD_PARTY_LOGGERS: dict[str, int] = {
    "icalendar": logging.WARNING,
    "dateutil": logging.WARNING,
}

PACKAGE_LOGGERS = [
    "icsnorm",
    "icsnorm.calendar",
    "icsnorm.core",
]


def configure_logging(debug_mode: bool = False, force_debug: Optional[bool] = None) -> None:
    """
    Configure logging levels for icsnorm.

    Args:
        debug_mode: Whether to enable debug logging for icsnorm modules
        force_debug: Override debug mode setting (None to use env var detection)

    Environment Variables:
        ICSNORM_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        ICSNORM_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("ICSNORM_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("ICSNORM_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s")
        )
        root_logger.addHandler(handler)

    logger_config = dict(THIRD_PARTY_LOGGERS)
    package_level = logging.DEBUG if final_debug else logging.INFO
    for module in PACKAGE_LOGGERS:
        logger_config[module] = package_level

    for logger_name, level in logger_config.items():
        logging.getLogger(logger_name).setLevel(level)

    if final_debug:
        root_logger.debug("Debug logging enabled for icsnorm modules")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}

    for logger_name in [*PACKAGE_LOGGERS[:1], *THIRD_PARTY_LOGGERS]:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)

    return status
