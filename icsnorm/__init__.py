"""icsnorm - normalize iCalendar documents into single/recurring event records.

Typical use::

    from icsnorm import get_events_from_ics

    records = get_events_from_ics(ics_text)
    payload = [record.to_dict() for record in records]
"""

__version__ = "0.1.0"

from typing import Optional

from icsnorm.calendar.models import (
    CalendarEventRecord,
    EventRecord,
    RecurringEventRecord,
    SingleEventRecord,
    event_record_from_dict,
)
from icsnorm.calendar.parser import ICSNormalizer, get_events_from_ics, parse_calendar
from icsnorm.calendar.validation import validate_event
from icsnorm.core.exceptions import ICSNormError, ICSParseError, RecurrenceRuleError

__all__ = [
    "CalendarEventRecord",
    "EventRecord",
    "ICSNormError",
    "ICSNormalizer",
    "ICSParseError",
    "RecurrenceRuleError",
    "RecurringEventRecord",
    "SingleEventRecord",
    "event_record_from_dict",
    "get_events_from_ics",
    "parse_calendar",
    "validate_event",
]


def _init_logging(level_name: Optional[str]) -> None:
    """Initialize root logging to stream to console.

    Honors the ICSNORM_DEBUG environment variable (truthy values: "1", "true",
    "yes", "on") which forces DEBUG verbosity so that dropped-event diagnostics
    become visible without changing code.
    """
    import logging
    import os
    import sys

    from colorlog import ColoredFormatter

    debug_env = os.environ.get("ICSNORM_DEBUG", "")
    if debug_env.strip().lower() in ("1", "true", "yes", "on"):
        level_name = "DEBUG"

    root = logging.getLogger()
    # Only configure a handler if none is present to avoid duplicate output.
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        # HH:MM:SS  LEVEL   logger.name: message (only the level is colorized)
        fmt = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
        log_colors = {
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        }
        handler.setFormatter(ColoredFormatter(fmt, datefmt="%H:%M:%S", log_colors=log_colors))
        root.addHandler(handler)

    level = logging.INFO
    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), logging.INFO)
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )
