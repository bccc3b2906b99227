"""Default record validator for icsnorm.

A validator is any callable ``validate(record) -> record | None``; records
for which it returns None are dropped from the output. ``validate_event``
checks the shape expected by calendar views consuming these records.
"""

import logging
import re
from datetime import date
from typing import Callable, Optional

from .models import EventRecord, RecurringEventRecord

logger = logging.getLogger(__name__)

Validator = Callable[[EventRecord], Optional[EventRecord]]

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")


def is_valid_date(value: Optional[str]) -> bool:
    """Check for an existing calendar date in YYYY-MM-DD form."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_time(value: Optional[str]) -> bool:
    """Check for a 24-hour HH:MM time."""
    return isinstance(value, str) and bool(_TIME_RE.match(value))


def collect_validation_errors(record: EventRecord) -> list[str]:
    """Return every problem found in a record (empty when valid).

    Args:
        record: Normalized event record

    Returns:
        List of human-readable problems
    """
    errors: list[str] = []

    if not isinstance(record.title, str):
        errors.append("missing title")

    if not record.all_day:
        if not is_valid_time(record.start_time):
            errors.append(f"invalid startTime {record.start_time!r}")
        if record.end_time is not None and not is_valid_time(record.end_time):
            errors.append(f"invalid endTime {record.end_time!r}")

    if isinstance(record, RecurringEventRecord):
        if not is_valid_date(record.start_date):
            errors.append(f"invalid startDate {record.start_date!r}")
        if not record.rrule:
            errors.append("empty rrule")
        errors.extend(f"invalid skipDate {d!r}" for d in record.skip_dates if not is_valid_date(d))
    else:
        if not is_valid_date(record.date):
            errors.append(f"invalid date {record.date!r}")
        if record.end_date is not None and not is_valid_date(record.end_date):
            errors.append(f"invalid endDate {record.end_date!r}")

    return errors


def validate_event(record: EventRecord) -> Optional[EventRecord]:
    """Return the record if it is well-formed, else None.

    Args:
        record: Normalized event record

    Returns:
        The same record, or None when it should be dropped
    """
    errors = collect_validation_errors(record)
    if errors:
        logger.debug("Dropping invalid event %s: %s", record.id, "; ".join(errors))
        return None
    return record
