"""Instant to civil date/time conversion for icsnorm.

All conversions go through one resolved zone per document. Date-only values
are zone-invariant: all-day events are always normalized in UTC.
"""

from datetime import date, datetime, time
from typing import Union

from icsnorm.core.timezone_utils import UTC_TIMEZONE, ResolvedTimezone

DateOrDateTime = Union[date, datetime]

# Time-of-day reported for date-only values
MIDNIGHT = "00:00"


def zone_for_event(all_day: bool, tz: ResolvedTimezone) -> ResolvedTimezone:
    """Return the zone used for an event's conversions.

    All-day events ignore the document zone so their dates never shift.
    """
    return UTC_TIMEZONE if all_day else tz


def to_civil(value: DateOrDateTime, tz: ResolvedTimezone) -> datetime:
    """Convert an iCalendar date/datetime value to a civil datetime in ``tz``.

    Args:
        value: Decoded DTSTART/DTEND/EXDATE value
        tz: Resolved document zone

    Returns:
        Timezone-aware datetime in ``tz``:
        - date-only values become midnight of that date
        - floating (naive) datetimes are read as local times of ``tz``
        - aware datetimes are converted to ``tz``
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=tz.tzinfo)
        return value.astimezone(tz.tzinfo)
    return datetime.combine(value, time.min, tzinfo=tz.tzinfo)


def get_date(value: DateOrDateTime, tz: ResolvedTimezone) -> str:
    """Return the civil date of ``value`` in ``tz`` as YYYY-MM-DD."""
    return to_civil(value, tz).date().isoformat()


def get_time(value: DateOrDateTime, tz: ResolvedTimezone) -> str:
    """Return the civil time of ``value`` in ``tz`` as HH:MM (24-hour, no seconds)."""
    if not isinstance(value, datetime):
        return MIDNIGHT
    return to_civil(value, tz).strftime("%H:%M")


def is_date_only(value: DateOrDateTime) -> bool:
    """Check if the value has no time-of-day component."""
    return not isinstance(value, datetime)
