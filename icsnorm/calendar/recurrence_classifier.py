"""Single vs recurring classification for icsnorm.

Turns one extracted VEVENT into a normalized record. Recurring events keep
their rule as a canonical string; occurrences are never expanded.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from dateutil.rrule import rrule, rrulestr

from icsnorm.core.exceptions import RecurrenceRuleError
from icsnorm.core.timezone_utils import ResolvedTimezone

from .event_extractor import ExtractedEvent
from .instant_normalizer import get_date, get_time, is_date_only, to_civil, zone_for_event
from .models import EventRecord, RecurringEventRecord, SingleEventRecord, make_event_id

logger = logging.getLogger(__name__)

# UNTIL given as a UTC date-time in the source rule
_UTC_UNTIL_RE = re.compile(r"(?:^|[:;])UNTIL=\d{8}T\d{6}Z(?=;|$)", re.IGNORECASE)
_UNTIL_RE = re.compile(r"(UNTIL=\d{8}T\d{6})(?=;|$)")


def is_all_day(event: ExtractedEvent) -> bool:
    """An event is all-day iff its start is a pure date."""
    return is_date_only(event.start)


def canonical_rrule(rule_text: str, dtstart: Optional[datetime] = None) -> str:
    """Parse an RRULE value and serialize it back canonically.

    The rule is only parsed to validate and normalize it; the returned string
    carries no DTSTART line. A UTC UNTIL keeps its trailing ``Z`` so the
    series ends at the same instant as in the source.

    Args:
        rule_text: RRULE value, with or without the ``RRULE:`` prefix
        dtstart: Naive series start used while parsing

    Returns:
        Canonical rule such as ``RRULE:FREQ=WEEKLY;COUNT=5``

    Raises:
        RecurrenceRuleError: If the rule cannot be parsed
    """
    try:
        rule = rrulestr(rule_text, dtstart=dtstart, ignoretz=True)
    except (ValueError, TypeError, KeyError) as e:
        raise RecurrenceRuleError(f"Invalid RRULE {rule_text!r}: {e}") from e

    if not isinstance(rule, rrule):
        raise RecurrenceRuleError(f"Expected a single RRULE, got {rule_text!r}")

    for line in str(rule).splitlines():
        if line.startswith("RRULE:"):
            if _UTC_UNTIL_RE.search(rule_text.strip()):
                line = _UNTIL_RE.sub(r"\1Z", line)
            return line
    raise RecurrenceRuleError(f"Could not serialize RRULE {rule_text!r}")


def build_record(event: ExtractedEvent, tz: ResolvedTimezone) -> EventRecord:
    """Build the normalized record for one event.

    Args:
        event: Extracted event with materialized start/end
        tz: Resolved document zone (replaced by UTC for all-day events)

    Returns:
        RecurringEventRecord when the event has an RRULE, else SingleEventRecord

    Raises:
        RecurrenceRuleError: If the event's RRULE cannot be parsed
    """
    all_day = is_all_day(event)
    zone = zone_for_event(all_day, tz)

    if event.rrule_text is not None:
        start_date = get_date(event.start, zone)
        rule = canonical_rrule(
            event.rrule_text,
            dtstart=to_civil(event.start, zone).replace(tzinfo=None),
        )
        # Only the date of an exclusion is kept, so same-day occurrences
        # of sub-daily series cannot be excluded individually.
        skip_dates = [get_date(exdate, zone) for exdate in event.exdates]

        times = {}
        if not all_day:
            times = {
                "start_time": get_time(event.start, zone),
                "end_time": get_time(event.end, zone) if event.end is not None else None,
            }

        return RecurringEventRecord(
            id=make_event_id(event.uid, start_date, "recurring"),
            title=event.summary,
            start_date=start_date,
            rrule=rule,
            skip_dates=skip_dates,
            all_day=all_day,
            **times,
        )

    event_date = get_date(event.start, zone)
    end_date = get_date(event.end, zone) if event.specifies_end and event.end is not None else None

    times = {}
    if not all_day:
        # endTime is read from the end instant even when no DTEND/DURATION
        # was given (the end then equals the start); endDate is not.
        times = {
            "start_time": get_time(event.start, zone),
            "end_time": get_time(event.end, zone) if event.end is not None else None,
        }

    return SingleEventRecord(
        id=make_event_id(event.uid, event_date, "single"),
        title=event.summary,
        date=event_date,
        end_date=end_date if end_date != event_date else None,
        all_day=all_day,
        **times,
    )


@dataclass
class ClassificationResult:
    """Keep/drop outcome of classifying one event."""

    record: Optional[EventRecord] = None
    diagnostic: Optional[str] = None

    @property
    def keep(self) -> bool:
        """True if a record was produced."""
        return self.record is not None


def classify_event(event: ExtractedEvent, tz: ResolvedTimezone) -> ClassificationResult:
    """Classify one event, turning per-event failures into a drop decision.

    Args:
        event: Extracted event
        tz: Resolved document zone

    Returns:
        ClassificationResult with the record, or a diagnostic when dropped
    """
    try:
        return ClassificationResult(record=build_record(event, tz))
    except RecurrenceRuleError as e:
        return ClassificationResult(diagnostic=f"Event {event.uid}: {e}")
    except OverflowError as e:
        return ClassificationResult(diagnostic=f"Event {event.uid}: date out of range in {tz.tzid}: {e}")
