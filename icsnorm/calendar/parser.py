"""iCalendar to normalized event records - icsnorm pipeline.

Stages run strictly in order:
    parse -> resolve timezone -> extract events -> classify -> reconcile -> validate

Only a document that cannot be parsed raises; every per-event problem is
handled by dropping that event.
"""

import logging
from typing import Any, Optional, Union

from icalendar import Calendar

from icsnorm.core.exceptions import ICSParseError
from icsnorm.core.timezone_utils import ResolvedTimezone, resolve_timezone

from .event_extractor import ExtractedEvent, extract_events
from .exception_reconciler import ExceptionReconciler
from .models import EventRecord
from .recurrence_classifier import classify_event
from .validation import Validator, validate_event

logger = logging.getLogger(__name__)


def parse_calendar(ics_content: Union[str, bytes]) -> Any:
    """Parse iCalendar text into a component tree.

    Args:
        ics_content: Full iCalendar document (bytes are decoded as UTF-8)

    Returns:
        Parsed icalendar Calendar

    Raises:
        ICSParseError: If the content is empty or not valid iCalendar
    """
    # icalendar reads single-line strings as file paths; bytes are always data
    if isinstance(ics_content, str):
        ics_content = ics_content.encode("utf-8")

    if not ics_content.strip():
        raise ICSParseError("Empty ICS content")

    try:
        return Calendar.from_ical(ics_content)
    except ValueError as e:
        raise ICSParseError(f"Failed to parse ICS content: {e}") from e


class ICSNormalizer:
    """Normalizes iCalendar documents into single/recurring event records."""

    def __init__(self, validator: Optional[Validator] = None) -> None:
        """Initialize normalizer.

        Args:
            validator: Record filter; defaults to ``validate_event``
        """
        self.validator: Validator = validator or validate_event
        self._reconciler = ExceptionReconciler()

    def normalize(self, ics_content: Union[str, bytes]) -> list[EventRecord]:
        """Run the whole pipeline over one document.

        Args:
            ics_content: Full iCalendar document

        Returns:
            Validated records: base records first, then recurrence exceptions

        Raises:
            ICSParseError: If the document cannot be parsed
        """
        calendar = parse_calendar(ics_content)
        tz = resolve_timezone(calendar)
        logger.debug("Resolved document timezone %s (%s)", tz.tzid, tz.source)

        events = extract_events(calendar)
        classified = self._classify(events, tz)
        records = self._reconciler.reconcile(classified)

        validated = [r for r in (self.validator(record) for record in records) if r is not None]
        if len(validated) != len(records):
            logger.info(f"Validation dropped {len(records) - len(validated)} of {len(records)} events")

        logger.debug(f"Normalized {len(validated)} events from {len(events)} VEVENTs")
        return validated

    def _classify(
        self,
        events: list[ExtractedEvent],
        tz: ResolvedTimezone,
    ) -> list[tuple[ExtractedEvent, EventRecord]]:
        """Classify every event, keeping (event, record) pairs in order."""
        classified: list[tuple[ExtractedEvent, EventRecord]] = []
        for event in events:
            result = classify_event(event, tz)
            if result.record is None:
                logger.warning("Skipping event: %s", result.diagnostic)
                continue
            classified.append((event, result.record))
        return classified


def get_events_from_ics(
    ics_content: Union[str, bytes],
    validator: Optional[Validator] = None,
) -> list[EventRecord]:
    """Normalize an iCalendar document (convenience function).

    Args:
        ics_content: Full iCalendar document
        validator: Optional record filter; defaults to ``validate_event``

    Returns:
        Validated event records

    Raises:
        ICSParseError: If the document cannot be parsed
    """
    return ICSNormalizer(validator).normalize(ics_content)
