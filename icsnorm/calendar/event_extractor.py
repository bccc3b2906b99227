"""VEVENT extraction for icsnorm.

Wraps each VEVENT of a parsed calendar for structured field access and decides
up front whether its time data is usable. Events whose start or end cannot be
materialized are dropped here rather than failing later in conversion.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional

from icalendar import Event as ICalEvent

from .instant_normalizer import DateOrDateTime, is_date_only

logger = logging.getLogger(__name__)

# Properties whose parse errors make an event unusable
TIME_PROPERTIES = ("DTSTART", "DTEND", "DURATION")


def _first(prop: Any) -> Any:
    """Return the first value of a property that may occur several times."""
    if isinstance(prop, list):
        return prop[0] if prop else None
    return prop


def _materialize(prop: Any) -> Optional[DateOrDateTime]:
    """Return the decoded date/datetime of a property or None if unusable.

    Broken properties (icalendar ``vBroken``) raise on ``.dt`` access.
    """
    prop = _first(prop)
    if prop is None:
        return None
    try:
        value = prop.dt
    except (AttributeError, ValueError):
        return None
    if isinstance(value, datetime):
        try:
            value.utcoffset()
        except (ValueError, OverflowError):
            return None
        return value
    if isinstance(value, date):
        return value
    return None


@dataclass
class ExtractedEvent:
    """A VEVENT with its start and end already materialized."""

    component: ICalEvent
    start: DateOrDateTime
    end: Optional[DateOrDateTime]

    @property
    def uid(self) -> str:
        """Event UID (empty string when missing)."""
        return str(self.component.get("UID", "")).strip()

    @property
    def summary(self) -> Optional[str]:
        """Event title or None when SUMMARY is absent."""
        summary = self.component.get("SUMMARY")
        return str(summary) if summary is not None else None

    @property
    def specifies_end(self) -> bool:
        """True if the event carries DTEND or DURATION."""
        return self.component.get("DTEND") is not None or self.component.get("DURATION") is not None

    @property
    def recurrence_id(self) -> Optional[Any]:
        """Decoded RECURRENCE-ID value, or None for base events."""
        prop = _first(self.component.get("RECURRENCE-ID"))
        if prop is None:
            return None
        return _materialize(prop) or str(prop)

    @property
    def is_recurrence_exception(self) -> bool:
        """True if the event overrides one occurrence of a series."""
        return self.component.get("RECURRENCE-ID") is not None

    @property
    def rrule_text(self) -> Optional[str]:
        """RRULE value as iCalendar text, or None for non-recurring events."""
        prop = _first(self.component.get("RRULE"))
        if prop is None:
            return None
        if hasattr(prop, "to_ical"):
            return prop.to_ical().decode("utf-8")
        return str(prop)

    @property
    def exdates(self) -> list[DateOrDateTime]:
        """All EXDATE values in document order.

        EXDATE may occur several times and each occurrence may hold a
        comma-separated list; every value is returned. Broken entries are skipped.
        """
        raw = self.component.get("EXDATE")
        if raw is None:
            return []
        props = raw if isinstance(raw, list) else [raw]

        values: list[DateOrDateTime] = []
        for prop in props:
            try:
                items = prop.dts
            except (AttributeError, ValueError):
                logger.debug("Skipping unusable EXDATE property on %s", self.uid)
                continue
            for item in items:
                value = _materialize(item)
                if value is not None:
                    values.append(value)
                else:
                    logger.debug("Skipping unusable EXDATE entry on %s", self.uid)
        return values

    def get_property(self, name: str, default: Any = None) -> Any:
        """Return an arbitrary named property of the VEVENT."""
        return self.component.get(name, default)


@dataclass
class ExtractionDecision:
    """Keep/drop decision for one VEVENT."""

    keep: bool
    event: Optional[ExtractedEvent] = None
    reason: Optional[str] = None


def _compute_end(component: ICalEvent, start: DateOrDateTime) -> tuple[Optional[DateOrDateTime], Optional[str]]:
    """Compute the end instant following iCalendar semantics.

    DTEND wins; else DTSTART + DURATION; else date-only starts last one day
    and date-time starts end when they begin.

    Returns:
        Tuple of (end, failure_reason)
    """
    if component.get("DTEND") is not None:
        end = _materialize(component.get("DTEND"))
        if end is None:
            return None, "unusable DTEND"
        return end, None

    duration_prop = _first(component.get("DURATION"))
    if duration_prop is not None:
        try:
            duration = duration_prop.dt
        except (AttributeError, ValueError):
            return None, "unusable DURATION"
        if not isinstance(duration, timedelta):
            return None, "unusable DURATION"
        try:
            return start + duration, None
        except OverflowError:
            return None, "DURATION overflows"

    if is_date_only(start):
        try:
            return start + timedelta(days=1), None
        except OverflowError:
            return None, "all-day end overflows"
    return start, None


def classify_component(component: ICalEvent) -> ExtractionDecision:
    """Decide whether a VEVENT has usable time data.

    Args:
        component: icalendar VEVENT component

    Returns:
        ExtractionDecision with the wrapped event when kept, or the drop reason
    """
    broken = sorted({name for name, _ in getattr(component, "errors", []) if name in TIME_PROPERTIES})
    if broken:
        return ExtractionDecision(keep=False, reason=f"malformed {', '.join(broken)}")

    start = _materialize(component.get("DTSTART"))
    if start is None:
        return ExtractionDecision(keep=False, reason="missing or unusable DTSTART")

    end, failure = _compute_end(component, start)
    if failure is not None:
        return ExtractionDecision(keep=False, reason=failure)

    return ExtractionDecision(keep=True, event=ExtractedEvent(component=component, start=start, end=end))


def extract_events(calendar: Any) -> list[ExtractedEvent]:
    """Wrap every top-level VEVENT of the calendar, dropping those with unusable times.

    VEVENTs nested inside other components are not part of the calendar's
    own event list and are ignored.

    Args:
        calendar: Parsed icalendar Calendar

    Returns:
        Kept events in document order
    """
    events: list[ExtractedEvent] = []
    dropped = 0

    for component in calendar.subcomponents:
        if component.name != "VEVENT":
            continue
        decision = classify_component(component)
        if decision.keep and decision.event is not None:
            events.append(decision.event)
            continue
        dropped += 1
        logger.debug(
            "Skipping event %s with invalid time: %s",
            str(component.get("UID", "<no uid>")),
            decision.reason,
        )

    if dropped:
        logger.info(f"Skipped {dropped} events with invalid time data")

    return events
