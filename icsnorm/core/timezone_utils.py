"""Document timezone resolution for icsnorm."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

# Non-standard calendar property emitted by Google Calendar and others
TIMEZONE_HINT_PROPERTY = "X-WR-TIMEZONE"


@dataclass(frozen=True)
class ResolvedTimezone:
    """The one timezone applied to every floating/local time of a document.

    Attributes:
        tzid: Identifier as written in the document (or "UTC")
        tzinfo: tzinfo used for instant-to-civil conversion
        source: How the zone was obtained: "definition", "identifier" or "default"
    """

    tzid: str
    tzinfo: datetime.tzinfo
    source: str = "default"

    @property
    def is_utc(self) -> bool:
        """Check if this is the neutral UTC zone."""
        return self.tzinfo is datetime.timezone.utc


# Neutral zone: used for all-day events and whenever nothing better is known
UTC_TIMEZONE = ResolvedTimezone(tzid="UTC", tzinfo=datetime.timezone.utc, source="default")


class TimezoneResolver:
    """Resolves the document timezone from a parsed calendar component."""

    # Windows timezone names to IANA identifier mapping
    # Common Windows timezones used in ICS files from Outlook/Exchange
    WINDOWS_TZ_MAP: ClassVar[dict[str, str]] = {
        "Pacific Standard Time": "America/Los_Angeles",
        "Mountain Standard Time": "America/Denver",
        "Central Standard Time": "America/Chicago",
        "Eastern Standard Time": "America/New_York",
        "Alaskan Standard Time": "America/Anchorage",
        "Hawaiian Standard Time": "Pacific/Honolulu",
        "Arizona Standard Time": "America/Phoenix",
        "GMT Standard Time": "Europe/London",
        "Central European Standard Time": "Europe/Paris",
        "W. Europe Standard Time": "Europe/Berlin",
        "China Standard Time": "Asia/Shanghai",
        "Tokyo Standard Time": "Asia/Tokyo",
        "India Standard Time": "Asia/Kolkata",
        "AUS Eastern Standard Time": "Australia/Sydney",
    }

    def resolve(self, calendar: Any) -> ResolvedTimezone:
        """Return exactly one timezone for the calendar.

        Priority:
        1. X-WR-TIMEZONE hint, preferring a VTIMEZONE whose TZID matches it,
           else the bare identifier
        2. The first VTIMEZONE in the document
        3. UTC

        Args:
            calendar: Parsed icalendar Calendar (or any component)

        Returns:
            Resolved timezone; never raises
        """
        definitions = [c for c in calendar.subcomponents if c.name == "VTIMEZONE"]

        hint = calendar.get(TIMEZONE_HINT_PROPERTY)
        if hint is not None:
            tzid = str(hint).strip()
            for component in definitions:
                if str(component.get("TZID", "")).strip() == tzid:
                    logger.debug("Using VTIMEZONE definition matching %s=%s", TIMEZONE_HINT_PROPERTY, tzid)
                    return self.from_definition(component)
            logger.debug("No VTIMEZONE matches %s=%s, using identifier", TIMEZONE_HINT_PROPERTY, tzid)
            return self.from_identifier(tzid)

        if definitions:
            return self.from_definition(definitions[0])

        return UTC_TIMEZONE

    def from_definition(self, component: Any) -> ResolvedTimezone:
        """Build a resolved zone from a VTIMEZONE component.

        A TZID that names a known zone wins over the embedded rules; otherwise
        the rules are turned into a tzinfo by icalendar.

        Args:
            component: icalendar VTIMEZONE component

        Returns:
            Resolved timezone, degraded to UTC conversion if the definition is unusable
        """
        tzid = str(component.get("TZID", "")).strip()

        tzinfo = self.lookup_zone(tzid)
        if tzinfo is None:
            try:
                tzinfo = component.to_tz()
            except Exception as e:
                logger.warning("Failed to build timezone from VTIMEZONE %r: %s", tzid, e)

        if tzinfo is None:
            logger.warning("Unusable VTIMEZONE %r, converting times as UTC", tzid)
            tzinfo = datetime.timezone.utc

        return ResolvedTimezone(tzid=tzid or UTC_TIMEZONE.tzid, tzinfo=tzinfo, source="definition")

    def from_identifier(self, tzid: str) -> ResolvedTimezone:
        """Build a resolved zone from a bare identifier.

        Args:
            tzid: IANA or Windows timezone name

        Returns:
            Resolved timezone; unknown identifiers keep their name but convert as UTC
        """
        tzinfo = self.lookup_zone(tzid)
        if tzinfo is None:
            logger.warning("Unrecognized timezone %r, converting times as UTC", tzid)
            tzinfo = datetime.timezone.utc
        return ResolvedTimezone(tzid=tzid or UTC_TIMEZONE.tzid, tzinfo=tzinfo, source="identifier")

    def lookup_zone(self, tzid: str) -> Optional[datetime.tzinfo]:
        """Look up a tzinfo by IANA or Windows name.

        Args:
            tzid: Timezone name

        Returns:
            ZoneInfo instance or None if the name is unknown
        """
        if not tzid:
            return None
        if tzid.upper() in ("UTC", "Z", "GMT"):
            return datetime.timezone.utc

        iana_tz = self.WINDOWS_TZ_MAP.get(tzid, tzid)
        try:
            return ZoneInfo(iana_tz)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            return None


_resolver = TimezoneResolver()


def resolve_timezone(calendar: Any) -> ResolvedTimezone:
    """Resolve the document timezone (convenience function).

    Args:
        calendar: Parsed icalendar Calendar

    Returns:
        Resolved timezone
    """
    return _resolver.resolve(calendar)


def windows_tz_to_iana(windows_tz: str) -> Optional[str]:
    """Convert Windows timezone name to IANA timezone identifier.

    Args:
        windows_tz: Windows timezone name (e.g., "Mountain Standard Time")

    Returns:
        IANA timezone identifier (e.g., "America/Denver") or None if not found
    """
    return _resolver.WINDOWS_TZ_MAP.get(windows_tz)
