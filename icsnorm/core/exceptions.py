"""Exception hierarchy for icsnorm.

Only document-level parse failures abort a normalization run. Everything else
(unusable event times, orphaned recurrence exceptions, invalid records) is
handled by dropping the affected event and logging a diagnostic.
"""


class ICSNormError(Exception):
    """Base exception for all icsnorm errors."""


class ICSParseError(ICSNormError):
    """The iCalendar document could not be parsed.

    Raised when:
    - The text is empty or not iCalendar content
    - The content lines cannot be split into components

    The underlying icalendar error is chained as ``__cause__``.
    """


class RecurrenceRuleError(ICSNormError, ValueError):
    """An RRULE value could not be parsed.

    Raised by the recurrence classifier and converted into a per-event drop
    decision, so a single bad rule never fails the whole document.
    """
