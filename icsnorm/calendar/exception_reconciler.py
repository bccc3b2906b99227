"""RECURRENCE-ID reconciliation for icsnorm.

Events with RECURRENCE-ID share their UID with a recurring base event. Each
such exception excludes its date from the base series, while the exception
itself is still emitted as the modified occurrence.
"""

import logging

from .event_extractor import ExtractedEvent
from .models import EventRecord, RecurringEventRecord, SingleEventRecord

logger = logging.getLogger(__name__)


class ExceptionReconciler:
    """Merges recurrence exceptions into their base series as skip dates."""

    def reconcile(
        self,
        classified: list[tuple[ExtractedEvent, EventRecord]],
    ) -> list[EventRecord]:
        """Partition, merge and assemble the final record list.

        Args:
            classified: (event, record) pairs in extraction order

        Returns:
            Base records in first-seen UID order, followed by every exception
            record in extraction order
        """
        base_records: dict[str, EventRecord] = {}
        exceptions: list[tuple[str, EventRecord]] = []

        for event, record in classified:
            if event.is_recurrence_exception:
                exceptions.append((event.uid, record))
                continue
            if event.uid in base_records:
                logger.warning(
                    "Duplicate base event for UID %s, keeping the last one: %r replaces %r",
                    event.uid,
                    record.id,
                    base_records[event.uid].id,
                )
            base_records[event.uid] = record

        merged = 0
        for uid, exception_record in exceptions:
            base_record = base_records.get(uid)
            if base_record is None:
                logger.debug(f"Recurrence exception {exception_record.id} has no base event")
                continue

            if not isinstance(base_record, RecurringEventRecord) or not isinstance(
                exception_record, SingleEventRecord
            ):
                logger.warning(
                    "Recurrence exception was recurring or base event was not recurring: "
                    "base_event=%r recurrence_exception=%r",
                    base_record.to_dict(),
                    exception_record.to_dict(),
                )
                continue

            base_record.skip_dates.append(exception_record.date)
            merged += 1

        if merged:
            logger.debug(f"Merged {merged} recurrence exceptions into base series")

        return list(base_records.values()) + [record for _, record in exceptions]


def reconcile_exceptions(
    classified: list[tuple[ExtractedEvent, EventRecord]],
) -> list[EventRecord]:
    """Reconcile recurrence exceptions (convenience function)."""
    return ExceptionReconciler().reconcile(classified)
