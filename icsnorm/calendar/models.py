"""Normalized event record models for icsnorm."""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# Keys dropped from serialized all-day records
TIME_KEYS = ("startTime", "endTime")


def make_event_id(uid: str, anchor_date: str, kind: str) -> str:
    """Build the stable identity of a record.

    Args:
        uid: Source event UID
        anchor_date: Normalized date (start date or series anchor)
        kind: "single" or "recurring"

    Returns:
        Identity string of the form ``ics::{uid}::{anchor_date}::{kind}``
    """
    return f"ics::{uid}::{anchor_date}::{kind}"


class _EventRecordBase(BaseModel):
    """Fields shared by both record shapes."""

    id: str = Field(..., description="Stable identity derived from uid, anchor date and kind")
    title: Optional[str] = Field(default=None, description="Event title (SUMMARY)")
    all_day: bool = Field(default=False, alias="allDay", description="All-day event flag")
    start_time: Optional[str] = Field(
        default=None, alias="startTime", description="Civil start time HH:MM (timed events)"
    )
    end_time: Optional[str] = Field(
        default=None, alias="endTime", description="Civil end time HH:MM (timed events)"
    )

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys; all-day records carry no time keys."""
        payload = self.model_dump(by_alias=True)
        if self.all_day:
            for key in TIME_KEYS:
                payload.pop(key, None)
        return payload


class SingleEventRecord(_EventRecordBase):
    """A single-occurrence event."""

    type: Literal["single"] = "single"
    date: str = Field(..., description="Civil start date YYYY-MM-DD")
    end_date: Optional[str] = Field(
        default=None,
        alias="endDate",
        description="Civil end date, None when unspecified or equal to date",
    )


class RecurringEventRecord(_EventRecordBase):
    """A recurring series, stored as its rule rather than expanded occurrences."""

    type: Literal["rrule"] = "rrule"
    start_date: str = Field(..., alias="startDate", description="Series anchor date YYYY-MM-DD")
    rrule: str = Field(..., description="Canonical RRULE string")
    skip_dates: list[str] = Field(
        default_factory=list, alias="skipDates", description="Excluded occurrence dates"
    )


EventRecord = Union[SingleEventRecord, RecurringEventRecord]

CalendarEventRecord = Annotated[
    EventRecord,
    Field(discriminator="type"),
]

_record_adapter: TypeAdapter[Any] = TypeAdapter(CalendarEventRecord)


def event_record_from_dict(data: dict[str, Any]) -> EventRecord:
    """Load either record shape from its serialized form.

    Args:
        data: Dictionary as produced by ``to_dict()``

    Returns:
        SingleEventRecord or RecurringEventRecord, selected by ``type``

    Raises:
        pydantic.ValidationError: If the dictionary matches neither shape
    """
    return _record_adapter.validate_python(data)
