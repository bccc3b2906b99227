"""Unit tests for icsnorm.calendar.models."""

import pytest
from pydantic import ValidationError

from icsnorm.calendar.models import (
    RecurringEventRecord,
    SingleEventRecord,
    event_record_from_dict,
    make_event_id,
)

pytestmark = pytest.mark.unit


class TestMakeEventId:
    """Tests for record identity strings."""

    def test_make_event_id_format(self):
        assert make_event_id("abc", "2024-01-15", "single") == "ics::abc::2024-01-15::single"

    def test_make_event_id_distinct_for_distinct_triples(self):
        ids = {
            make_event_id("abc", "2024-01-15", "single"),
            make_event_id("abc", "2024-01-15", "recurring"),
            make_event_id("abc", "2024-01-16", "single"),
            make_event_id("abd", "2024-01-15", "single"),
        }

        assert len(ids) == 4


class TestSerialization:
    """Tests for to_dict and event_record_from_dict."""

    def test_to_dict_single_uses_camel_case(self):
        record = SingleEventRecord(
            id="ics::u::2024-01-15::single",
            title="Lunch",
            date="2024-01-15",
            start_time="12:00",
            end_time="13:00",
        )

        assert record.to_dict() == {
            "id": "ics::u::2024-01-15::single",
            "title": "Lunch",
            "allDay": False,
            "startTime": "12:00",
            "endTime": "13:00",
            "type": "single",
            "date": "2024-01-15",
            "endDate": None,
        }

    def test_to_dict_all_day_omits_time_keys(self):
        record = RecurringEventRecord(
            id="ics::u::2024-07-04::recurring",
            title="Holiday",
            all_day=True,
            start_date="2024-07-04",
            rrule="RRULE:FREQ=YEARLY",
        )

        payload = record.to_dict()

        assert "startTime" not in payload
        assert "endTime" not in payload
        assert payload["skipDates"] == []
        assert payload["type"] == "rrule"

    def test_event_record_from_dict_selects_shape_by_type(self):
        series = RecurringEventRecord(
            id="ics::u::2024-01-15::recurring",
            title="Standup",
            start_date="2024-01-15",
            rrule="RRULE:FREQ=DAILY",
            skip_dates=["2024-01-16"],
            start_time="09:00",
        )

        loaded = event_record_from_dict(series.to_dict())

        assert isinstance(loaded, RecurringEventRecord)
        assert loaded.to_dict() == series.to_dict()

    def test_event_record_from_dict_accepts_field_names(self):
        loaded = event_record_from_dict(
            {"type": "single", "id": "x", "title": "t", "date": "2024-01-15", "end_date": "2024-01-16"}
        )

        assert isinstance(loaded, SingleEventRecord)
        assert loaded.end_date == "2024-01-16"

    def test_event_record_from_dict_when_unknown_type_then_validation_error(self):
        with pytest.raises(ValidationError):
            event_record_from_dict({"type": "weekly", "id": "x", "date": "2024-01-15"})

    def test_skip_dates_not_shared_between_records(self):
        first = RecurringEventRecord(id="a", start_date="2024-01-01", rrule="RRULE:FREQ=DAILY")
        second = RecurringEventRecord(id="b", start_date="2024-01-01", rrule="RRULE:FREQ=DAILY")

        first.skip_dates.append("2024-01-02")

        assert second.skip_dates == []
