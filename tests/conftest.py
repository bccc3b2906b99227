"""Shared fixtures for icsnorm tests."""

from typing import Any, Callable, Optional

import pytest


def _fold_lines(lines: list[str]) -> str:
    return "\r\n".join(lines) + "\r\n"


def build_vevent(
    uid: str = "event-1",
    summary: Optional[str] = "Test Event",
    dtstart: Optional[str] = "DTSTART:20240115T090000Z",
    dtend: Optional[str] = "DTEND:20240115T100000Z",
    extra: Optional[list[str]] = None,
) -> list[str]:
    """Build the lines of one VEVENT.

    Time properties are passed as full content lines (``NAME;PARAMS:VALUE``)
    so tests can exercise TZID parameters and VALUE=DATE forms directly.
    """
    lines = ["BEGIN:VEVENT", f"UID:{uid}", "DTSTAMP:20240101T000000Z"]
    if summary is not None:
        lines.append(f"SUMMARY:{summary}")
    if dtstart is not None:
        lines.append(dtstart)
    if dtend is not None:
        lines.append(dtend)
    lines.extend(extra or [])
    lines.append("END:VEVENT")
    return lines


def build_calendar(
    *events: list[str],
    header: Optional[list[str]] = None,
    timezones: Optional[list[list[str]]] = None,
) -> str:
    """Wrap VEVENT (and optional VTIMEZONE) lines into a full document."""
    lines = ["BEGIN:VCALENDAR", "VERSION:2.0", "PRODID:-//icsnorm//tests//EN"]
    lines.extend(header or [])
    for tz_lines in timezones or []:
        lines.extend(tz_lines)
    for event_lines in events:
        lines.extend(event_lines)
    lines.append("END:VCALENDAR")
    return _fold_lines(lines)


def build_vtimezone(tzid: str, offset: str = "-0500", name: str = "STD") -> list[str]:
    """Build a minimal VTIMEZONE with a single fixed-offset STANDARD block."""
    return [
        "BEGIN:VTIMEZONE",
        f"TZID:{tzid}",
        "BEGIN:STANDARD",
        "DTSTART:19700101T000000",
        f"TZOFFSETFROM:{offset}",
        f"TZOFFSETTO:{offset}",
        f"TZNAME:{name}",
        "END:STANDARD",
        "END:VTIMEZONE",
    ]


@pytest.fixture
def vevent() -> Callable[..., list[str]]:
    """Factory for VEVENT content lines."""
    return build_vevent


@pytest.fixture
def calendar_text() -> Callable[..., str]:
    """Factory for full iCalendar documents."""
    return build_calendar


@pytest.fixture
def vtimezone() -> Callable[..., list[str]]:
    """Factory for VTIMEZONE content lines."""
    return build_vtimezone


@pytest.fixture(autouse=True)
def clean_icsnorm_environment(monkeypatch: Any) -> None:
    """Clear icsnorm environment variables so host settings never leak into tests."""
    for key in ("ICSNORM_DEBUG", "ICSNORM_LOG_LEVEL", "ICSNORM_JSON_INDENT"):
        monkeypatch.delenv(key, raising=False)


def pytest_configure(config: Any) -> None:
    """Register icsnorm test markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: End-to-end pipeline tests")
