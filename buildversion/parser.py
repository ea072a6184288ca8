#!/usr/bin/env python3
"""
Candidate Parser
================

Reads an existing version string back into its components using the
compiled template's segment list.

The scan is driven by digit runs only: the cursor skips to the next
decimal digit before every numeric field and captures the whole run.
Literal text in the candidate is skipped, not compared against the
template, so "Prefix98.34.1456Postfix" parses against "%M%.%m%.%b%".
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, NamedTuple, Optional

from .exceptions import VersionParseError
from .state import TimezoneMode, VersionState, from_wall_clock
from .template import CompiledTemplate, SegmentKind

logger = logging.getLogger(__name__)


class CandidateFields(NamedTuple):
    """Raw values captured from a candidate string"""
    major: Optional[int] = None
    minor: Optional[int] = None
    build: Optional[int] = None
    date: str = ""
    time: str = ""


def _next_digit(candidate: str, start: int) -> int:
    index = start
    while index < len(candidate) and not candidate[index].isdecimal():
        index += 1
    return index


def _end_of_digits(candidate: str, start: int) -> int:
    index = start
    while index < len(candidate) and candidate[index].isdecimal():
        index += 1
    return index


def _counter(digits: str, segment, compiled: CompiledTemplate) -> int:
    try:
        return int(digits)
    except ValueError as e:
        raise VersionParseError(
            f"Unable to read {segment.token} for pattern '{compiled.template}': {e}",
            segment.position,
        ) from e


def scan_candidate(compiled: CompiledTemplate, candidate: str) -> CandidateFields:
    """
    Capture one digit run per numeric segment of compiled.

    Raises:
        VersionParseError: if a numeric segment finds no digits at the cursor,
            or a counter has too many digits to convert
    """
    captured = {}
    cursor = _next_digit(candidate, 0)

    for segment in compiled.segments:
        if not segment.is_numeric:
            continue

        end = _end_of_digits(candidate, cursor)
        if end == cursor:
            raise VersionParseError(
                f"Unable to match {segment.token} for pattern '{compiled.template}'",
                segment.position,
            )

        digits = candidate[cursor:end]
        if segment.kind is SegmentKind.MAJOR:
            captured['major'] = _counter(digits, segment, compiled)
        elif segment.kind is SegmentKind.MINOR:
            captured['minor'] = _counter(digits, segment, compiled)
        elif segment.kind is SegmentKind.BUILD:
            captured['build'] = _counter(digits, segment, compiled)
        elif segment.kind is SegmentKind.DATE:
            captured['date'] = digits
        else:
            captured['time'] = digits

        cursor = _next_digit(candidate, end)

    return CandidateFields(**captured)


def _lenient_datetime(year: int, month: int, day: int,
                      hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    """Build a datetime, rolling out-of-range fields over into larger ones."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    base = datetime(year, month, 1)
    return base + timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)


def assemble_timestamp(date: str, time: str = "",
                       timezone_mode: TimezoneMode = TimezoneMode.UTC) -> datetime:
    """
    Turn captured date (YYYYMMDD) and time (HHMMSS) digits into an instant.

    Year and month take four and two digits; the day takes whatever is
    left. Time splits the same way with the seconds taking the remainder.
    An absent time means midnight.

    Raises:
        VersionParseError: if the digits cannot form a date
    """
    try:
        if len(date) < 7:
            raise ValueError(f"date '{date}' is too short")
        year, month, day = int(date[:4]), int(date[4:6]), int(date[6:])

        hour = minute = second = 0
        if time:
            if len(time) < 5:
                raise ValueError(f"time '{time}' is too short")
            hour, minute, second = int(time[:2]), int(time[2:4]), int(time[4:])

        naive = _lenient_datetime(year, month, day, hour, minute, second)
        return from_wall_clock(naive, timezone_mode)
    except (ValueError, OverflowError, OSError) as e:
        raise VersionParseError(f"Unable to match date '{date}{time}': {e}", 0) from e


def parse(compiled: CompiledTemplate,
          candidate: str,
          timezone_mode: TimezoneMode = TimezoneMode.UTC,
          clock: Optional[Callable[[], datetime]] = None) -> VersionState:
    """
    Parse candidate into a new VersionState.

    Counters the template does not use stay at zero; without a date field
    the timestamp is "now".

    Raises:
        VersionParseError: if a field is missing or the date is invalid
    """
    state = VersionState(timezone_mode=timezone_mode, clock=clock)
    fields = scan_candidate(compiled, candidate)

    if fields.major is not None:
        state.major = fields.major
    if fields.minor is not None:
        state.minor = fields.minor
    if fields.build is not None:
        state.build = fields.build

    if fields.date:
        try:
            state.timestamp = assemble_timestamp(fields.date, fields.time, timezone_mode)
        except VersionParseError as e:
            raise VersionParseError(
                f"Unable to match date for pattern '{compiled.template}'", 0
            ) from e

    logger.debug(f"Parsed '{candidate}' with '{compiled.template}': {state!r}")
    return state
