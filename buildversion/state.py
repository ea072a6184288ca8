#!/usr/bin/env python3
"""
Version State
=============

Mutable holder for the major/minor/build counters, the capture timestamp
and the timezone mode used when that timestamp is rendered or parsed.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TimezoneMode(Enum):
    LOCAL = "local"
    UTC = "utc"

    @classmethod
    def from_flag(cls, use_local_timezone: bool) -> 'TimezoneMode':
        return cls.LOCAL if use_local_timezone else cls.UTC


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_zone(instant: datetime, mode: TimezoneMode) -> datetime:
    """Express an instant as wall-clock time in the given timezone mode."""
    if mode is TimezoneMode.LOCAL:
        return instant.astimezone()
    return instant.astimezone(timezone.utc)


def from_wall_clock(naive: datetime, mode: TimezoneMode) -> datetime:
    """Interpret a naive wall-clock datetime in the given timezone mode."""
    if mode is TimezoneMode.LOCAL:
        return naive.astimezone()
    return naive.replace(tzinfo=timezone.utc)


def _check_counter(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


class VersionState:
    """Major/minor/build counters plus a capture timestamp."""

    def __init__(self,
                 major: int = 0,
                 minor: int = 0,
                 build: int = 0,
                 timestamp: Optional[datetime] = None,
                 timezone_mode: TimezoneMode = TimezoneMode.UTC,
                 clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or utc_now
        self._major = _check_counter("major", major)
        self._minor = _check_counter("minor", minor)
        self._build = _check_counter("build", build)
        self.timezone_mode = timezone_mode
        self.timestamp = timestamp

    @property
    def major(self) -> int:
        return self._major

    @major.setter
    def major(self, value: int):
        self.update_major(value)

    @property
    def minor(self) -> int:
        return self._minor

    @minor.setter
    def minor(self, value: int):
        self._minor = _check_counter("minor", value)

    @property
    def build(self) -> int:
        return self._build

    @build.setter
    def build(self, value: int):
        self._build = _check_counter("build", value)

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @timestamp.setter
    def timestamp(self, value: Optional[datetime]):
        if value is None:
            value = self._clock()
        elif value.tzinfo is None:
            # Naive values are wall-clock time in this state's mode
            value = from_wall_clock(value, self.timezone_mode)
        self._timestamp = value

    @property
    def clock(self) -> Callable[[], datetime]:
        return self._clock

    def zoned_timestamp(self) -> datetime:
        """Timestamp expressed in this state's timezone mode."""
        return to_zone(self._timestamp, self.timezone_mode)

    def refresh_timestamp(self):
        self._timestamp = self._clock()

    def increment_build(self):
        self._build += 1
        self.refresh_timestamp()

    def increment_minor(self):
        self._minor += 1
        self.refresh_timestamp()

    def increment_major(self):
        """Advance major and reset minor; build is left alone."""
        self._major += 1
        self._minor = 0
        self.refresh_timestamp()

    def update_major(self, new_major: int):
        """Set major, resetting minor when it changes. Timestamp is kept."""
        new_major = _check_counter("major", new_major)
        if new_major != self._major:
            logger.debug(f"Major version changed {self._major} -> {new_major}, resetting minor")
            self._major = new_major
            self._minor = 0

    def copy(self) -> 'VersionState':
        return VersionState(self._major, self._minor, self._build,
                            self._timestamp, self.timezone_mode, self._clock)

    def sort_key(self):
        return (self._major, self._minor, self._build, self._timestamp)

    def __eq__(self, other):
        if not isinstance(other, VersionState):
            return NotImplemented
        return (self.sort_key() == other.sort_key()
                and self.timezone_mode is other.timezone_mode)

    def __repr__(self):
        return (f"VersionState(major={self._major}, minor={self._minor}, build={self._build}, "
                f"timestamp={self._timestamp.isoformat()}, timezone_mode={self.timezone_mode.value})")
