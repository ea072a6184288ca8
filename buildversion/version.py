#!/usr/bin/env python3
"""
BuildVersion: a compiled template bound to a version state.

    version = BuildVersion("v%M%.%m%.%b%", major=1, minor=2)
    version.increment_version()
    str(version)                       # 'v1.2.1'

    previous = BuildVersion.from_candidate("v1.2.7", "v%M%.%m%.%b%")
    previous.build                     # 7
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from . import policy
from .parser import parse
from .renderer import render
from .state import TimezoneMode, VersionState
from .template import CompiledTemplate, IncrementFlags, compile_template

logger = logging.getLogger(__name__)


class BuildVersion:
    """Version counters and timestamp rendered through a template."""

    def __init__(self,
                 template: Optional[str] = None,
                 major: int = 0,
                 minor: int = 0,
                 build: int = 0,
                 timestamp: Optional[datetime] = None,
                 timezone_mode: TimezoneMode = TimezoneMode.UTC,
                 recognizer: Optional[str] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.compiled = compile_template(template, recognizer)
        self.state = VersionState(major, minor, build, timestamp, timezone_mode, clock)

    @classmethod
    def from_candidate(cls,
                       candidate: str,
                       template: Optional[str] = None,
                       recognizer: Optional[str] = None,
                       timezone_mode: TimezoneMode = TimezoneMode.UTC,
                       clock: Optional[Callable[[], datetime]] = None) -> 'BuildVersion':
        """Rebuild a version from a string produced by the same template."""
        compiled = compile_template(template, recognizer)
        return cls.from_state(compiled, parse(compiled, candidate, timezone_mode, clock))

    @classmethod
    def from_state(cls, compiled: CompiledTemplate, state: VersionState) -> 'BuildVersion':
        version = cls.__new__(cls)
        version.compiled = compiled
        version.state = state
        return version

    # Template

    @property
    def template(self) -> str:
        return self.compiled.template

    @property
    def recognizer(self) -> str:
        return self.compiled.recognizer

    @property
    def flags(self) -> IncrementFlags:
        return self.compiled.flags

    @property
    def uses_major(self) -> bool:
        return self.compiled.uses_major

    @property
    def uses_minor(self) -> bool:
        return self.compiled.uses_minor

    @property
    def uses_build(self) -> bool:
        return self.compiled.uses_build

    def set_template(self, template: Optional[str], recognizer: Optional[str] = None):
        """Switch to another template; counters and timestamp are kept."""
        self.compiled = compile_template(template, recognizer)

    # State

    @property
    def major(self) -> int:
        return self.state.major

    @major.setter
    def major(self, value: int):
        self.state.major = value

    @property
    def minor(self) -> int:
        return self.state.minor

    @minor.setter
    def minor(self, value: int):
        self.state.minor = value

    @property
    def build(self) -> int:
        return self.state.build

    @build.setter
    def build(self, value: int):
        self.state.build = value

    @property
    def timestamp(self) -> datetime:
        return self.state.timestamp

    @timestamp.setter
    def timestamp(self, value: Optional[datetime]):
        self.state.timestamp = value

    @property
    def timezone_mode(self) -> TimezoneMode:
        return self.state.timezone_mode

    def increment_version(self) -> str:
        return policy.increment_version(self.state, self.compiled.flags)

    def increment_major(self):
        self.state.increment_major()

    def increment_minor(self):
        self.state.increment_minor()

    def increment_build(self):
        self.state.increment_build()

    def update_major(self, new_major: int):
        policy.update_major(self.state, new_major)

    def refresh_timestamp(self):
        policy.refresh_timestamp(self.state)

    def copy(self) -> 'BuildVersion':
        return BuildVersion.from_state(self.compiled, self.state.copy())

    def matches(self, text: str) -> bool:
        return self.compiled.matches(text)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'version': str(self),
            'template': self.template,
            'recognizer': self.recognizer,
            'major': self.major,
            'minor': self.minor,
            'build': self.build,
            'timestamp': self.timestamp.isoformat(),
            'timezone': self.timezone_mode.value,
        }

    def __str__(self) -> str:
        return render(self.compiled, self.state)

    def __repr__(self) -> str:
        return f"BuildVersion(template={self.template!r}, state={self.state!r})"
