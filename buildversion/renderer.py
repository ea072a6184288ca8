#!/usr/bin/env python3
"""
Render a version state through a compiled template.
"""

import logging

from .exceptions import ConsistencyError
from .state import VersionState
from .template import CompiledTemplate, SegmentKind

logger = logging.getLogger(__name__)


def format_date(state: VersionState) -> str:
    stamp = state.zoned_timestamp()
    return f"{stamp.year:04d}{stamp.month:02d}{stamp.day:02d}"


def format_time(state: VersionState) -> str:
    stamp = state.zoned_timestamp()
    return f"{stamp.hour:02d}{stamp.minute:02d}{stamp.second:02d}"


def _render_segments(compiled: CompiledTemplate, state: VersionState) -> str:
    parts = []
    for segment in compiled.segments:
        kind = segment.kind
        if kind is SegmentKind.LITERAL:
            parts.append(segment.text)
        elif kind is SegmentKind.PERCENT:
            parts.append("%")
        elif kind is SegmentKind.MAJOR:
            parts.append(str(state.major))
        elif kind is SegmentKind.MINOR:
            parts.append(str(state.minor))
        elif kind is SegmentKind.BUILD:
            parts.append(str(state.build))
        elif kind is SegmentKind.DATE:
            parts.append(format_date(state))
        elif kind is SegmentKind.TIME:
            parts.append(format_time(state))
        else:
            raise ConsistencyError(f"Unknown segment {segment!r} in template '{compiled.template}'")
    return "".join(parts)


def render(compiled: CompiledTemplate, state: VersionState) -> str:
    """
    Render state through compiled and verify it against the recognizer.

    Raises:
        ConsistencyError: if the rendered string does not match the
            template's own recognizer
    """
    version_string = _render_segments(compiled, state)

    if not compiled.matches(version_string):
        raise ConsistencyError(
            f"Version string generated '{version_string}' from pattern '{compiled.template}' "
            f"does not match candidate pattern '{compiled.recognizer}'. "
            f"Output and candidate patterns must be consistent"
        )

    return version_string


def recognizer_pattern(compiled: CompiledTemplate) -> str:
    """Regex source that every rendering of compiled matches."""
    return compiled.recognizer
