#!/usr/bin/env python3
"""
Version Template Compiler
=========================

Validates a version template and compiles it into an ordered list of
segments. The renderer, the candidate parser and the recognizer pattern
are all derived from that one segment list.

Template variables:
    %M%  major version        (decimal, no padding)
    %m%  minor version        (decimal, no padding)
    %b%  build number         (decimal, no padding)
    %d%  date                 (8 digits, YYYYMMDD)
    %t%  time of day          (6 digits, HHMMSS)
    %%   literal percent      (may appear any number of times)

Each of %M%, %m%, %b%, %d% and %t% may appear at most once, and the
template may not contain whitespace.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional, Tuple

from .exceptions import TemplateSyntaxError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "%M%.%m%-%d%.%t%"


class SegmentKind(Enum):
    LITERAL = "literal"
    MAJOR = "M"
    MINOR = "m"
    BUILD = "b"
    DATE = "d"
    TIME = "t"
    PERCENT = "%"


# Order matters: duplicate checks run in this order
VARIABLE_NAMES = (
    (SegmentKind.MAJOR, "Major"),
    (SegmentKind.MINOR, "Minor"),
    (SegmentKind.BUILD, "Build"),
    (SegmentKind.DATE, "Date"),
    (SegmentKind.TIME, "Time"),
)

_VARIABLE_KINDS = {kind.value: kind for kind, _ in VARIABLE_NAMES}

NUMERIC_KINDS = frozenset(kind for kind, _ in VARIABLE_NAMES)

_WHITESPACE = re.compile(r"\s")


class Segment(NamedTuple):
    """One literal or variable unit of a compiled template"""
    kind: SegmentKind
    text: str
    position: int

    @property
    def is_numeric(self) -> bool:
        return self.kind in NUMERIC_KINDS

    @property
    def token(self) -> str:
        """Template token for error messages, e.g. '%M%'."""
        if self.kind is SegmentKind.LITERAL:
            return self.text
        if self.kind is SegmentKind.PERCENT:
            return "%%"
        return f"%{self.kind.value}%"


class IncrementFlags(NamedTuple):
    """Which counters a template renders; consulted by the increment policy"""
    uses_major: bool
    uses_minor: bool
    uses_build: bool


@dataclass(frozen=True)
class CompiledTemplate:
    """A validated template with its segments and recognizer pattern."""
    template: str
    segments: Tuple[Segment, ...]
    recognizer: str
    uses_major: bool = False
    uses_minor: bool = False
    uses_build: bool = False
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            regex = re.compile(self.recognizer)
        except re.error as e:
            raise TemplateSyntaxError(
                f"Invalid recognizer pattern '{self.recognizer}': {e}"
            ) from e
        object.__setattr__(self, "_regex", regex)

    @property
    def flags(self) -> IncrementFlags:
        return IncrementFlags(self.uses_major, self.uses_minor, self.uses_build)

    @property
    def uses_date(self) -> bool:
        return any(s.kind is SegmentKind.DATE for s in self.segments)

    @property
    def uses_time(self) -> bool:
        return any(s.kind is SegmentKind.TIME for s in self.segments)

    def matches(self, text: str) -> bool:
        """Return True when the whole of text matches the recognizer."""
        return self._regex.fullmatch(text) is not None

    def __str__(self) -> str:
        return self.template


def _check_whitespace(template: str):
    match = _WHITESPACE.search(template)
    if match:
        raise TemplateSyntaxError(
            "Invalid pattern: whitespace not allowed in pattern",
            index=match.start(),
        )


def _check_duplicates(template: str):
    for kind, name in VARIABLE_NAMES:
        token = f"%{kind.value}%"
        if template.count(token) > 1:
            first = template.find(token)
            raise TemplateSyntaxError(
                f"Invalid pattern: {name} variable {token} used more than once in pattern",
                index=template.find(token, first + len(token)),
                letter=kind.value,
            )


def _scan_segments(template: str) -> Tuple[Segment, ...]:
    """Split a template into segments, validating % markers as it goes."""
    segments = []
    length = len(template)
    literal_start = 0
    index = template.find("%")

    while index >= 0:
        # Need room for either '%%' or '%X%'
        if index + 1 == length or (index + 2 == length and template[index + 1] != "%"):
            raise TemplateSyntaxError(
                "Invalid pattern: unbalanced % found at end of pattern",
                index=index,
            )

        if literal_start < index:
            segments.append(Segment(SegmentKind.LITERAL, template[literal_start:index], literal_start))

        next_char = template[index + 1]
        if next_char == "%":
            segments.append(Segment(SegmentKind.PERCENT, "%%", index))
            index += 2
        else:
            if template[index + 2] != "%":
                raise TemplateSyntaxError(
                    f"Invalid pattern: invalid variable reference at pattern index {index + 2}",
                    index=index + 2,
                    letter=next_char,
                )

            kind = _VARIABLE_KINDS.get(next_char)
            if kind is None:
                raise TemplateSyntaxError(
                    f"Invalid pattern: invalid variable reference '{next_char}' "
                    f"at pattern index {index + 1}",
                    index=index + 1,
                    letter=next_char,
                )

            segments.append(Segment(kind, template[index:index + 3], index))
            index += 3

        literal_start = index
        index = template.find("%", index)

    if literal_start < length:
        segments.append(Segment(SegmentKind.LITERAL, template[literal_start:], literal_start))

    return tuple(segments)


def build_recognizer(segments) -> str:
    """Derive the recognizer regex from a segment list."""
    parts = []
    for segment in segments:
        if segment.kind is SegmentKind.LITERAL:
            parts.append(re.escape(segment.text))
        elif segment.kind is SegmentKind.PERCENT:
            parts.append("%")
        else:
            parts.append(r"\d+")
    return "".join(parts)


def compile_template(template: Optional[str] = None,
                     recognizer: Optional[str] = None) -> CompiledTemplate:
    """
    Validate and compile a version template.

    Args:
        template: Template string; None or empty selects DEFAULT_TEMPLATE
        recognizer: Optional explicit recognizer regex used instead of the
            derived one

    Returns:
        CompiledTemplate

    Raises:
        TemplateSyntaxError: if the template (or explicit recognizer) is invalid
    """
    if not template:
        template = DEFAULT_TEMPLATE

    _check_whitespace(template)
    _check_duplicates(template)
    segments = _scan_segments(template)

    kinds = {segment.kind for segment in segments}
    if recognizer is None:
        recognizer = build_recognizer(segments)

    compiled = CompiledTemplate(
        template=template,
        segments=segments,
        recognizer=recognizer,
        uses_major=SegmentKind.MAJOR in kinds,
        uses_minor=SegmentKind.MINOR in kinds,
        uses_build=SegmentKind.BUILD in kinds,
    )
    logger.debug(f"Compiled template '{template}' with recognizer '{recognizer}'")
    return compiled
