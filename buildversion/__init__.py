#!/usr/bin/env python3
"""
buildversion
============

Template-based build versions: render major/minor/build counters and a
capture timestamp into a version string, parse such strings back, and
advance the most granular counter a template uses.

Features:
- Compact template syntax (%M% %m% %b% %d% %t% %%)
- Derived recognizer regex for searching existing tags
- Lenient parsing of previously rendered versions
- Local or UTC date/time rendering

Usage:
    from buildversion import BuildVersion

    version = BuildVersion("v%M%.%m%.%b%-%d%.%t%", major=1)
    version.increment_version()
    tag_name = str(version)
    tag_filter = version.recognizer
"""

__version__ = "1.0.0"

from .exceptions import (
    VersionTemplateError,
    TemplateSyntaxError,
    VersionParseError,
    ConsistencyError
)
from .template import (
    DEFAULT_TEMPLATE,
    CompiledTemplate,
    IncrementFlags,
    Segment,
    SegmentKind,
    compile_template
)
from .state import TimezoneMode, VersionState
from .renderer import render, recognizer_pattern
from .parser import parse
from .policy import increment_version, update_major, refresh_timestamp
from .version import BuildVersion
from .tags import filter_tags, latest_version, next_version

__all__ = [
    'VersionTemplateError',
    'TemplateSyntaxError',
    'VersionParseError',
    'ConsistencyError',
    'DEFAULT_TEMPLATE',
    'CompiledTemplate',
    'IncrementFlags',
    'Segment',
    'SegmentKind',
    'compile_template',
    'TimezoneMode',
    'VersionState',
    'render',
    'recognizer_pattern',
    'parse',
    'increment_version',
    'update_major',
    'refresh_timestamp',
    'BuildVersion',
    'filter_tags',
    'latest_version',
    'next_version'
]
