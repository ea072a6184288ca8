#!/usr/bin/env python3
"""
Tag search helpers.

A VCS collaborator hands over the names of existing tags; these helpers
pick out the ones produced by a template and find the newest version
among them. Nothing here talks to a repository.
"""

import logging
from typing import Iterable, List, Optional

from .exceptions import VersionParseError
from .parser import parse
from .state import TimezoneMode, VersionState
from .template import CompiledTemplate
from .version import BuildVersion

logger = logging.getLogger(__name__)


def filter_tags(compiled: CompiledTemplate, names: Iterable[str]) -> List[str]:
    """Return the tag names matching the template's recognizer, in input order."""
    return [name for name in names if compiled.matches(name)]


def latest_version(compiled: CompiledTemplate,
                   names: Iterable[str],
                   timezone_mode: TimezoneMode = TimezoneMode.UTC) -> Optional[BuildVersion]:
    """
    Find the newest version among tag names.

    Versions are ordered by (major, minor, build, timestamp). Tags that
    match the recognizer but cannot be parsed are skipped.

    Returns:
        BuildVersion for the newest tag, or None when no tag matches
    """
    latest = None
    for name in filter_tags(compiled, names):
        try:
            state = parse(compiled, name, timezone_mode)
        except VersionParseError as e:
            logger.debug(f"Skipping tag '{name}': {e}")
            continue

        if latest is None or state.sort_key() > latest.state.sort_key():
            latest = BuildVersion.from_state(compiled, state)

    if latest is not None:
        logger.debug(f"Latest version for '{compiled.template}' is {latest!r}")
    return latest


def next_version(compiled: CompiledTemplate,
                 names: Iterable[str],
                 timezone_mode: TimezoneMode = TimezoneMode.UTC) -> BuildVersion:
    """The latest tagged version advanced by the increment policy.

    With no matching tag a fresh 0.0.0 version stamped "now" is returned.
    """
    version = latest_version(compiled, names, timezone_mode)
    if version is None:
        return BuildVersion.from_state(compiled, VersionState(timezone_mode=timezone_mode))

    version.increment_version()
    return version
