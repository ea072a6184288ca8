#!/usr/bin/env python3
"""
Increment policy: decide which counter a generic "increment" advances.

The build number is the most volatile counter, then minor, then major.
Only counters the template actually renders are considered; when none is
rendered the timestamp alone is refreshed.
"""

import logging

from .state import VersionState
from .template import IncrementFlags

logger = logging.getLogger(__name__)


def increment_version(state: VersionState, flags: IncrementFlags) -> str:
    """
    Advance the finest-grained active counter of state.

    Returns:
        Name of the counter advanced ('build', 'minor', 'major') or
        'timestamp' when only the timestamp was refreshed
    """
    if flags.uses_build:
        state.increment_build()
        advanced = "build"
    elif flags.uses_minor:
        state.increment_minor()
        advanced = "minor"
    elif flags.uses_major:
        state.increment_major()
        advanced = "major"
    else:
        state.refresh_timestamp()
        advanced = "timestamp"

    logger.debug(f"Incremented {advanced}: {state!r}")
    return advanced


def update_major(state: VersionState, new_major: int):
    state.update_major(new_major)


def refresh_timestamp(state: VersionState):
    state.refresh_timestamp()
