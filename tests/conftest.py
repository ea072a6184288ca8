"""
Test configuration and shared fixtures for buildversion tests
"""
import logging
import shutil
import tempfile
import pytest
from pathlib import Path
from datetime import datetime, timedelta, timezone

ENV_VARS = [
    'BUILDVERSION_TEMPLATE',
    'BUILDVERSION_RECOGNIZER',
    'BUILDVERSION_LOCAL_TIMEZONE',
    'LOG_LEVEL',
    'DEBUG_MODE',
]


class FakeClock:
    """Clock returning a fixed start instant, advancing one step per call"""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        self.calls += 1
        return value


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of config loading"""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by setup_logging"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def epoch():
    return datetime(1970, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 1, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def full_template():
    """Template using every counter plus date and time"""
    return "v%M%.%m%.%b%-%d%.%t%"
