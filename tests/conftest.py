"""Shared pytest fixtures for unit tests."""

import io
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from loopbar.progress.reporter import ProgressReporter


class FakeClock:
    """Deterministic clock: each call advances time by step seconds."""

    def __init__(self, step=0.001, start=100.0):
        self.step = step
        self.now = start

    def __call__(self):
        self.now += self.step
        return self.now


class SpyStream(io.StringIO):
    """StringIO that counts flush() calls."""

    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stream():
    return SpyStream()


@pytest.fixture
def make_reporter(stream, clock):
    """Factory for reporters writing to the spy stream with the fake clock."""
    def _make(**kwargs):
        kwargs.setdefault('stream', stream)
        kwargs.setdefault('clock', clock)
        return ProgressReporter(**kwargs)
    return _make
