"""
Human Typed Input Test Suite - Shared Pytest Fixtures

This conftest.py provides fixtures for all test categories including:
- Event log builders for literal timing fixtures
- Fixed wall-clock and monotonic clocks for reproducible exports
- Scorer, exporter and analyzer instances

Usage:
    pytest tests/ -v -s
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

import pytest

from humantyped.analyzer import HumanTypedAnalyzer
from humantyped.config import Settings
from humantyped.exporter import ProofExporter
from humantyped.models.confidence import ConfidenceScorer
from humantyped.schemas.inputs import DELETE_SENTINEL, EventLog, KeystrokeEvent, PasteEvent


# =============================================================================
# Constants
# =============================================================================

SESSION_START = 100.0
FIXED_NOW = datetime(2026, 10, 17, 9, 30, 0, 123000, tzinfo=timezone.utc)
FIXED_MONOTONIC = 110.0

# 34 intervals alternating 113 ms / 257 ms: mean 185 ms, population stddev 72 ms
NATURAL_INTERVALS: List[float] = [0.113, 0.257] * 17


# =============================================================================
# Event Log Builders
# =============================================================================

def build_log(
    intervals: Sequence[float],
    deletions: Sequence[int] = (),
    pastes: Sequence[int] = (),
    start: Optional[float] = SESSION_START,
    text: str = "the quick brown fox jumps over the lazy dog",
) -> EventLog:
    """
    Build an EventLog of len(intervals) + 1 keystrokes.

    The first keystroke lands on ``start`` with no interval; each following
    keystroke is ``interval`` seconds after the previous one. Indexes in
    ``deletions`` become [DELETE] events. Each entry in ``pastes`` is a paste
    of that many characters, appended after the last keystroke.
    """
    origin = start if start is not None else 0.0
    timestamp = origin
    keystrokes = []
    for index in range(len(intervals) + 1):
        interval = None
        if index > 0:
            interval = intervals[index - 1]
            timestamp += interval
        character = DELETE_SENTINEL if index in deletions else text[index % len(text)]
        keystrokes.append(KeystrokeEvent(
            timestamp=timestamp,
            character=character,
            interval_since_previous=interval,
        ))

    paste_events = [
        PasteEvent(timestamp=timestamp + 0.5 * (i + 1), character_count=count)
        for i, count in enumerate(pastes)
    ]

    return EventLog(
        keystrokes=tuple(keystrokes),
        pastes=tuple(paste_events),
        session_start=start,
    )


@pytest.fixture
def make_log() -> Callable[..., EventLog]:
    """Factory fixture wrapping build_log."""
    return build_log


@pytest.fixture
def natural_log() -> EventLog:
    """35 keystrokes, 3 deletions, natural human timing, no pastes."""
    return build_log(NATURAL_INTERVALS, deletions=(10, 20, 30))


@pytest.fixture
def empty_log() -> EventLog:
    """A session with nothing recorded."""
    return EventLog()


# =============================================================================
# Clock & Settings Fixtures
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Fixed settings so metadata does not depend on the host."""
    return Settings(
        sdk_version="1.0.0",
        platform="TestOS",
        platform_version="1.2.3",
        log_level="DEBUG",
        host="127.0.0.1",
        port=8000,
    )


class FakeClock:
    """Monotonic clock that returns queued values, then repeats the last one."""

    def __init__(self, *values: float) -> None:
        self._values = list(values)
        self._last = values[0] if values else 0.0

    def __call__(self) -> float:
        if self._values:
            self._last = self._values.pop(0)
        return self._last


@pytest.fixture
def fake_clock() -> Callable[..., FakeClock]:
    """Factory fixture for FakeClock instances."""
    return FakeClock


# =============================================================================
# Engine Fixtures
# =============================================================================

@pytest.fixture
def scorer() -> ConfidenceScorer:
    """Create a ConfidenceScorer instance."""
    return ConfidenceScorer()


@pytest.fixture
def exporter(test_settings) -> ProofExporter:
    """ProofExporter with frozen clocks."""
    return ProofExporter(
        settings=test_settings,
        wall_clock=lambda: FIXED_NOW,
        monotonic_clock=lambda: FIXED_MONOTONIC,
    )


@pytest.fixture
def analyzer(scorer, exporter) -> HumanTypedAnalyzer:
    """HumanTypedAnalyzer wired to the frozen exporter."""
    return HumanTypedAnalyzer(scorer=scorer, exporter=exporter)
