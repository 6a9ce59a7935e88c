"""
Human Typed Input Session Recorder

Stateful owner of a typing session's event log. The host text field feeds
it insertions, deletions and pastes; it stamps them on a monotonic clock,
tracks the interval since the previous keystroke, and hands immutable
EventLog snapshots to the analysis pipeline.

The recorder never reads device input itself and never stores wall-clock
time: the wall clock is only consulted at export.
"""

import logging
import time
from typing import Callable, List, Optional

from humantyped.schemas.inputs import (
    DELETE_SENTINEL,
    EventLog,
    KeystrokeEvent,
    PasteEvent,
)


logger = logging.getLogger(__name__)


class TypingSession:
    """
    Records typing events for one session at a time.

    Single writer: the host calls the record_* methods from its input
    handling thread and calls snapshot() whenever it needs an analysis. A
    snapshot is a value; later recording does not change it.

    Usage:
        session = TypingSession()
        session.record_insert("h")
        session.record_insert("i")
        session.record_delete()
        log = session.snapshot()
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        """
        Initialize an empty session.

        Args:
            clock: Monotonic clock in seconds (default: time.monotonic)
        """
        self._clock: Callable[[], float] = clock or time.monotonic
        self._keystrokes: List[KeystrokeEvent] = []
        self._pastes: List[PasteEvent] = []
        self._session_start: Optional[float] = None
        self._last_keystroke_time: Optional[float] = None

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    def record_insert(self, text: str, timestamp: Optional[float] = None) -> KeystrokeEvent:
        """Record typed text (usually one character)."""
        return self._record_keystroke(text, timestamp)

    def record_delete(self, timestamp: Optional[float] = None) -> KeystrokeEvent:
        """Record a backspace/deletion."""
        return self._record_keystroke(DELETE_SENTINEL, timestamp)

    def record_paste(self, character_count: int, timestamp: Optional[float] = None) -> Optional[PasteEvent]:
        """
        Record a paste action.

        Pastes do not affect keystroke intervals. An empty paste is not an
        event and returns None.
        """
        if character_count <= 0:
            logger.debug("Ignoring empty paste")
            return None

        now = self._now(timestamp)
        self._start_if_needed(now)

        event = PasteEvent(timestamp=now, character_count=character_count)
        self._pastes.append(event)
        logger.debug(f"Paste #{len(self._pastes)}: {character_count} chars")
        return event

    def _record_keystroke(self, character: str, timestamp: Optional[float]) -> KeystrokeEvent:
        now = self._now(timestamp)
        self._start_if_needed(now)

        interval = None
        if self._last_keystroke_time is not None:
            interval = max(0.0, now - self._last_keystroke_time)

        event = KeystrokeEvent(
            timestamp=now,
            character=character,
            interval_since_previous=interval,
        )
        self._keystrokes.append(event)
        self._last_keystroke_time = now
        return event

    # -------------------------------------------------------------------------
    # Snapshot & Reset
    # -------------------------------------------------------------------------

    @property
    def session_start(self) -> Optional[float]:
        return self._session_start

    @property
    def keystroke_count(self) -> int:
        return len(self._keystrokes)

    def snapshot(self) -> EventLog:
        """Return an immutable copy of the current event log."""
        return EventLog(
            keystrokes=tuple(self._keystrokes),
            pastes=tuple(self._pastes),
            session_start=self._session_start,
        )

    def reset(self) -> None:
        """Clear all captured data to begin a new, independent session."""
        logger.debug(
            f"Resetting session ({len(self._keystrokes)} keystrokes, {len(self._pastes)} pastes)"
        )
        self._keystrokes.clear()
        self._pastes.clear()
        self._session_start = None
        self._last_keystroke_time = None

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _now(self, timestamp: Optional[float]) -> float:
        return self._clock() if timestamp is None else timestamp

    def _start_if_needed(self, now: float) -> None:
        if self._session_start is None:
            self._session_start = now
            logger.debug(f"Session started at monotonic {now:.3f}")
