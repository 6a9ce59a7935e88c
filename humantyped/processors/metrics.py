"""
Human Typed Input Metrics Processor

Stateless aggregation of a typing session's event log into session-level
statistics: keystroke and deletion counts, correction rate, inter-key
interval mean and population standard deviation, session duration, and
paste totals.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from humantyped.schemas.inputs import EventLog, KeystrokeEvent, PasteEvent


logger = logging.getLogger(__name__)


# =============================================================================
# Typing Metrics
# =============================================================================

@dataclass(frozen=True)
class TypingMetrics:
    """
    Session statistics derived from one event log snapshot.

    Timing values are in seconds. Optional values are None when the log holds
    too little data to define them; they are never defaulted to 0.
    """
    total_keystrokes: int
    deletion_count: int
    correction_rate: float
    average_interval: Optional[float]
    timing_stddev: Optional[float]
    session_duration: Optional[float]
    paste_count: int
    pasted_character_count: int
    events: Tuple[KeystrokeEvent, ...] = ()
    paste_events: Tuple[PasteEvent, ...] = ()

    @property
    def intervals(self) -> List[float]:
        """Defined inter-keystroke intervals, in capture order."""
        return [
            e.interval_since_previous
            for e in self.events
            if e.interval_since_previous is not None
        ]


# =============================================================================
# Aggregation
# =============================================================================

def compute_metrics(log: EventLog) -> TypingMetrics:
    """
    Reduce an event log snapshot into TypingMetrics.

    Events are assumed to be ordered by timestamp; they are not re-sorted.

    Args:
        log: Immutable event log snapshot

    Returns:
        TypingMetrics for the snapshot
    """
    events = tuple(log.keystrokes)
    pastes = tuple(log.pastes)

    total = len(events)
    deletions = sum(1 for e in events if e.is_deletion)
    correction_rate = deletions / total if total else 0.0

    intervals = [
        e.interval_since_previous
        for e in events
        if e.interval_since_previous is not None
    ]
    average = _mean(intervals)
    stddev = _population_std(intervals, average)

    # Duration is only defined when the session has both a start and a keystroke
    duration: Optional[float] = None
    if log.session_start is not None and events:
        duration = events[-1].timestamp - log.session_start

    metrics = TypingMetrics(
        total_keystrokes=total,
        deletion_count=deletions,
        correction_rate=correction_rate,
        average_interval=average,
        timing_stddev=stddev,
        session_duration=duration,
        paste_count=len(pastes),
        pasted_character_count=sum(p.character_count for p in pastes),
        events=events,
        paste_events=pastes,
    )

    logger.debug(
        f"Aggregated {total} keystrokes ({deletions} deletions), "
        f"{len(intervals)} intervals, {metrics.paste_count} pastes"
    )

    return metrics


def _mean(values: List[float]) -> Optional[float]:
    """Arithmetic mean, None for no values."""
    if not values:
        return None
    return sum(values) / len(values)


def _population_std(values: List[float], mean: Optional[float]) -> Optional[float]:
    """Population standard deviation (divides by N), None for no values."""
    if not values or mean is None:
        return None
    variance = sum((x - mean) ** 2 for x in values) / len(values)
    return math.sqrt(variance)
