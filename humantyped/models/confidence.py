"""
Human Typed Input Confidence Scorer

Pure rules for deciding how likely a typing session was produced by a human.
This module is STATELESS and DETERMINISTIC.

Six independent heuristics each score the session 0-100, then a weighted
sum combines them, subject to two gates:
    1. Too little data: the volume score caps everything at 25.
    2. Multiple pastes: the result is capped at 20.
"""

import logging
import math
from typing import Dict, List, Optional, Tuple

from humantyped.processors.metrics import TypingMetrics
from humantyped.schemas.outputs import FactorName, HumanConfidenceScore, ScoringFactor


logger = logging.getLogger(__name__)


# =============================================================================
# Scoring Configuration
# =============================================================================

# Weight per factor, bound by name. Must sum to 1.0.
FACTOR_WEIGHTS: Dict[FactorName, float] = {
    FactorName.SAMPLE_VOLUME: 0.10,
    FactorName.TIMING_VARIANCE: 0.20,
    FactorName.TYPING_SPEED: 0.15,
    FactorName.CORRECTION_RATE: 0.15,
    FactorName.BURST_DETECTION: 0.20,
    FactorName.PASTE_DETECTION: 0.20,
}

# Gating
VOLUME_GATE_THRESHOLD = 30   # volume factor below this → insufficient data
VOLUME_GATE_CAP = 25
PASTE_GATE_CAP = 20

# An inter-key interval shorter than this is implausible for unaided typing
BURST_INTERVAL_SECONDS = 0.020
MIN_BURST_INTERVALS = 5

# Average characters per word for WPM estimation
CHARS_PER_WORD = 5.0

# Bucket tables: (exclusive upper bound, score, explanation), checked in order.
# The last entry's bound is None and catches everything above.
Bucket = Tuple[Optional[float], int, str]

_VOLUME_BUCKETS: List[Bucket] = [
    (1, 0, "No keystrokes recorded"),
    (6, 20, "Too few keystrokes to analyze reliably"),
    (16, 50, "Minimal data, low confidence analysis"),
    (31, 75, "Adequate sample size"),
    (None, 100, "Good sample size for analysis"),
]

_VARIANCE_BUCKETS: List[Bucket] = [
    (0.1, 15, "Suspiciously consistent timing (robotic)"),
    (0.3, 60, "Low variance, possibly automated"),
    (0.8, 100, "Natural human timing variance"),
    (1.5, 75, "High variance, possibly distracted typing"),
    (None, 40, "Erratic timing, unusual pattern"),
]

_SPEED_BUCKETS: List[Bucket] = [
    (10, 50, "Very slow typing ({wpm} WPM)"),
    (30, 80, "Slow but natural typing ({wpm} WPM)"),
    (80, 100, "Normal typing speed ({wpm} WPM)"),
    (120, 75, "Fast typing ({wpm} WPM)"),
    (200, 40, "Unusually fast ({wpm} WPM)"),
    (None, 10, "Impossibly fast, likely pasted ({wpm} WPM)"),
]

# Exactly zero is handled separately for both ratio factors
_CORRECTION_BUCKETS: List[Bucket] = [
    (0.05, 80, "Few corrections (careful typist)"),
    (0.2, 100, "Normal correction rate (human-like)"),
    (0.4, 70, "High correction rate (sloppy or editing)"),
    (None, 30, "Excessive corrections (unusual pattern)"),
]

_BURST_BUCKETS: List[Bucket] = [
    (0.05, 70, "Few rapid keystrokes (possibly key repeat)"),
    (0.2, 40, "Multiple rapid bursts detected"),
    (None, 10, "Frequent impossible speeds (likely pasted)"),
]


def _bucket(value: float, buckets: List[Bucket]) -> Tuple[int, str]:
    """Return (score, explanation) of the first bucket whose bound exceeds value."""
    for upper, score, explanation in buckets:
        if upper is None or value < upper:
            return score, explanation
    # Tables always end with an open bucket
    _, score, explanation = buckets[-1]
    return score, explanation


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


def estimate_wpm(average_interval: Optional[float]) -> Optional[float]:
    """Words per minute from the mean inter-key interval, None if undefined."""
    if average_interval is None or average_interval <= 0:
        return None
    chars_per_minute = 60.0 / average_interval
    return chars_per_minute / CHARS_PER_WORD


# =============================================================================
# Confidence Scorer
# =============================================================================

class ConfidenceScorer:
    """
    Stateless, deterministic human-typing confidence engine.

    Factors (in reporting order):
        - Sample Volume: enough keystrokes to judge at all
        - Timing Variance: coefficient of variation of inter-key intervals
        - Typing Speed: estimated WPM
        - Correction Rate: share of deletions
        - Burst Detection: share of intervals under 20 ms
        - Paste Detection: explicit paste actions

    Score:
        round(sum(factor * weight)), then gated by volume and paste evidence.
    """

    def evaluate(self, metrics: TypingMetrics) -> HumanConfidenceScore:
        """
        Score a session's metrics.

        Args:
            metrics: TypingMetrics for one event log snapshot

        Returns:
            HumanConfidenceScore with the six factors in fixed order
        """
        factors = [
            self.score_volume(metrics),
            self.score_timing_variance(metrics),
            self.score_typing_speed(metrics),
            self.score_correction_rate(metrics),
            self.score_burst_patterns(metrics),
            self.score_paste_detection(metrics),
        ]
        volume = factors[0]
        paste = factors[-1]

        # =================================================================
        # Gating
        # =================================================================

        if volume.score < VOLUME_GATE_THRESHOLD:
            # Not enough data to judge
            score = min(volume.score, VOLUME_GATE_CAP)
            logger.debug(f"Volume gate applied: volume={volume.score} → score={score}")
        elif paste.score == 0:
            # Paste evidence is near-conclusive
            score = min(round_half_up(self.weighted_sum(factors)), PASTE_GATE_CAP)
            logger.debug(f"Paste gate applied: score={score}")
        else:
            score = round_half_up(self.weighted_sum(factors))

        logger.debug(f"Confidence factors: {[(f.name, f.score) for f in factors]} → {score}")

        return HumanConfidenceScore(score=score, factors=tuple(factors))

    @staticmethod
    def weighted_sum(factors: List[ScoringFactor]) -> float:
        """Sum of factor scores times their bound weights."""
        return sum(f.score * FACTOR_WEIGHTS[FactorName(f.name)] for f in factors)

    # -------------------------------------------------------------------------
    # Factors
    # -------------------------------------------------------------------------

    def score_volume(self, metrics: TypingMetrics) -> ScoringFactor:
        score, explanation = _bucket(metrics.total_keystrokes, _VOLUME_BUCKETS)
        return ScoringFactor(name=FactorName.SAMPLE_VOLUME.value, score=score, explanation=explanation)

    def score_timing_variance(self, metrics: TypingMetrics) -> ScoringFactor:
        name = FactorName.TIMING_VARIANCE.value
        stddev = metrics.timing_stddev
        average = metrics.average_interval
        if stddev is None or average is None:
            return ScoringFactor(name=name, score=0, explanation="No timing data available")

        # Coefficient of variation; all-zero intervals count as perfectly regular
        cv = stddev / average if average > 0 else 0.0
        score, explanation = _bucket(cv, _VARIANCE_BUCKETS)
        return ScoringFactor(name=name, score=score, explanation=explanation)

    def score_typing_speed(self, metrics: TypingMetrics) -> ScoringFactor:
        name = FactorName.TYPING_SPEED.value
        wpm = estimate_wpm(metrics.average_interval)
        if wpm is None:
            return ScoringFactor(name=name, score=0, explanation="No timing data available")

        score, template = _bucket(wpm, _SPEED_BUCKETS)
        return ScoringFactor(name=name, score=score, explanation=template.format(wpm=int(wpm)))

    def score_correction_rate(self, metrics: TypingMetrics) -> ScoringFactor:
        name = FactorName.CORRECTION_RATE.value
        rate = metrics.correction_rate
        if rate <= 0:
            return ScoringFactor(
                name=name,
                score=40,
                explanation="No corrections (unusual for natural typing)"
            )

        score, explanation = _bucket(rate, _CORRECTION_BUCKETS)
        return ScoringFactor(name=name, score=score, explanation=explanation)

    def score_burst_patterns(self, metrics: TypingMetrics) -> ScoringFactor:
        name = FactorName.BURST_DETECTION.value
        intervals = metrics.intervals
        if len(intervals) < MIN_BURST_INTERVALS:
            return ScoringFactor(
                name=name,
                score=50,
                explanation="Not enough data to analyze bursts"
            )

        suspicious = sum(1 for i in intervals if i < BURST_INTERVAL_SECONDS)
        if suspicious == 0:
            return ScoringFactor(name=name, score=100, explanation="No suspicious rapid keystrokes")

        ratio = suspicious / len(intervals)
        score, explanation = _bucket(ratio, _BURST_BUCKETS)
        return ScoringFactor(name=name, score=score, explanation=explanation)

    def score_paste_detection(self, metrics: TypingMetrics) -> ScoringFactor:
        name = FactorName.PASTE_DETECTION.value
        count = metrics.paste_count
        chars = metrics.pasted_character_count

        if count == 0:
            return ScoringFactor(name=name, score=100, explanation="No paste operations detected")
        if count == 1 and chars < 10:
            return ScoringFactor(name=name, score=60, explanation=f"Minor paste detected ({chars} chars)")
        if count == 1:
            return ScoringFactor(name=name, score=20, explanation=f"Paste detected ({chars} chars)")
        return ScoringFactor(
            name=name,
            score=0,
            explanation=f"Multiple pastes detected ({count} times, {chars} total chars)"
        )
