"""
Human Typed Input Proof Exporter

Assembles metrics, confidence and (optionally) raw keystroke timing and a
content fingerprint into a versioned TypingProof.

Timestamps:
    Events carry monotonic timestamps only. The wall clock is read once, at
    export, and the session start is placed on it by subtracting the elapsed
    monotonic time from "now". This is best-effort: a suspended process can
    skew it.
"""

import hashlib
import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from humantyped.config import Settings, get_settings
from humantyped.models.confidence import FACTOR_WEIGHTS, estimate_wpm, round_half_up
from humantyped.processors.metrics import TypingMetrics
from humantyped.schemas.inputs import DELETE_SENTINEL, EventLog, ExportOptions
from humantyped.schemas.outputs import (
    PROOF_VERSION,
    ContentVerification,
    EncodingFailed,
    ExportedConfidence,
    ExportedEvent,
    ExportedMetrics,
    ExportedScoringFactor,
    FactorName,
    HumanConfidenceScore,
    ProofMetadata,
    TypingProof,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

REDACTED_CHARACTER = "*"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 with milliseconds and UTC offset, e.g. 2026-10-17T09:30:00.123+00:00."""
    return moment.isoformat(timespec="milliseconds")


def _to_ms(seconds: float) -> int:
    """Seconds to whole milliseconds."""
    return round_half_up(seconds * 1000.0)


# =============================================================================
# Proof Exporter
# =============================================================================

class ProofExporter:
    """
    Builds TypingProof values from analysis results.

    Clocks are injectable so that exports can be reproduced exactly.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        wall_clock: Optional[Callable[[], datetime]] = None,
        monotonic_clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._wall_clock = wall_clock or _utc_now
        self._monotonic_clock = monotonic_clock or time.monotonic

    def export(
        self,
        log: EventLog,
        metrics: TypingMetrics,
        score: HumanConfidenceScore,
        options: Optional[ExportOptions] = None,
        text: Optional[str] = None,
        monotonic_now: Optional[float] = None,
    ) -> TypingProof:
        """
        Assemble a proof.

        Args:
            log: Event log snapshot the metrics were computed from
            metrics: TypingMetrics for the snapshot
            score: HumanConfidenceScore for the metrics
            options: Export toggles (default: standard preset)
            text: Final text, read only when content verification is requested
            monotonic_now: Current time on the events' monotonic clock
                (default: this process's monotonic clock)

        Returns:
            TypingProof ready for serialization
        """
        options = options or ExportOptions.standard()

        events: Optional[Tuple[ExportedEvent, ...]] = None
        if options.include_raw_events:
            events = tuple(self.build_events(log, redact=options.redact_characters))

        content: Optional[ContentVerification] = None
        if options.include_content_verification:
            content = self.build_content_verification(text or "")

        proof = TypingProof(
            version=PROOF_VERSION,
            metadata=self.build_metadata(log, metrics, monotonic_now),
            metrics=self.build_metrics(metrics),
            confidence=self.build_confidence(score),
            events=events,
            content=content,
        )

        logger.debug(
            f"Exported proof: score={score.score}, "
            f"events={'off' if events is None else len(events)}, "
            f"content={'on' if content is not None else 'off'}, "
            f"redacted={options.redact_characters}"
        )

        return proof

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def build_metadata(
        self,
        log: EventLog,
        metrics: TypingMetrics,
        monotonic_now: Optional[float] = None,
    ) -> ProofMetadata:
        now = self._wall_clock()

        session_started_at: Optional[str] = None
        if log.session_start is not None:
            current = self._monotonic_clock() if monotonic_now is None else monotonic_now
            elapsed = current - log.session_start
            try:
                session_started_at = format_timestamp(now - timedelta(seconds=elapsed))
            except OverflowError:
                logger.warning(
                    f"Session start not representable ({elapsed:.3f}s before export), omitting"
                )

        duration_ms: Optional[int] = None
        if metrics.session_duration is not None:
            duration_ms = _to_ms(metrics.session_duration)

        return ProofMetadata(
            exported_at=format_timestamp(now),
            session_started_at=session_started_at,
            session_duration_ms=duration_ms,
            sdk_version=self.settings.sdk_version,
            platform=self.settings.platform,
            platform_version=self.settings.platform_version,
        )

    def build_metrics(self, metrics: TypingMetrics) -> ExportedMetrics:
        average_ms = None
        if metrics.average_interval is not None:
            average_ms = metrics.average_interval * 1000.0

        stddev_ms = None
        if metrics.timing_stddev is not None:
            stddev_ms = metrics.timing_stddev * 1000.0

        wpm = estimate_wpm(metrics.average_interval)

        return ExportedMetrics(
            total_keystrokes=metrics.total_keystrokes,
            deletion_count=metrics.deletion_count,
            correction_rate=metrics.correction_rate,
            average_interval_ms=average_ms,
            timing_variance_ms=stddev_ms,
            estimated_wpm=int(wpm) if wpm is not None else None,
        )

    def build_confidence(self, score: HumanConfidenceScore) -> ExportedConfidence:
        factors = tuple(
            ExportedScoringFactor(
                name=factor.name,
                score=factor.score,
                weight=FACTOR_WEIGHTS[FactorName(factor.name)],
                explanation=factor.explanation,
            )
            for factor in score.factors
        )
        return ExportedConfidence(
            score=score.score,
            interpretation=score.interpretation,
            factors=factors,
        )

    def build_events(self, log: EventLog, redact: bool = False) -> List[ExportedEvent]:
        """Keystrokes relative to the session start; empty without a session."""
        if log.session_start is None:
            return []

        exported: List[ExportedEvent] = []
        for index, event in enumerate(log.keystrokes):
            character = event.character
            # Deletions reveal editing behaviour, not content
            if redact and character != DELETE_SENTINEL:
                character = REDACTED_CHARACTER

            interval_ms = None
            if event.interval_since_previous is not None:
                interval_ms = _to_ms(event.interval_since_previous)

            exported.append(ExportedEvent(
                index=index,
                timestamp_ms=_to_ms(event.timestamp - log.session_start),
                character=character,
                interval_ms=interval_ms,
            ))
        return exported

    def build_content_verification(self, text: str) -> ContentVerification:
        try:
            data = text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodingFailed("Final text is not encodable as UTF-8") from e
        return ContentVerification(length=len(text), sha256=hashlib.sha256(data).hexdigest())
