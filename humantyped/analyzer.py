"""
Human Typed Input Analyzer

Runs the analysis pipeline over one event log snapshot:

    EventLog → TypingMetrics → HumanConfidenceScore → TypingProof

Each call is a full recomputation over the snapshot it receives. The
analyzer holds no session state of its own.
"""

import logging
from typing import Optional, Tuple, Union

from humantyped.exporter import ProofExporter
from humantyped.models.confidence import ConfidenceScorer
from humantyped.processors.metrics import TypingMetrics, compute_metrics
from humantyped.processors.session import TypingSession
from humantyped.schemas.inputs import EventLog, ExportOptions
from humantyped.schemas.outputs import HumanConfidenceScore, TypingProof


logger = logging.getLogger(__name__)


class HumanTypedAnalyzer:
    """
    Entry point for scoring and exporting typing sessions.

    Usage:
        analyzer = HumanTypedAnalyzer()
        score = analyzer.score(session.snapshot())
        payload = analyzer.export_typing_proof_json(
            session.snapshot(), ExportOptions.redacted()
        )
    """

    def __init__(
        self,
        scorer: Optional[ConfidenceScorer] = None,
        exporter: Optional[ProofExporter] = None,
    ) -> None:
        self.scorer = scorer or ConfidenceScorer()
        self.exporter = exporter or ProofExporter()

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def get_typing_metrics(self, log: Union[EventLog, TypingSession]) -> TypingMetrics:
        """Aggregate a snapshot (or a recorder's current snapshot) into metrics."""
        return compute_metrics(self._snapshot(log))

    def score(self, log: Union[EventLog, TypingSession]) -> HumanConfidenceScore:
        """Human typing confidence for a snapshot."""
        _, score = self.analyze(log)
        return score

    def analyze(self, log: Union[EventLog, TypingSession]) -> Tuple[TypingMetrics, HumanConfidenceScore]:
        """Metrics and confidence for a snapshot."""
        metrics = compute_metrics(self._snapshot(log))
        score = self.scorer.evaluate(metrics)
        logger.debug(f"Analyzed {metrics.total_keystrokes} keystrokes → confidence {score.score}")
        return metrics, score

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_typing_proof(
        self,
        log: Union[EventLog, TypingSession],
        options: Optional[ExportOptions] = None,
        text: Optional[str] = None,
        monotonic_now: Optional[float] = None,
    ) -> TypingProof:
        """
        Export a snapshot as a TypingProof.

        Args:
            log: Event log snapshot, or a recorder to snapshot now
            options: Export toggles (default: standard preset)
            text: Final text, needed only for content verification
            monotonic_now: Current time on the events' monotonic clock
        """
        snapshot = self._snapshot(log)
        metrics, score = self.analyze(snapshot)
        return self.exporter.export(
            snapshot,
            metrics,
            score,
            options=options,
            text=text,
            monotonic_now=monotonic_now,
        )

    def export_typing_proof_json(
        self,
        log: Union[EventLog, TypingSession],
        options: Optional[ExportOptions] = None,
        text: Optional[str] = None,
        monotonic_now: Optional[float] = None,
    ) -> bytes:
        """Export a snapshot straight to deterministic JSON bytes."""
        proof = self.export_typing_proof(log, options=options, text=text, monotonic_now=monotonic_now)
        return proof.to_json_data()

    @staticmethod
    def _snapshot(log: Union[EventLog, TypingSession]) -> EventLog:
        if isinstance(log, TypingSession):
            return log.snapshot()
        return log
