"""
Human Typed Input

Local, privacy-preserving analysis of typing dynamics: scores how likely a
text value was typed by a human and exports a versioned typing proof.
"""

__version__ = "1.0.0"

from humantyped.analyzer import HumanTypedAnalyzer
from humantyped.exporter import ProofExporter
from humantyped.models.confidence import ConfidenceScorer
from humantyped.processors.metrics import TypingMetrics, compute_metrics
from humantyped.processors.session import TypingSession
from humantyped.schemas.inputs import (
    DELETE_SENTINEL,
    EventLog,
    ExportOptions,
    ExportPreset,
    KeystrokeEvent,
    PasteEvent,
)
from humantyped.schemas.outputs import (
    EncodingFailed,
    HumanConfidenceScore,
    ScoringFactor,
    TypingProof,
)

__all__ = [
    "__version__",
    "HumanTypedAnalyzer",
    "TypingSession",
    "compute_metrics",
    "TypingMetrics",
    "ConfidenceScorer",
    "ProofExporter",
    "DELETE_SENTINEL",
    "KeystrokeEvent",
    "PasteEvent",
    "EventLog",
    "ExportOptions",
    "ExportPreset",
    "ScoringFactor",
    "HumanConfidenceScore",
    "TypingProof",
    "EncodingFailed",
]
