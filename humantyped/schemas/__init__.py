"""
Human Typed Input Schemas

Public exports for input and output Pydantic models.
"""

# Input schemas - Event model
from humantyped.schemas.inputs import (
    DELETE_SENTINEL,
    EventLog,
    KeystrokeEvent,
    PasteEvent,
)

# Input schemas - Export configuration
from humantyped.schemas.inputs import (
    ExportOptions,
    ExportPreset,
    ExportRequest,
)

# Output schemas
from humantyped.schemas.outputs import (
    PROOF_VERSION,
    AnalyzeResponse,
    ContentVerification,
    EncodingFailed,
    ExportedConfidence,
    ExportedEvent,
    ExportedMetrics,
    ExportedScoringFactor,
    FactorName,
    HealthResponse,
    HumanConfidenceScore,
    ProofMetadata,
    ScoringFactor,
    TypingProof,
    interpret_score,
)

__all__ = [
    # Input - Events
    "DELETE_SENTINEL",
    "KeystrokeEvent",
    "PasteEvent",
    "EventLog",
    # Input - Export
    "ExportPreset",
    "ExportOptions",
    "ExportRequest",
    # Output - Confidence
    "FactorName",
    "ScoringFactor",
    "HumanConfidenceScore",
    "interpret_score",
    # Output - Proof
    "PROOF_VERSION",
    "ProofMetadata",
    "ExportedMetrics",
    "ExportedScoringFactor",
    "ExportedConfidence",
    "ExportedEvent",
    "ContentVerification",
    "TypingProof",
    "EncodingFailed",
    # Output - Service
    "AnalyzeResponse",
    "HealthResponse",
]
