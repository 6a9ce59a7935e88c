"""
Human Typed Input Output Schemas

This module defines Pydantic V2 models for the confidence assessment and
for the versioned TypingProof JSON contract. Wire keys are camelCase and
serialization is deterministic (sorted keys, fixed indentation) so that
identical inputs always produce byte-identical output.
"""

import json
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Constants
# =============================================================================

PROOF_VERSION = "1.0"

# Interpretation buckets: (minimum score, text), checked top-down
_INTERPRETATIONS: Tuple[Tuple[int, str], ...] = (
    (80, "High confidence: likely human typed"),
    (50, "Medium confidence: possibly human typed"),
    (20, "Low confidence: suspicious pattern"),
    (0, "Very low confidence: likely pasted or automated"),
)


# =============================================================================
# Exceptions
# =============================================================================

class EncodingFailed(Exception):
    """Raised when a typing proof cannot be encoded to the requested format."""

    def __init__(self, message: str = "Failed to encode typing proof to the requested format") -> None:
        super().__init__(message)


# =============================================================================
# Enums
# =============================================================================

class FactorName(str, Enum):
    """Scoring factors, in the order they are evaluated and reported."""
    SAMPLE_VOLUME = "Sample Volume"
    TIMING_VARIANCE = "Timing Variance"
    TYPING_SPEED = "Typing Speed"
    CORRECTION_RATE = "Correction Rate"
    BURST_DETECTION = "Burst Detection"
    PASTE_DETECTION = "Paste Detection"


def interpret_score(score: int) -> str:
    """Map an overall score to its human-readable interpretation."""
    for minimum, text in _INTERPRETATIONS:
        if score >= minimum:
            return text
    return _INTERPRETATIONS[-1][1]


# =============================================================================
# Confidence Assessment
# =============================================================================

class ScoringFactor(BaseModel):
    """One heuristic's verdict."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Factor name (see FactorName)")
    score: int = Field(..., ge=0, le=100, description="Factor score from 0 to 100")
    explanation: str = Field(..., description="Human-readable explanation")


class HumanConfidenceScore(BaseModel):
    """Overall confidence that the input was typed by a human."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100, description="Overall confidence from 0 to 100")
    factors: Tuple[ScoringFactor, ...] = Field(..., description="Per-factor breakdown")

    @field_validator("factors")
    @classmethod
    def factors_in_fixed_order(cls, v: Tuple[ScoringFactor, ...]) -> Tuple[ScoringFactor, ...]:
        expected = [name.value for name in FactorName]
        actual = [factor.name for factor in v]
        if actual != expected:
            raise ValueError(f"factors must be exactly {expected}, got {actual}")
        return v

    @computed_field
    @property
    def interpretation(self) -> str:
        return interpret_score(self.score)

    def factor(self, name: FactorName) -> ScoringFactor:
        """Return the factor with the given name."""
        for factor in self.factors:
            if factor.name == name.value:
                return factor
        raise KeyError(name)


# =============================================================================
# Typing Proof (Wire Format)
# =============================================================================

class _WireModel(BaseModel):
    """Base for proof sections: frozen, camelCase on the wire."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ProofMetadata(_WireModel):
    """Metadata about the export."""
    exported_at: str = Field(..., description="ISO-8601 wall-clock time of the export")
    session_started_at: Optional[str] = Field(None, description="ISO-8601 reconstructed session start")
    session_duration_ms: Optional[int] = Field(None, description="Session duration in milliseconds")
    sdk_version: str = Field(..., description="Library version that produced the proof")
    platform: str = Field(..., description="Platform identifier")
    platform_version: str = Field(..., description="Platform OS version")


class ExportedMetrics(_WireModel):
    """Aggregated typing metrics, timing in milliseconds."""
    total_keystrokes: int = Field(..., ge=0)
    deletion_count: int = Field(..., ge=0)
    correction_rate: float = Field(..., ge=0.0, le=1.0)
    average_interval_ms: Optional[float] = None
    timing_variance_ms: Optional[float] = None
    estimated_wpm: Optional[int] = Field(None, alias="estimatedWPM")


class ExportedScoringFactor(_WireModel):
    """Scoring factor paired with its weight."""
    name: str
    score: int = Field(..., ge=0, le=100)
    weight: float = Field(..., ge=0.0, le=1.0)
    explanation: str


class ExportedConfidence(_WireModel):
    """Overall score with factor breakdown."""
    score: int = Field(..., ge=0, le=100)
    interpretation: str
    factors: Tuple[ExportedScoringFactor, ...]


class ExportedEvent(_WireModel):
    """Keystroke timing relative to the session start."""
    index: int = Field(..., ge=0)
    timestamp_ms: int
    character: str
    interval_ms: Optional[int] = None


class ContentVerification(_WireModel):
    """Fingerprint of the final text. The text itself is never exported."""
    length: int = Field(..., ge=0)
    sha256: str = Field(..., min_length=64, max_length=64)


class TypingProof(_WireModel):
    """
    Versioned, serializable record of a typing session.

    ``events`` and ``content`` are always present on the wire, as ``null``
    when the export options leave them out. Other absent optionals are
    omitted.
    """
    version: str = Field(PROOF_VERSION, description="Proof schema version")
    metadata: ProofMetadata
    metrics: ExportedMetrics
    confidence: ExportedConfidence
    events: Optional[Tuple[ExportedEvent, ...]] = None
    content: Optional[ContentVerification] = None

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def _wire_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        data.setdefault("events", None)
        data.setdefault("content", None)
        return data

    def to_json_data(self) -> bytes:
        """Encode as UTF-8 JSON bytes with sorted keys."""
        try:
            text = json.dumps(
                self._wire_dict(),
                sort_keys=True,
                indent=2,
                ensure_ascii=False,
                allow_nan=False,
            )
            return text.encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingFailed() from e

    def to_json_string(self) -> str:
        """Encode as a JSON string."""
        data = self.to_json_data()
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingFailed() from e

    def to_dict(self) -> Dict[str, Any]:
        """Encode and parse back into plain Python containers."""
        data = self.to_json_data()
        try:
            parsed = json.loads(data)
        except ValueError as e:
            raise EncodingFailed() from e
        if not isinstance(parsed, dict):
            raise EncodingFailed()
        return parsed

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "TypingProof":
        """Parse a proof previously produced by to_json_data/to_json_string."""
        return cls.model_validate_json(data)


# =============================================================================
# Local Service Responses
# =============================================================================

class AnalyzeResponse(_WireModel):
    """Response for /analyze: metrics and confidence, no metadata."""
    metrics: ExportedMetrics
    confidence: ExportedConfidence


class HealthResponse(BaseModel):
    status: str
    version: str
