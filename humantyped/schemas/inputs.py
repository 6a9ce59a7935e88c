"""
Human Typed Input Schemas - Event Model

This module defines Pydantic V2 models for:
- Captured typing events (KeystrokeEvent, PasteEvent)
- The immutable event log snapshot handed to the analysis core (EventLog)
- Export configuration and its named presets (ExportOptions)
- Local service request bodies (ExportRequest)
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Constants
# =============================================================================

# Character recorded for a backspace/deletion action
DELETE_SENTINEL = "[DELETE]"


# =============================================================================
# Typing Event Models
# =============================================================================

class KeystrokeEvent(BaseModel):
    """Single keystroke (insertion or deletion) captured by the host text field."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    timestamp: float = Field(..., ge=0.0, description="Monotonic timestamp in seconds")
    character: str = Field(..., description="Inserted text, or [DELETE] for a deletion")
    interval_since_previous: Optional[float] = Field(
        None,
        ge=0.0,
        description="Seconds since the previous keystroke, None for the first one"
    )

    @property
    def is_deletion(self) -> bool:
        return self.character == DELETE_SENTINEL


class PasteEvent(BaseModel):
    """Single paste action captured by the host text field."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    timestamp: float = Field(..., ge=0.0, description="Monotonic timestamp in seconds")
    character_count: int = Field(..., ge=1, description="Characters introduced by the paste")


# =============================================================================
# Event Log Snapshot
# =============================================================================

class EventLog(BaseModel):
    """
    Immutable snapshot of one typing session.

    Produced by the session recorder (or any capture collaborator) and passed
    into every analysis call. Events must already be ordered by timestamp;
    nothing downstream sorts them.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    keystrokes: Tuple[KeystrokeEvent, ...] = Field(
        default=(),
        description="Keystroke events in capture order"
    )
    pastes: Tuple[PasteEvent, ...] = Field(
        default=(),
        description="Paste events in capture order"
    )
    session_start: Optional[float] = Field(
        None,
        ge=0.0,
        description="Monotonic timestamp of the first keystroke or paste"
    )

    @property
    def is_empty(self) -> bool:
        return not self.keystrokes and not self.pastes


# =============================================================================
# Export Configuration
# =============================================================================

class ExportPreset(str, Enum):
    """Named export configurations."""
    STANDARD = "standard"
    MINIMAL = "minimal"
    REDACTED = "redacted"
    FULL = "full"


class ExportOptions(BaseModel):
    """
    Toggles controlling what a typing proof contains.

    The defaults match the ``standard`` preset. Use the named constructors for
    the presets, or build any combination directly.
    """
    model_config = ConfigDict(frozen=True)

    include_raw_events: bool = Field(True, description="Export per-keystroke timing")
    include_content_verification: bool = Field(
        False,
        description="Export length and SHA-256 of the final text"
    )
    redact_characters: bool = Field(
        False,
        description="Replace exported characters with '*' (deletions are kept)"
    )

    @classmethod
    def standard(cls) -> "ExportOptions":
        return cls(include_raw_events=True, include_content_verification=False, redact_characters=False)

    @classmethod
    def minimal(cls) -> "ExportOptions":
        return cls(include_raw_events=False, include_content_verification=False, redact_characters=False)

    @classmethod
    def redacted(cls) -> "ExportOptions":
        return cls(include_raw_events=True, include_content_verification=False, redact_characters=True)

    @classmethod
    def full(cls) -> "ExportOptions":
        return cls(include_raw_events=True, include_content_verification=True, redact_characters=False)

    @classmethod
    def preset(cls, name: "ExportPreset | str") -> "ExportOptions":
        """Look up a preset by name (``"standard"``, ``"minimal"``, ...)."""
        preset = ExportPreset(name)
        return getattr(cls, preset.value)()


# =============================================================================
# Local Service Requests
# =============================================================================

class ExportRequest(BaseModel):
    """
    Request body for the /export endpoint.

    ``options`` wins over ``preset`` when both are given. ``monotonic_now`` is
    the caller's current monotonic time on the same clock as the event
    timestamps; when omitted the service's own monotonic clock is used, which
    is only meaningful for callers sharing the host's clock.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    session: EventLog = Field(..., description="Event log snapshot to export")
    preset: ExportPreset = Field(ExportPreset.STANDARD, description="Named export preset")
    options: Optional[ExportOptions] = Field(None, description="Explicit export toggles")
    text: Optional[str] = Field(None, description="Final text, used only for content verification")
    monotonic_now: Optional[float] = Field(
        None,
        ge=0.0,
        description="Caller's current monotonic time in seconds"
    )

    def resolved_options(self) -> ExportOptions:
        return self.options if self.options is not None else ExportOptions.preset(self.preset)
