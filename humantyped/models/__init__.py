"""
Human Typed Input Models

Rule-based human typing confidence engine.
"""

from humantyped.models.confidence import FACTOR_WEIGHTS, ConfidenceScorer

__all__ = [
    "FACTOR_WEIGHTS",
    "ConfidenceScorer",
]
