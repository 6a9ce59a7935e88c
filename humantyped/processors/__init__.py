"""
Human Typed Input Processors

Public exports for event recording and metric aggregation.
"""

from humantyped.processors.metrics import TypingMetrics, compute_metrics
from humantyped.processors.session import TypingSession

__all__ = [
    "TypingMetrics",
    "TypingSession",
    "compute_metrics",
]
