"""Common utilities shared across model implementations."""

from .metrics import (
    ConfusionCounts,
    EvaluationMetrics,
    EvaluationResult,
    compute_metrics,
    count_confusion,
    evaluate,
)

__all__ = [
    'ConfusionCounts',
    'EvaluationMetrics',
    'EvaluationResult',
    'compute_metrics',
    'count_confusion',
    'evaluate',
]
