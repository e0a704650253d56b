"""
Evaluation of a fixed weight vector on a held-out dataset.

The positive class is label 1; every other label is negative. Metrics follow
IEEE-754 on empty denominators: a run with no positive predictions reports a
NaN precision rather than raising.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np
from sklearn.metrics import confusion_matrix

from ..data.examples import Example
from ..models.logreg.classifier import DEFAULT_THRESHOLD, classify, predict_label
from ..utils import get_logger, json_log

log = get_logger(__name__)


@dataclass(frozen=True)
class ConfusionCounts:
    tp: int = 0
    tn: int = 0
    fp: int = 0
    fn: int = 0

    @property
    def total(self) -> int:
        return self.tp + self.tn + self.fp + self.fn

    @property
    def correct(self) -> int:
        return self.tp + self.tn


@dataclass(frozen=True)
class EvaluationMetrics:
    """Confusion counts and the scores derived from them."""

    counts: ConfusionCounts
    accuracy: float
    precision: float
    recall: float
    mcc: float

    def as_dict(self) -> dict[str, Any]:
        return {
            'accuracy': self.accuracy,
            'precision': self.precision,
            'recall': self.recall,
            'mcc': self.mcc,
            **asdict(self.counts),
        }


@dataclass(frozen=True)
class EvaluationResult:
    metrics: EvaluationMetrics
    probabilities: list[float] = field(default_factory=list)
    predictions: list[int] = field(default_factory=list)


def count_confusion(
    labels: Sequence[int],
    probabilities: Sequence[float],
    threshold: float = DEFAULT_THRESHOLD,
) -> ConfusionCounts:
    """
    Tally the confusion matrix at ``threshold``.

    Args:
        labels: True labels; only 1 counts as positive (0 and -1 are negative).
        probabilities: Predicted P(y=1) for each example.
        threshold: Probability at or above which an example is predicted positive.
    """
    if len(labels) != len(probabilities):
        raise ValueError(
            f'labels and probabilities differ in length: {len(labels)} != {len(probabilities)}'
        )
    if not labels:
        return ConfusionCounts()

    y_true = np.asarray(labels) == 1
    y_pred = np.asarray(probabilities, dtype=float) >= threshold
    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[False, True]).ravel()
    return ConfusionCounts(tp=int(tp), tn=int(tn), fp=int(fp), fn=int(fn))


def compute_metrics(counts: ConfusionCounts) -> EvaluationMetrics:
    """Derive accuracy, precision, recall and MCC from confusion counts."""
    tp, tn, fp, fn = (np.float64(v) for v in (counts.tp, counts.tn, counts.fp, counts.fn))
    with np.errstate(divide='ignore', invalid='ignore'):
        accuracy = (tp + tn) / (tp + tn + fp + fn)
        precision = tp / (tp + fp)
        recall = tp / (tp + fn)
        mcc = (tp * tn - fp * fn) / np.sqrt((tp + fp) * (tp + fn) * (tn + fp) * (tn + fn))
    return EvaluationMetrics(
        counts=counts,
        accuracy=float(accuracy),
        precision=float(precision),
        recall=float(recall),
        mcc=float(mcc),
    )


def evaluate(
    weights: Mapping[int, float],
    dataset: Sequence[Example],
    threshold: float = DEFAULT_THRESHOLD,
) -> EvaluationResult:
    """Score ``dataset`` with ``weights`` and compute classification metrics."""
    probabilities = [classify(example.features, weights) for example in dataset]
    predictions = [predict_label(p, threshold) for p in probabilities]
    counts = count_confusion([example.label for example in dataset], probabilities, threshold)
    metrics = compute_metrics(counts)

    log.info(
        json_log(
            'evaluate.completed',
            component='metrics',
            examples=len(dataset),
            threshold=threshold,
            **metrics.as_dict(),
        )
    )
    return EvaluationResult(metrics=metrics, probabilities=probabilities, predictions=predictions)
