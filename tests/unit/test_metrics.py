"""Unit tests for evaluation metrics."""

from __future__ import annotations

import math

import pytest

from sparse_logreg.common.metrics import (
    ConfusionCounts,
    EvaluationMetrics,
    compute_metrics,
    count_confusion,
    evaluate,
)
from sparse_logreg.data import Example


class TestCountConfusion:
    """Tests for count_confusion."""

    def test_one_of_each_outcome(self) -> None:
        counts = count_confusion([1, 1, 0, 0], [0.9, 0.4, 0.1, 0.6])
        assert counts == ConfusionCounts(tp=1, tn=1, fp=1, fn=1)

    def test_threshold_is_inclusive(self) -> None:
        counts = count_confusion([1, 0], [0.5, 0.5])
        assert counts == ConfusionCounts(tp=1, tn=0, fp=1, fn=0)

    def test_minus_one_is_negative(self) -> None:
        counts = count_confusion([-1, -1, 1], [0.2, 0.7, 0.8])
        assert counts == ConfusionCounts(tp=1, tn=1, fp=1, fn=0)

    def test_empty_input(self) -> None:
        assert count_confusion([], []) == ConfusionCounts()

    def test_length_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match='length'):
            count_confusion([1, 0], [0.3])


class TestComputeMetrics:
    """Tests for compute_metrics."""

    def test_balanced_confusion(self) -> None:
        metrics = compute_metrics(ConfusionCounts(tp=1, tn=1, fp=1, fn=1))
        assert isinstance(metrics, EvaluationMetrics)
        assert metrics.accuracy == 0.5
        assert metrics.precision == 0.5
        assert metrics.recall == 0.5
        assert metrics.mcc == 0.0

    def test_perfect_classifier(self) -> None:
        metrics = compute_metrics(ConfusionCounts(tp=3, tn=2, fp=0, fn=0))
        assert metrics.accuracy == 1.0
        assert metrics.precision == 1.0
        assert metrics.recall == 1.0
        assert metrics.mcc == pytest.approx(1.0)

    def test_mcc_formula(self) -> None:
        tp, tn, fp, fn = 6, 3, 1, 2
        metrics = compute_metrics(ConfusionCounts(tp=tp, tn=tn, fp=fp, fn=fn))
        expected = (tp * tn - fp * fn) / math.sqrt((tp + fp) * (tp + fn) * (tn + fp) * (tn + fn))
        assert metrics.mcc == pytest.approx(expected)

    def test_no_positive_predictions_gives_nan(self) -> None:
        """Zero denominators follow IEEE-754 instead of raising."""
        metrics = compute_metrics(ConfusionCounts(tp=0, tn=2, fp=0, fn=2))
        assert math.isnan(metrics.precision)
        assert metrics.recall == 0.0
        assert math.isnan(metrics.mcc)
        assert metrics.accuracy == 0.5

    def test_empty_counts_do_not_crash(self) -> None:
        metrics = compute_metrics(ConfusionCounts())
        assert math.isnan(metrics.accuracy)
        assert math.isnan(metrics.precision)
        assert math.isnan(metrics.recall)

    def test_as_dict_includes_counts(self) -> None:
        data = compute_metrics(ConfusionCounts(tp=1, tn=1, fp=1, fn=1)).as_dict()
        assert data['tp'] == 1
        assert data['accuracy'] == 0.5


class TestEvaluate:
    def test_evaluate_scores_each_example(self) -> None:
        weights = {1: 2.0}
        dataset = [
            Example(label=1, features={1: 1.0}, raw_label=1),
            Example(label=0, features={1: -1.0}, raw_label=-1),
            Example(label=1, features={1: -0.5}, raw_label=1),
            Example(label=0, features={5: 1.0}, raw_label=0),
        ]

        result = evaluate(weights, dataset)

        assert result.predictions == [1, 0, 0, 1]
        assert result.probabilities[3] == 0.5
        assert result.metrics.counts == ConfusionCounts(tp=1, tn=1, fp=1, fn=1)
        assert result.metrics.accuracy == 0.5
