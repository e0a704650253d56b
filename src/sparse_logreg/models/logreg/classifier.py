"""Logistic scoring of sparse examples."""

from __future__ import annotations

import math
from collections.abc import Mapping

from ...data.examples import LABEL_ID

# exp() overflows well past this; the clamp keeps the output inside (0, 1).
SIGMOID_CLAMP = 20.0
DEFAULT_THRESHOLD = 0.5


def sigmoid(x: float) -> float:
    """Logistic function with the input clamped to [-20, 20]."""
    x = min(max(x, -SIGMOID_CLAMP), SIGMOID_CLAMP)
    return 1.0 / (1.0 + math.exp(-x))


def logit(features: Mapping[int, float], weights: Mapping[int, float]) -> float:
    """Linear score; the label slot and unseen features contribute nothing."""
    total = 0.0
    for feature_id, value in features.items():
        if feature_id != LABEL_ID:
            total += value * weights.get(feature_id, 0.0)
    return total


def classify(features: Mapping[int, float], weights: Mapping[int, float]) -> float:
    """Return P(y=1 | features) under ``weights``."""
    return sigmoid(logit(features, weights))


def predict_label(probability: float, threshold: float = DEFAULT_THRESHOLD) -> int:
    """Return 1 when ``probability`` reaches ``threshold``, else 0."""
    return 1 if probability >= threshold else 0
