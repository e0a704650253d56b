"""Mutable state threaded through SGD epochs."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

import numpy as np

from ....data.examples import Example, feature_ids


@dataclass
class TrainerState:
    weights: dict[int, float] = field(default_factory=dict)
    total_l1: dict[int, float] = field(default_factory=dict)
    mu: float = 0.0
    iterations: int = 0


def init_state(
    dataset: Iterable[Example],
    randomize: bool = False,
    rng: np.random.Generator | None = None,
) -> TrainerState:
    """Build a state with one weight per feature seen in ``dataset``."""
    ids = sorted(feature_ids(dataset))
    if randomize:
        rng = rng if rng is not None else np.random.default_rng()
        values = rng.uniform(-1.0, 1.0, size=len(ids))
        weights = {feature_id: float(value) for feature_id, value in zip(ids, values)}
    else:
        weights = dict.fromkeys(ids, 0.0)
    return TrainerState(weights=weights, total_l1=dict.fromkeys(ids, 0.0))


def convergence_norm(current: Mapping[int, float], previous: Mapping[int, float]) -> float:
    """Euclidean distance over the union of keys; missing keys count as 0."""
    total = 0.0
    for feature_id in current.keys() | previous.keys():
        diff = current.get(feature_id, 0.0) - previous.get(feature_id, 0.0)
        total += diff * diff
    return math.sqrt(total)


def l1_norm(weights: Mapping[int, float]) -> float:
    return sum(abs(value) for value in weights.values())


def sparsity(weights: Mapping[int, float]) -> float:
    """Fraction of weights that are non-zero."""
    if not weights:
        return 0.0
    return count_nonzero(weights) / len(weights)


def count_nonzero(weights: Mapping[int, float]) -> int:
    return sum(1 for value in weights.values() if value != 0.0)
