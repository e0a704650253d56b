from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from ....config import TrainingConfig, validate_training_config
from ....data.examples import LABEL_ID, Dataset, Example
from ....utils.logging import get_logger, json_log
from ..classifier import classify
from ..regularization import PenaltyProtocol, build_penalty
from .state import (
    TrainerState,
    convergence_norm,
    count_nonzero,
    init_state,
    l1_norm,
    sparsity,
)

log = get_logger(__name__)

PROGRESS_EVERY = 100


@dataclass(frozen=True)
class TrainingResult:
    """Outcome of an SGD run."""

    weights: dict[int, float]
    iterations: int
    converged: bool
    final_norm: float
    sparsity: float
    nonzero: int
    l1_norm: float
    history: list[float] = field(default_factory=list)


def sgd_step(
    state: TrainerState,
    example: Example,
    learning_rate: float,
    penalty: PenaltyProtocol,
) -> float:
    """
    Apply one stochastic gradient update for ``example``.

    The prediction is computed once, before any weight moves.

    Returns:
        The predicted probability used for the update.
    """
    penalty.accrue(state)
    predicted = classify(example.features, state.weights)
    error = example.label - predicted
    for feature_id, value in example.features.items():
        if feature_id == LABEL_ID:
            continue
        state.weights[feature_id] = state.weights.get(feature_id, 0.0) + learning_rate * error * value
        penalty.apply(state, feature_id)
    return predicted


def train_epoch(
    state: TrainerState,
    dataset: Sequence[Example],
    order: Sequence[int],
    learning_rate: float,
    penalty: PenaltyProtocol,
) -> float:
    """Run one pass over ``dataset`` in ``order``; return the convergence norm."""
    old_weights = dict(state.weights)
    for index in order:
        sgd_step(state, dataset[index], learning_rate, penalty)
    return convergence_norm(state.weights, old_weights)


class SGDTrainer:
    """Online logistic-regression trainer with optional cumulative L1."""

    def __init__(self, config: TrainingConfig | None = None) -> None:
        self.config = validate_training_config(config or TrainingConfig())
        self.penalty = build_penalty(self.config.l1_weight, self.config.learning_rate)
        self.rng = np.random.default_rng(self.config.seed)

    def epoch_order(self, n_examples: int) -> list[int]:
        if self.config.shuffle:
            return [int(i) for i in self.rng.permutation(n_examples)]
        return list(range(n_examples))

    def init_state(self, dataset: Dataset) -> TrainerState:
        return init_state(dataset, randomize=self.config.randomize_weights, rng=self.rng)

    def fit(self, dataset: Dataset, state: TrainerState | None = None) -> TrainingResult:
        """Train until the weights stop moving or the iteration cap is hit."""
        cfg = self.config
        state = state if state is not None else self.init_state(dataset)

        log.info(
            json_log(
                'train.start',
                component='training',
                examples=len(dataset),
                features=len(state.weights),
                learning_rate=cfg.learning_rate,
                l1_weight=cfg.l1_weight,
                max_iterations=cfg.max_iterations,
                convergence_threshold=cfg.convergence_threshold,
                shuffle=cfg.shuffle,
            )
        )

        history: list[float] = []
        norm = float('inf')
        converged = False
        while state.iterations < cfg.max_iterations:
            order = self.epoch_order(len(dataset))
            norm = train_epoch(state, dataset, order, cfg.learning_rate, self.penalty)
            state.iterations += 1
            history.append(norm)

            if state.iterations % PROGRESS_EVERY == 0:
                self._log_progress(state, norm)

            if norm <= cfg.convergence_threshold:
                converged = True
                break

        result = TrainingResult(
            weights=dict(state.weights),
            iterations=state.iterations,
            converged=converged,
            final_norm=norm,
            sparsity=sparsity(state.weights),
            nonzero=count_nonzero(state.weights),
            l1_norm=l1_norm(state.weights),
            history=history,
        )
        log.info(
            json_log(
                'train.completed',
                component='training',
                iterations=result.iterations,
                converged=result.converged,
                final_norm=result.final_norm,
                sparsity=result.sparsity,
            )
        )
        return result

    def _log_progress(self, state: TrainerState, norm: float) -> None:
        extra = {'l1_norm': l1_norm(state.weights)} if self.penalty.enabled else {}
        log.info(
            json_log(
                'train.progress',
                component='training',
                iterations=state.iterations,
                convergence=norm,
                **extra,
            )
        )


def train(dataset: Dataset, config: TrainingConfig | None = None) -> TrainingResult:
    """Train a model on ``dataset`` with ``config``."""
    return SGDTrainer(config).fit(dataset)
