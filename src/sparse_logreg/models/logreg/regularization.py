"""
Cumulative L1 penalty for online SGD.

Implements the cumulative penalty of Tsuruoka, Tsujii and Ananiadou (2009):
``mu`` is the total L1 penalty each weight could have received so far and
``total_l1[id]`` is what weight ``id`` has actually received. A weight is only
shrunk when its feature is updated, by the difference between the two, so
rarely seen features are penalized as if the penalty had been applied at
every step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .training.state import TrainerState


def shrink(z: float, mu: float, applied: float) -> float:
    """
    Shrink weight ``z`` toward zero without crossing it.

    Args:
        z: Weight right after the gradient step.
        mu: Total penalty accrued so far.
        applied: Penalty already applied to this weight (negative for
            positive weights, positive for negative ones).
    """
    if z > 0.0:
        return max(0.0, z - (mu + applied))
    if z < 0.0:
        return min(0.0, z + (mu - applied))
    return z


class PenaltyProtocol(Protocol):
    """Interface used by the trainer for per-example regularization."""

    enabled: bool

    def accrue(self, state: TrainerState) -> None:
        """Account for one processed example."""
        ...

    def apply(self, state: TrainerState, feature_id: int) -> None:
        """Regularize the freshly updated weight of ``feature_id``."""
        ...


class NoPenalty:
    """Pass-through used for plain SGD."""

    enabled = False

    def accrue(self, state: TrainerState) -> None:
        return None

    def apply(self, state: TrainerState, feature_id: int) -> None:
        return None


@dataclass(frozen=True)
class CumulativeL1Penalty:
    l1_weight: float
    learning_rate: float
    enabled: bool = True

    def accrue(self, state: TrainerState) -> None:
        state.mu += self.l1_weight * self.learning_rate

    def apply(self, state: TrainerState, feature_id: int) -> None:
        z = state.weights[feature_id]
        applied = state.total_l1.get(feature_id, 0.0)
        new_weight = shrink(z, state.mu, applied)
        state.weights[feature_id] = new_weight
        state.total_l1[feature_id] = applied + (new_weight - z)


def build_penalty(l1_weight: float, learning_rate: float) -> PenaltyProtocol:
    """Return the penalty matching ``l1_weight`` (none when it is zero)."""
    if l1_weight < 0:
        raise ValueError(f'l1_weight must be non-negative, got {l1_weight}')
    if l1_weight == 0:
        return NoPenalty()
    return CumulativeL1Penalty(l1_weight=l1_weight, learning_rate=learning_rate)
