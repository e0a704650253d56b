"""SGD training for the sparse logistic-regression model."""

from .sgd import SGDTrainer, TrainingResult, sgd_step, train, train_epoch
from .state import (
    TrainerState,
    convergence_norm,
    count_nonzero,
    init_state,
    l1_norm,
    sparsity,
)
from .training import train_from_config

__all__ = [
    'SGDTrainer',
    'TrainerState',
    'TrainingResult',
    'convergence_norm',
    'count_nonzero',
    'init_state',
    'l1_norm',
    'sgd_step',
    'sparsity',
    'train',
    'train_epoch',
    'train_from_config',
]
