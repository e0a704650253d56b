"""Logistic Regression model implementation.

This package contains:
- classifier.py: sigmoid scoring and thresholding
- regularization.py: cumulative L1 penalty
- training/: SGD trainer and its state
"""

from .classifier import classify, logit, predict_label, sigmoid
from .regularization import CumulativeL1Penalty, NoPenalty, build_penalty, shrink
from .training import SGDTrainer, TrainingResult, train, train_from_config

__all__ = [
    'CumulativeL1Penalty',
    'NoPenalty',
    'SGDTrainer',
    'TrainingResult',
    'build_penalty',
    'classify',
    'logit',
    'predict_label',
    'shrink',
    'sigmoid',
    'train',
    'train_from_config',
]
