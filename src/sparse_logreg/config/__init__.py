"""Configuration utilities for sparse_logreg."""

from .training import (
    PathConfig,
    RunConfig,
    TrainingConfig,
    load_run_config,
    validate_training_config,
)

__all__ = [
    'PathConfig',
    'RunConfig',
    'TrainingConfig',
    'load_run_config',
    'validate_training_config',
]
