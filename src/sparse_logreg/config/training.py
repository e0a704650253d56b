"""Config models and loaders for training runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class TrainingConfig:
    shuffle: bool = True
    max_iterations: int = 50000
    convergence_threshold: float = 0.005
    learning_rate: float = 0.001
    l1_weight: float = 0.0001
    randomize_weights: bool = False
    seed: int | None = None


@dataclass(frozen=True)
class PathConfig:
    model_in: Path | None = None
    model_out: Path | None = None
    test_data: Path | None = None
    predictions: Path | None = None


@dataclass(frozen=True)
class RunConfig:
    training: TrainingConfig = field(default_factory=TrainingConfig)
    paths: PathConfig = field(default_factory=PathConfig)
    verbose: bool = False


def validate_training_config(config: TrainingConfig) -> TrainingConfig:
    """Raise ValueError when a training parameter is out of range."""
    if config.learning_rate <= 0:
        raise ValueError(f'learning_rate must be positive, got {config.learning_rate}')
    if config.l1_weight < 0:
        raise ValueError(f'l1_weight must be non-negative, got {config.l1_weight}')
    if config.max_iterations < 0:
        raise ValueError(f'max_iterations must be non-negative, got {config.max_iterations}')
    return config


def load_run_config(config_path: str | Path) -> RunConfig:
    """Load a training run config YAML file."""
    cfg_path = Path(config_path).expanduser().resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f'Config file not found: {cfg_path}')

    with cfg_path.open('r', encoding='utf-8') as fh:
        data = yaml.safe_load(fh) or {}

    base_dir = cfg_path.parent

    training_section = data.get('training') or {}
    paths_section = data.get('paths') or {}

    seed = training_section.get('seed')
    training = TrainingConfig(
        shuffle=bool(training_section.get('shuffle', True)),
        max_iterations=int(training_section.get('max_iterations', 50000)),
        convergence_threshold=float(training_section.get('convergence_threshold', 0.005)),
        learning_rate=float(training_section.get('learning_rate', 0.001)),
        l1_weight=float(training_section.get('l1_weight', 0.0001)),
        randomize_weights=bool(training_section.get('randomize_weights', False)),
        seed=int(seed) if seed is not None else None,
    )
    validate_training_config(training)

    paths = PathConfig(
        model_in=_resolve_optional_path(base_dir, paths_section.get('model_in')),
        model_out=_resolve_optional_path(base_dir, paths_section.get('model_out')),
        test_data=_resolve_optional_path(base_dir, paths_section.get('test_data')),
        predictions=_resolve_optional_path(base_dir, paths_section.get('predictions')),
    )

    return RunConfig(
        training=training,
        paths=paths,
        verbose=bool(data.get('verbose', False)),
    )


def _resolve_path(base: Path, value: str | Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _resolve_optional_path(base: Path, value: str | Path | None) -> Path | None:
    if value is None:
        return None
    return _resolve_path(base, value)
