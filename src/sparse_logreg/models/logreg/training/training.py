from __future__ import annotations

from pathlib import Path

from ....config import load_run_config
from ....data.examples import load_examples
from ....io.weights import write_weights
from ....utils.logging import get_logger, json_log
from .sgd import SGDTrainer, TrainingResult

log = get_logger(__name__)


def train_from_config(config_path: str | Path, training_data: str | Path) -> TrainingResult:
    """Train on ``training_data`` using a run config YAML file.

    Weights are written to ``paths.model_out`` when the config sets it.
    """
    cfg = load_run_config(config_path)
    dataset = load_examples(training_data)

    log.info(json_log('train.config', component='training', config=str(config_path)))
    result = SGDTrainer(cfg.training).fit(dataset)

    if cfg.paths.model_out is not None:
        write_weights(result.weights, cfg.paths.model_out)
    return result
