"""Reading and writing the flat weight-model and prediction files."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from ..data.examples import is_data_line
from ..utils import get_logger, json_log

log = get_logger(__name__)


class EmptyModelFileError(RuntimeError):
    """Raised when a weight file yields no weights."""


def format_weights(weights: Mapping[int, float]) -> str:
    """Render weights as ``<feat_id> <weight>`` lines in feature-id order."""
    return ''.join(f'{feature_id} {weights[feature_id]!r}\n' for feature_id in sorted(weights))


def parse_weights(lines: Iterable[str]) -> dict[int, float]:
    weights: dict[int, float] = {}
    for line in lines:
        line = line.rstrip('\r\n')
        if not is_data_line(line):
            continue
        tokens = line.split(' ')
        if len(tokens) != 2:
            continue
        try:
            weights[int(tokens[0])] = float(tokens[1])
        except ValueError:
            continue
    return weights


def write_weights(weights: Mapping[int, float], path: str | Path) -> Path:
    """Write weights to ``path``; values use repr so reloading is exact."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(format_weights(weights), encoding='utf-8')
    log.info(
        json_log(
            'weights.written',
            component='io.weights',
            path=str(out_path),
            features=len(weights),
        )
    )
    return out_path


def load_weights(path: str | Path) -> dict[int, float]:
    """
    Load a weight-model file.

    Raises:
        FileNotFoundError: If the file does not exist.
        EmptyModelFileError: If no weight lines could be parsed.
    """
    model_path = Path(path)
    if not model_path.exists():
        raise FileNotFoundError(f'Model file not found: {model_path}')

    with model_path.open('r', encoding='utf-8') as fh:
        weights = parse_weights(fh)

    if not weights:
        raise EmptyModelFileError(f'Failed to read weights from file: {model_path}')

    log.info(
        json_log(
            'weights.loaded',
            component='io.weights',
            path=str(model_path),
            features=len(weights),
        )
    )
    return weights


def write_predictions(predictions: Iterable[int], path: str | Path) -> Path:
    """Write one ``1``/``0`` prediction per line."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open('w', encoding='utf-8') as fh:
        count = 0
        for prediction in predictions:
            fh.write(f'{int(prediction)}\n')
            count += 1
    log.info(
        json_log(
            'predictions.written',
            component='io.weights',
            path=str(out_path),
            predictions=count,
        )
    )
    return out_path
