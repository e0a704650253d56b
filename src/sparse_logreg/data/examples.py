"""Sparse examples and the text format they are loaded from.

Each non-comment line holds one example::

    <label> <feat_id>:<value> <feat_id>:<value> ...

A label of ``1`` marks the positive class; any other integer (usually ``0`` or
``-1``) is negative. Lines that are empty or start with ``#`` or a space are
ignored.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..utils import get_logger, json_log

log = get_logger(__name__)

SparseVector = dict[int, float]

# Feature-id reserved for the label.
LABEL_ID = 0


class DatasetFormatError(ValueError):
    """Raised when an example line cannot be parsed."""


@dataclass(frozen=True)
class Example:
    """One training or test example."""

    label: int
    features: SparseVector = field(default_factory=dict)
    raw_label: int = 0


Dataset = list[Example]


def normalize_label(raw_label: int) -> int:
    """Map a raw label onto {0, 1}; only ``1`` is positive."""
    return 1 if raw_label == 1 else 0


def is_data_line(line: str) -> bool:
    return bool(line) and line[0] not in ('#', ' ')


def _parse_label(token: str, line_number: int | None) -> int:
    try:
        return int(token)
    except ValueError:
        pass
    try:
        return int(float(token))
    except ValueError as exc:
        where = f' on line {line_number}' if line_number is not None else ''
        raise DatasetFormatError(f'Invalid label {token!r}{where}') from exc


def _parse_feature(token: str) -> tuple[int, float] | None:
    parts = token.split(':')
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), float(parts[1])
    except ValueError:
        return None


def parse_example_line(
    line: str,
    line_number: int | None = None,
) -> tuple[Example | None, int]:
    """
    Parse one line of the example format.

    Returns:
        Tuple of (example or None for ignored lines, number of skipped
        feature tokens).

    Raises:
        DatasetFormatError: If the label token is not numeric.
    """
    line = line.rstrip('\r\n')
    if not is_data_line(line):
        return None, 0

    tokens = line.split(' ')
    raw_label = _parse_label(tokens[0], line_number)

    features: SparseVector = {}
    skipped = 0
    for token in tokens[1:]:
        if not token:
            continue
        parsed = _parse_feature(token)
        if parsed is None or parsed[0] == LABEL_ID:
            skipped += 1
            continue
        feature_id, value = parsed
        features[feature_id] = value

    example = Example(
        label=normalize_label(raw_label),
        features=features,
        raw_label=raw_label,
    )
    return example, skipped


def parse_examples(lines: Iterable[str]) -> tuple[Dataset, int]:
    """Parse every data line, returning the dataset and skipped-token count."""
    dataset: Dataset = []
    skipped_total = 0
    for line_number, line in enumerate(lines, start=1):
        example, skipped = parse_example_line(line, line_number)
        skipped_total += skipped
        if example is not None:
            dataset.append(example)
    return dataset, skipped_total


def load_examples(path: str | Path) -> Dataset:
    """Load a dataset from an example file."""
    data_path = Path(path)
    if not data_path.exists():
        raise FileNotFoundError(f'Example file not found: {data_path}')

    with data_path.open('r', encoding='utf-8') as fh:
        dataset, skipped = parse_examples(fh)

    log.info(
        json_log(
            'examples.loaded',
            component='data.examples',
            path=str(data_path),
            examples=len(dataset),
            features=len(feature_ids(dataset)),
            skipped_tokens=skipped,
        )
    )
    return dataset


def feature_ids(dataset: Iterable[Example]) -> set[int]:
    """Return the union of feature-ids observed in the dataset."""
    ids: set[int] = set()
    for example in dataset:
        ids.update(example.features)
    return ids
