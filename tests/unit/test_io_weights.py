"""Tests for the weight-model and prediction files."""

from __future__ import annotations

from pathlib import Path

import pytest

from sparse_logreg.io import (
    EmptyModelFileError,
    format_weights,
    load_weights,
    parse_weights,
    write_predictions,
    write_weights,
)
from sparse_logreg.models.logreg.classifier import classify


def test_format_weights_sorted_by_feature_id() -> None:
    assert format_weights({10: 0.5, 2: -1.25, 3: 0.0}) == '2 -1.25\n3 0.0\n10 0.5\n'


def test_round_trip_reproduces_classification(tmp_path: Path) -> None:
    """Reloaded weights score examples bit-for-bit identically."""
    weights = {1: 0.1 + 0.2, 2: -1 / 3, 7: 1e-17, 9: 123456.789}
    examples = [{1: 1.0, 2: 2.0}, {7: 3.0, 9: -1e-5}, {1: -0.5, 42: 1.0}]

    path = write_weights(weights, tmp_path / 'model' / 'weights.txt')
    reloaded = load_weights(path)

    assert reloaded == weights
    assert [classify(x, reloaded) for x in examples] == [classify(x, weights) for x in examples]


def test_parse_weights_skips_comments_and_bad_lines() -> None:
    lines = ['# model\n', ' 1 2.0\n', '3 0.5\n', '4 1 2\n', 'x 1\n', '\n', '5 -2\n']
    assert parse_weights(lines) == {3: 0.5, 5: -2.0}


def test_load_weights_empty_file_raises(tmp_path: Path) -> None:
    path = tmp_path / 'empty.txt'
    path.write_text('# nothing here\n', encoding='utf-8')

    with pytest.raises(EmptyModelFileError):
        load_weights(path)


def test_load_weights_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_weights(tmp_path / 'missing.txt')


def test_write_predictions(tmp_path: Path) -> None:
    path = write_predictions([1, 0, 0, 1], tmp_path / 'preds.txt')
    assert path.read_text(encoding='utf-8') == '1\n0\n0\n1\n'
