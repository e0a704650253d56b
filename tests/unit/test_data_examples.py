"""Tests for example parsing and loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from sparse_logreg.data import (
    DatasetFormatError,
    Example,
    feature_ids,
    load_examples,
    normalize_label,
    parse_example_line,
    parse_examples,
)


class TestParseExampleLine:
    def test_parses_label_and_features(self) -> None:
        example, skipped = parse_example_line('1 3:0.5 10:-2\n')
        assert example == Example(label=1, features={3: 0.5, 10: -2.0}, raw_label=1)
        assert skipped == 0

    @pytest.mark.parametrize('raw', ['0', '-1', '2'])
    def test_non_one_labels_are_negative(self, raw: str) -> None:
        example, _ = parse_example_line(f'{raw} 1:1')
        assert example is not None
        assert example.label == 0
        assert example.raw_label == int(raw)

    @pytest.mark.parametrize('line', ['', '\n', '# comment 1:1', ' 1 1:1'])
    def test_comment_and_blank_lines_are_ignored(self, line: str) -> None:
        example, skipped = parse_example_line(line)
        assert example is None
        assert skipped == 0

    def test_malformed_feature_tokens_are_skipped(self) -> None:
        """A bad token is dropped without losing the rest of the line."""
        example, skipped = parse_example_line('1 4 2:1.5 5:6:7 x:1 3:abc 8:2')
        assert example is not None
        assert example.features == {2: 1.5, 8: 2.0}
        assert skipped == 4

    def test_label_slot_token_is_skipped(self) -> None:
        example, skipped = parse_example_line('0 0:1 1:1')
        assert example is not None
        assert example.features == {1: 1.0}
        assert example.label == 0
        assert skipped == 1

    def test_float_label_is_truncated(self) -> None:
        example, _ = parse_example_line('1.0 1:1')
        assert example is not None
        assert example.label == 1

    def test_invalid_label_raises(self) -> None:
        with pytest.raises(DatasetFormatError, match='line 7'):
            parse_example_line('pos 1:1', line_number=7)

    def test_handles_crlf_and_repeated_spaces(self) -> None:
        example, _ = parse_example_line('1  1:1 2:2\r\n')
        assert example is not None
        assert example.features == {1: 1.0, 2: 2.0}


def test_normalize_label() -> None:
    assert normalize_label(1) == 1
    assert normalize_label(0) == 0
    assert normalize_label(-1) == 0


def test_parse_examples_counts_skipped_tokens() -> None:
    dataset, skipped = parse_examples(['# header', '1 1:1 bad', '0 2:1', ''])
    assert [example.label for example in dataset] == [1, 0]
    assert skipped == 1


def test_feature_ids_is_union() -> None:
    dataset = [Example(label=1, features={1: 1.0, 3: 1.0}), Example(label=0, features={2: 1.0})]
    assert feature_ids(dataset) == {1, 2, 3}


def test_load_examples_reads_file(tmp_path: Path) -> None:
    path = tmp_path / 'train.txt'
    path.write_text('# training data\n1 1:1.0\n-1 1:-1.0 2:0.5\n', encoding='utf-8')

    dataset = load_examples(path)

    assert len(dataset) == 2
    assert dataset[1] == Example(label=0, features={1: -1.0, 2: 0.5}, raw_label=-1)


def test_load_examples_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_examples(tmp_path / 'missing.txt')
