"""Dataset loading utilities."""

from .examples import (
    LABEL_ID,
    Dataset,
    DatasetFormatError,
    Example,
    SparseVector,
    feature_ids,
    load_examples,
    normalize_label,
    parse_example_line,
    parse_examples,
)

__all__ = [
    'LABEL_ID',
    'Dataset',
    'DatasetFormatError',
    'Example',
    'SparseVector',
    'feature_ids',
    'load_examples',
    'normalize_label',
    'parse_example_line',
    'parse_examples',
]
