"""Input/output helpers."""

from .weights import (
    EmptyModelFileError,
    format_weights,
    load_weights,
    parse_weights,
    write_predictions,
    write_weights,
)

__all__ = [
    'EmptyModelFileError',
    'format_weights',
    'load_weights',
    'parse_weights',
    'write_predictions',
    'write_weights',
]
