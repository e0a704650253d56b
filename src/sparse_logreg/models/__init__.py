"""Model implementations for sparse_logreg."""

from . import logreg

__all__ = ['logreg']
