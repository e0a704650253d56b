"""Sparse logistic regression trained with online SGD and cumulative L1."""

__version__ = '0.1.0'
