"""Lagged design matrices and small array helpers for the Granger test."""
from __future__ import annotations

from typing import Sequence

import numpy as np

from granger_indicator.errors import InsufficientData, ShapeMismatch


def _as_series(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"A series must be one-dimensional, got shape {arr.shape}.")
    return arr


def create_lagged_side(series_set: Sequence[Sequence[float]], lag_size: int) -> np.ndarray:
    """Build the lagged design matrix for one or more equal-length series.

    For ``k`` series of length ``n`` the result has ``n - lag_size`` rows and
    ``k * lag_size`` columns. Columns are grouped per input series; inside a
    block, column ``i * lag_size + l`` holds ``series_i[l + j]`` in row ``j``,
    i.e. the most-lagged value comes first.
    """
    arrays = [_as_series(s) for s in series_set]
    if not arrays:
        raise ValueError("At least one series is required to build a lagged matrix.")

    lengths = {arr.shape[0] for arr in arrays}
    if len(lengths) != 1:
        raise ShapeMismatch(
            f"All series must have the same length, got lengths {[arr.shape[0] for arr in arrays]}."
        )
    n = arrays[0].shape[0]
    if lag_size < 1:
        raise ValueError(f"lag_size must be >= 1, got {lag_size}.")
    if lag_size >= n:
        raise InsufficientData(
            f"Series of length {n} is too short for a lag size of {lag_size}.",
            series_length=n,
            lag_size=lag_size,
        )

    rows = n - lag_size
    lagged = np.empty((rows, lag_size * len(arrays)), dtype=float)
    for i, arr in enumerate(arrays):
        for offset in range(lag_size):
            lagged[:, i * lag_size + offset] = arr[offset : offset + rows]
    return lagged


def strip(values: Sequence[float], lag_size: int) -> np.ndarray:
    """Return a new array without the first ``lag_size`` observations."""
    arr = _as_series(values)
    if lag_size < 0:
        raise ValueError(f"lag_size must be >= 0, got {lag_size}.")
    if lag_size >= arr.shape[0]:
        raise InsufficientData(
            f"Cannot strip {lag_size} leading values from a series of length {arr.shape[0]}.",
            series_length=int(arr.shape[0]),
            lag_size=lag_size,
        )
    return arr[lag_size:].copy()


def sqr_sum(values: Sequence[float]) -> float:
    """Sum of squares, ``a1*a1 + ... + an*an``; 0.0 for an empty input."""
    arr = np.asarray(values, dtype=float)
    return float(np.dot(arr, arr))


__all__ = ["create_lagged_side", "strip", "sqr_sum"]
