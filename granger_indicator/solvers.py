"""Regression and F-distribution collaborators used by the engine."""
from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np
from scipy.stats import f as f_dist

from granger_indicator.errors import ShapeMismatch, SingularDesign


class LinearRegressionSolver(Protocol):
    def fit(self, response: Sequence[float], design: np.ndarray) -> np.ndarray:
        ...


class FDistribution(Protocol):
    def cdf(self, value: float, df1: int, df2: int) -> float:
        ...


class OLSSolver:
    """Ordinary least squares ``y ~ 1 + X`` returning the residual vector.

    A constant column is prepended unless ``fit_intercept`` is False. Rank
    deficiency (collinear predictors, constant columns next to the intercept,
    more columns than distinct rows) raises :class:`SingularDesign` instead of
    returning a minimum-norm solution.
    """

    def __init__(self, fit_intercept: bool = True, tol: float | None = None):
        self.fit_intercept = fit_intercept
        self.tol = tol

    def fit(self, response: Sequence[float], design: np.ndarray) -> np.ndarray:
        y = np.asarray(response, dtype=float).reshape(-1)
        X = np.asarray(design, dtype=float)
        if X.ndim != 2:
            raise ValueError(f"Design matrix must be two-dimensional, got shape {X.shape}.")
        if X.shape[0] != y.shape[0]:
            raise ShapeMismatch(
                f"Response length ({y.shape[0]}) does not match design rows ({X.shape[0]})."
            )
        if self.fit_intercept:
            X = np.column_stack([np.ones(X.shape[0]), X])

        columns = X.shape[1]
        rank = int(np.linalg.matrix_rank(X, tol=self.tol))
        if rank < columns:
            raise SingularDesign(
                f"Design matrix is singular (rank {rank} < {columns} columns).",
                rank=rank,
                columns=columns,
            )

        coef, *_ = np.linalg.lstsq(X, y, rcond=None)
        return y - X @ coef


class ScipyFDistribution:
    """F cumulative distribution backed by ``scipy.stats.f``."""

    def cdf(self, value: float, df1: int, df2: int) -> float:
        return float(f_dist.cdf(value, df1, df2))


__all__ = ["LinearRegressionSolver", "FDistribution", "OLSSolver", "ScipyFDistribution"]
