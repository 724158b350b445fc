"""Bivariate and multivariate Granger-causality strategies.

A strategy arranges raw series into the response / restricted / unrestricted
layout the engine expects, validates the data size and delegates to
:class:`~granger_indicator.engine.GrangerTestEngine`. Each instance owns its
own lag size and critical value; nothing is shared between instances.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Sequence

import numpy as np

from granger_indicator.engine import GrangerCausalIndicator, GrangerTestEngine
from granger_indicator.errors import ShapeMismatch
from granger_indicator.feasibility import check_feasible

logger = logging.getLogger(__name__)

DEFAULT_CRITICAL_VALUE = 0.95


def order_universe(universe: np.ndarray, y_row: int, x_row: int) -> np.ndarray:
    """Return a copy with ``y_row`` first, ``x_row`` second, the rest in original order."""
    rest = [i for i in range(universe.shape[0]) if i not in (y_row, x_row)]
    return universe[[y_row, x_row, *rest]].copy()


def remove_row(matrix: np.ndarray, row: int) -> np.ndarray:
    """Return a copy of ``matrix`` without ``row``; remaining rows keep their order."""
    return np.delete(matrix, row, axis=0)


class GrangerCausalityStrategy(ABC):
    """Common configuration for Granger strategies.

    Parameters
    ----------
    lag_size : int
        Number of historical observations per series (>= 1). See
        :func:`~granger_indicator.feasibility.max_lag_size` for the ceiling.
    critical_value : float
        Confidence level in [0, 1] the p-value is judged against.
    engine : GrangerTestEngine, optional
        Engine to delegate to; defaults to OLS with a scipy F distribution.
    """

    name = "Granger-Causality"

    def __init__(
        self,
        lag_size: int,
        critical_value: float = DEFAULT_CRITICAL_VALUE,
        engine: GrangerTestEngine | None = None,
    ):
        if int(lag_size) != lag_size or lag_size < 1:
            raise ValueError(f"lag_size must be a positive integer, got {lag_size!r}.")
        if not 0.0 <= critical_value <= 1.0:
            raise ValueError(f"critical_value must be in [0, 1], got {critical_value!r}.")
        self._lag_size = int(lag_size)
        self._critical_value = float(critical_value)
        self.engine = engine if engine is not None else GrangerTestEngine()

    @property
    def lag_size(self) -> int:
        return self._lag_size

    @property
    def critical_value(self) -> float:
        return self._critical_value

    @abstractmethod
    def apply(self, *series: Sequence[float]) -> GrangerCausalIndicator | None:
        """Answer "does x granger-cause y?" for series given as (y, x, *universe)."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(lag_size={self._lag_size}, "
            f"critical_value={self._critical_value})"
        )

    def __str__(self) -> str:
        return self.name


class BivariateStrategy(GrangerCausalityStrategy):
    """Granger causality between two series, y (target) and x (candidate cause)."""

    name = "Bivariate Granger-Causality"

    def apply(self, y: Sequence[float], x: Sequence[float]) -> GrangerCausalIndicator | None:
        # the same series object always granger-causes itself; equal values are not checked
        if y is x:
            logger.debug("granger_self_causation_skipped")
            return None
        y_arr = np.asarray(y, dtype=float)
        x_arr = np.asarray(x, dtype=float)
        check_feasible(y_arr.shape[0], 2, self._lag_size)
        return self.engine.perform_test(
            y_arr,
            [y_arr],
            1,
            [x_arr, y_arr],
            2,
            self._lag_size,
            self._critical_value,
        )


class MultivariateStrategy(GrangerCausalityStrategy):
    """Granger causality of x on y conditioned on the remaining universe.

    ``apply`` tests row 1 (x) against row 0 (y); :meth:`apply_pair` tests any
    ordered pair of rows.
    """

    name = "Multivariate Granger-Causality"

    def apply(self, *series: Sequence[float]) -> GrangerCausalIndicator | None:
        # accept either apply(universe) or apply(y, x, *rest)
        universe = series[0] if len(series) == 1 else series
        return self.apply_pair(universe, 0, 1)

    def apply_pair(
        self,
        universe: Sequence[Sequence[float]] | np.ndarray,
        y_row: int,
        x_row: int,
    ) -> GrangerCausalIndicator | None:
        if not isinstance(universe, np.ndarray):
            lengths = [len(row) for row in universe]
            if len(set(lengths)) > 1:
                raise ShapeMismatch(f"All universe series must have the same length, got {lengths}.")
        matrix = np.asarray(universe, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] < 2:
            raise ValueError(
                f"A universe needs at least two equal-length series, got shape {matrix.shape}."
            )
        if y_row == x_row:
            logger.debug("granger_self_causation_skipped", extra={"row": y_row})
            return None

        num_variables, data_size = matrix.shape
        check_feasible(data_size, num_variables, self._lag_size)

        ordered = order_universe(matrix, y_row, x_row)
        ordered_without_x = remove_row(ordered, 1)
        return self.engine.perform_test(
            matrix[y_row],
            ordered_without_x,
            num_variables - 1,
            ordered,
            num_variables,
            self._lag_size,
            self._critical_value,
        )


__all__ = [
    "DEFAULT_CRITICAL_VALUE",
    "GrangerCausalityStrategy",
    "BivariateStrategy",
    "MultivariateStrategy",
    "order_universe",
    "remove_row",
]
