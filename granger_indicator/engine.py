"""Nested-OLS F-test behind every Granger strategy.

Given a response series ``y`` and two predictor sets, the restricted model
(H0) regresses ``y`` on the lagged universe without ``x`` and the
unrestricted model (H1) on the lagged universe including ``x``::

    F = ((RSS0 - RSS1) / (p1 - p0)) / (RSS1 / (n - p1))
    p = 1 - FCDF(F; L, n - 2L - 1)

where ``n`` is the number of lagged rows and ``p0``/``p1`` the number of lag
parameters in each model.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np

from granger_indicator.errors import InsufficientData, ShapeMismatch, SingularDesign
from granger_indicator.lagged import create_lagged_side, sqr_sum, strip
from granger_indicator.solvers import (
    FDistribution,
    LinearRegressionSolver,
    OLSSolver,
    ScipyFDistribution,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GrangerCausalIndicator:
    """Result of one Granger computation.

    ``p_value`` is ``1 - FCDF(F)``. ``critical_value`` is read as a confidence
    level: x granger-causes y when ``1 - p_value > critical_value``.
    """

    p_value: float
    critical_value: float
    lag_size: int

    @property
    def granger_causes(self) -> bool:
        return 1.0 - self.p_value > self.critical_value

    def __str__(self) -> str:
        return (
            f"Granger-Causality(p_value={self.p_value:.3f}, "
            f"critical_value={self.critical_value:.3f}, lag_size={self.lag_size})"
        )


class GrangerTestEngine:
    """Fits H0/H1 and turns the F statistic into a :class:`GrangerCausalIndicator`."""

    def __init__(
        self,
        solver: LinearRegressionSolver | None = None,
        distribution: FDistribution | None = None,
    ):
        self.solver = solver if solver is not None else OLSSolver()
        self.distribution = distribution if distribution is not None else ScipyFDistribution()

    def perform_test(
        self,
        response: Sequence[float],
        restricted_set: Sequence[Sequence[float]],
        num_variables_restricted: int,
        unrestricted_set: Sequence[Sequence[float]],
        num_variables_unrestricted: int,
        lag_size: int,
        critical_value: float,
    ) -> GrangerCausalIndicator | None:
        """Run the F-test; returns None when either regression is singular."""
        lagged_h0 = create_lagged_side(restricted_set, lag_size)
        lagged_h1 = create_lagged_side(unrestricted_set, lag_size)
        if lagged_h0.shape[0] != lagged_h1.shape[0]:
            raise ShapeMismatch(
                f"Restricted ({lagged_h0.shape[0]}) and unrestricted ({lagged_h1.shape[0]}) "
                "lagged matrices have different row counts."
            )
        stripped = strip(response, lag_size)

        rows = lagged_h0.shape[0]
        df2 = rows - 2 * lag_size - 1
        if df2 < 1:
            raise InsufficientData(
                f"{rows} lagged rows leave no denominator degrees of freedom for lag size {lag_size}.",
                rows=rows,
                lag_size=lag_size,
            )

        try:
            residuals_h0 = self.solver.fit(stripped, lagged_h0)
            residuals_h1 = self.solver.fit(stripped, lagged_h1)
        except SingularDesign as exc:
            logger.warning(
                "granger_singular_design",
                extra={
                    "lag_size": lag_size,
                    "rows": rows,
                    "rank": exc.rank,
                    "columns": exc.columns,
                    "error": str(exc),
                },
            )
            return None

        rss0 = sqr_sum(residuals_h0)
        rss1 = sqr_sum(residuals_h1)
        params_h0 = lag_size * num_variables_restricted
        params_h1 = lag_size * num_variables_unrestricted

        with np.errstate(divide="ignore", invalid="ignore"):
            numer = np.float64(rss0 - rss1) / (params_h1 - params_h0)
            denom = np.float64(rss1) / (rows - params_h1)
            f_stat = float(numer / denom)

        p_value = 1.0 - self.distribution.cdf(f_stat, lag_size, df2)
        logger.debug(
            "granger_test_complete",
            extra={"rss0": rss0, "rss1": rss1, "f_stat": f_stat, "p_value": p_value},
        )
        return GrangerCausalIndicator(p_value, critical_value, lag_size)


__all__ = ["GrangerCausalIndicator", "GrangerTestEngine"]
