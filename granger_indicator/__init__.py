"""Granger-causality indicator: lagged OLS models compared with an F-test."""

from granger_indicator.config import Config, GrangerConfig, setup_logging
from granger_indicator.engine import GrangerCausalIndicator, GrangerTestEngine
from granger_indicator.errors import GrangerError, InsufficientData, ShapeMismatch, SingularDesign
from granger_indicator.feasibility import check_feasible, max_lag_size, resolve_lag_size
from granger_indicator.lagged import create_lagged_side, sqr_sum, strip
from granger_indicator.solvers import OLSSolver, ScipyFDistribution
from granger_indicator.strategies import (
    BivariateStrategy,
    GrangerCausalityStrategy,
    MultivariateStrategy,
    order_universe,
    remove_row,
)
from granger_indicator.sweep import SweepResult, granger_matrix, run_sweep

__all__ = [
    "Config",
    "GrangerConfig",
    "setup_logging",
    "GrangerCausalIndicator",
    "GrangerTestEngine",
    "GrangerError",
    "InsufficientData",
    "ShapeMismatch",
    "SingularDesign",
    "check_feasible",
    "max_lag_size",
    "resolve_lag_size",
    "create_lagged_side",
    "sqr_sum",
    "strip",
    "OLSSolver",
    "ScipyFDistribution",
    "BivariateStrategy",
    "GrangerCausalityStrategy",
    "MultivariateStrategy",
    "order_universe",
    "remove_row",
    "SweepResult",
    "granger_matrix",
    "run_sweep",
]
