"""Pairwise Granger sweeps over a panel of series.

The result is read as a weight matrix: cell ``(row, column)`` answers "does
``column`` granger-cause ``row``?". Rows are effects (y), columns are causes
(x). The diagonal and pairs whose regression is singular are left as NaN.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import List

import numpy as np
import pandas as pd

from granger_indicator.config import GrangerConfig
from granger_indicator.engine import GrangerTestEngine
from granger_indicator.feasibility import check_feasible, resolve_lag_size
from granger_indicator.strategies import (
    DEFAULT_CRITICAL_VALUE,
    BivariateStrategy,
    MultivariateStrategy,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    p_values: pd.DataFrame
    verdicts: pd.DataFrame
    lag_size: int
    critical_value: float
    mode: str

    @property
    def n_causal(self) -> int:
        return int(self.verdicts.fillna(False).to_numpy(dtype=bool).sum())

    def to_frame(self) -> pd.DataFrame:
        """Long-form table with one row per tested (cause, effect) pair."""
        rows = []
        for effect in self.p_values.index:
            for cause in self.p_values.columns:
                if effect == cause:
                    continue
                p_value = self.p_values.at[effect, cause]
                rows.append(
                    {
                        "cause": cause,
                        "effect": effect,
                        "lag_size": self.lag_size,
                        "p_value": p_value,
                        "critical_value": self.critical_value,
                        "granger_causes": self.verdicts.at[effect, cause],
                        "skipped": bool(np.isnan(p_value)),
                    }
                )
        return pd.DataFrame(
            rows,
            columns=[
                "cause",
                "effect",
                "lag_size",
                "p_value",
                "critical_value",
                "granger_causes",
                "skipped",
            ],
        )


def granger_matrix(
    frame: pd.DataFrame,
    lag_size: int | str = 1,
    critical_value: float = DEFAULT_CRITICAL_VALUE,
    mode: str = "bivariate",
    engine: GrangerTestEngine | None = None,
) -> SweepResult:
    """Test every ordered pair of columns in ``frame``.

    Parameters
    ----------
    frame : pd.DataFrame
        One column per variable, rows ordered from earliest to latest. Must be
        free of NaN/inf.
    lag_size : int or "auto"
        Lag window; ``"auto"`` picks the largest feasible lag for the panel.
    critical_value : float
        Confidence level handed to each strategy.
    mode : {"bivariate", "multivariate"}
        Bivariate tests each pair on its own; multivariate conditions every
        pair on the remaining columns.
    engine : GrangerTestEngine, optional
        Shared engine for all pairs.

    Returns
    -------
    SweepResult
    """
    if mode not in ("bivariate", "multivariate"):
        raise ValueError(f"Unsupported sweep mode: {mode}")
    columns: List[str] = [str(c) for c in frame.columns]
    if len(columns) < 2:
        raise ValueError("A Granger sweep needs at least two columns.")
    if len(set(columns)) != len(columns):
        raise ValueError("Column names must be unique.")

    values = frame.to_numpy(dtype=float).T
    if not np.all(np.isfinite(values)):
        raise ValueError("Series must be finite (no NaN/inf). Impute before the Granger sweep.")

    n_vars, n_obs = values.shape
    model_vars = 2 if mode == "bivariate" else n_vars
    if lag_size == "auto":
        lag_size = resolve_lag_size(n_obs, model_vars)
    check_feasible(n_obs, model_vars, int(lag_size))

    if mode == "bivariate":
        strategy = BivariateStrategy(lag_size, critical_value, engine=engine)
    else:
        strategy = MultivariateStrategy(lag_size, critical_value, engine=engine)

    p_values = pd.DataFrame(np.nan, index=columns, columns=columns)
    verdicts = pd.DataFrame(pd.NA, index=columns, columns=columns, dtype="boolean")
    skipped = 0
    for y_row, effect in enumerate(columns):
        for x_row, cause in enumerate(columns):
            if y_row == x_row:
                continue
            if mode == "bivariate":
                indicator = strategy.apply(values[y_row], values[x_row])
            else:
                indicator = strategy.apply_pair(values, y_row, x_row)
            if indicator is None:
                skipped += 1
                logger.debug("granger_pair_skipped", extra={"cause": cause, "effect": effect})
                continue
            p_values.at[effect, cause] = indicator.p_value
            verdicts.at[effect, cause] = indicator.granger_causes

    result = SweepResult(
        p_values=p_values,
        verdicts=verdicts,
        lag_size=int(lag_size),
        critical_value=float(critical_value),
        mode=mode,
    )
    logger.info(
        "granger_sweep_complete",
        extra={
            "mode": mode,
            "variables": n_vars,
            "observations": n_obs,
            "lag_size": result.lag_size,
            "pairs_tested": n_vars * (n_vars - 1) - skipped,
            "pairs_skipped": skipped,
            "causal_pairs": result.n_causal,
        },
    )
    return result


def run_sweep(frame: pd.DataFrame, config: GrangerConfig, engine: GrangerTestEngine | None = None) -> SweepResult:
    """:func:`granger_matrix` driven by a :class:`GrangerConfig`."""
    return granger_matrix(
        frame,
        lag_size=config.lag_size,
        critical_value=config.critical_value,
        mode=config.mode,
        engine=engine,
    )


__all__ = ["SweepResult", "granger_matrix", "run_sweep"]
