import numpy as np
import pandas as pd
import pytest

from granger_indicator.config import GrangerConfig
from granger_indicator.errors import InsufficientData
from granger_indicator.sweep import granger_matrix, run_sweep


@pytest.fixture
def panel(causal_universe):
    y, x, z = causal_universe
    return pd.DataFrame({"leader": x, "follower": y, "noise": z})


def test_bivariate_sweep_finds_leader(panel):
    result = granger_matrix(panel, lag_size=1)
    assert list(result.p_values.index) == ["leader", "follower", "noise"]
    assert result.p_values.at["follower", "leader"] < 1e-6
    assert bool(result.verdicts.at["follower", "leader"])
    assert np.isnan(result.p_values.at["leader", "leader"])
    assert result.n_causal >= 1
    assert result.mode == "bivariate"


def test_multivariate_sweep_finds_leader(panel):
    result = granger_matrix(panel, lag_size=1, mode="multivariate")
    assert result.p_values.at["follower", "leader"] < 1e-6
    assert result.p_values.notna().sum().sum() == 6


def test_sweep_long_form(panel):
    frame = granger_matrix(panel, lag_size=2, critical_value=0.9).to_frame()
    assert len(frame) == 6
    assert list(frame.columns) == [
        "cause",
        "effect",
        "lag_size",
        "p_value",
        "critical_value",
        "granger_causes",
        "skipped",
    ]
    assert (frame["lag_size"] == 2).all()
    assert (frame["critical_value"] == 0.9).all()
    assert not frame["skipped"].any()


def test_sweep_skips_singular_pairs(panel):
    panel = panel.assign(copy=panel["leader"])
    result = granger_matrix(panel, lag_size=1)
    assert np.isnan(result.p_values.at["leader", "copy"])
    assert np.isnan(result.p_values.at["copy", "leader"])
    assert result.p_values.at["follower", "copy"] < 1e-6
    frame = result.to_frame()
    assert frame["skipped"].sum() == 2


def test_sweep_auto_lag(rng):
    panel = pd.DataFrame(rng.standard_normal((60, 2)), columns=["a", "b"])
    assert granger_matrix(panel, lag_size="auto").lag_size == 15


def test_sweep_rejects_bad_input(panel):
    with pytest.raises(ValueError):
        granger_matrix(panel[["leader"]])
    with pytest.raises(ValueError):
        granger_matrix(panel, mode="pairwise")
    broken = panel.copy()
    broken.iloc[3, 0] = np.nan
    with pytest.raises(ValueError, match="finite"):
        granger_matrix(broken)


def test_sweep_lag_too_large(panel):
    with pytest.raises(InsufficientData):
        granger_matrix(panel.head(10), lag_size=3)


def test_run_sweep_uses_config(panel):
    config = GrangerConfig(lag_size=2, critical_value=0.99, mode="multivariate")
    result = run_sweep(panel, config)
    assert (result.lag_size, result.critical_value, result.mode) == (2, 0.99, "multivariate")
