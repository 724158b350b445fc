import logging

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(20150426)


@pytest.fixture
def causal_pair(rng):
    """x is white noise; y follows x with one step of delay."""
    n = 200
    x = rng.standard_normal(n)
    y = np.empty(n)
    y[0] = rng.standard_normal()
    y[1:] = 0.8 * x[:-1] + 0.2 * rng.standard_normal(n - 1)
    return x, y


@pytest.fixture
def causal_universe(rng):
    """Rows (y, x, z): y is driven by lagged x, z is independent noise."""
    n = 150
    x = rng.standard_normal(n)
    z = rng.standard_normal(n)
    y = np.empty(n)
    y[0] = rng.standard_normal()
    y[1:] = 0.7 * x[:-1] + 0.3 * rng.standard_normal(n - 1)
    return np.vstack([y, x, z])


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
