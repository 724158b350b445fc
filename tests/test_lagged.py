import math

import numpy as np
import pytest

from granger_indicator.errors import InsufficientData, ShapeMismatch
from granger_indicator.lagged import create_lagged_side, sqr_sum, strip


def test_lagged_single_series_orders_most_lagged_first():
    lagged = create_lagged_side([[1.0, 2.0, 3.0, 4.0, 5.0]], 2)
    np.testing.assert_array_equal(lagged, [[1.0, 2.0], [2.0, 3.0], [3.0, 4.0]])


def test_lagged_columns_grouped_per_series():
    a = [1.0, 2.0, 3.0, 4.0, 5.0]
    b = [10.0, 20.0, 30.0, 40.0, 50.0]
    lagged = create_lagged_side([a, b], 2)
    assert lagged.shape == (3, 4)
    np.testing.assert_array_equal(lagged[0], [1.0, 2.0, 10.0, 20.0])
    np.testing.assert_array_equal(lagged[2], [3.0, 4.0, 30.0, 40.0])


@pytest.mark.parametrize("n,k,lag", [(12, 3, 3), (50, 1, 7), (8, 2, 1)])
def test_lagged_dimensions(rng, n, k, lag):
    series = rng.standard_normal((k, n))
    assert create_lagged_side(series, lag).shape == (n - lag, k * lag)


def test_lagged_rejects_unequal_lengths():
    with pytest.raises(ShapeMismatch):
        create_lagged_side([[1.0, 2.0, 3.0], [1.0, 2.0]], 1)


def test_lagged_rejects_lag_not_smaller_than_length():
    with pytest.raises(InsufficientData):
        create_lagged_side([[1.0, 2.0, 3.0]], 3)


def test_lagged_rejects_empty_input():
    with pytest.raises(ValueError):
        create_lagged_side([], 1)


def test_strip_example():
    stripped = strip([0.0, -2.1, math.pi, 22.2, -343434.0], 3)
    np.testing.assert_array_equal(stripped, [22.2, -343434.0])


def test_strip_creates_new_array():
    original = np.zeros(5)
    stripped = strip(original, 0)
    assert stripped is not original
    assert not np.shares_memory(stripped, original)
    stripped = strip(original, 4)
    assert stripped.shape == (1,)
    assert not np.shares_memory(stripped, original)


def test_strip_lag_longer_than_series():
    with pytest.raises(InsufficientData):
        strip([0.0, -2.1, math.pi, 22.2], 5)


def test_sqr_sum():
    assert sqr_sum([]) == 0.0
    assert sqr_sum([1, 2, 3, 4, 5]) == 55.0
    assert sqr_sum(np.array([-3.0, 4.0])) == pytest.approx(25.0)
