"""Data-size constraints for the Granger F-test."""
from __future__ import annotations

from granger_indicator.errors import InsufficientData


def max_lag_size(num_observations: int, num_variables: int) -> int:
    """Maximum lag window usable for ``num_observations`` and ``num_variables``.

    Parameters
    ----------
    num_observations : int
        Number of observations (data size).
    num_variables : int
        Number of unique variables in the universe, not the number of model
        parameters.

    Returns
    -------
    int
        ``num_observations // (num_variables + 1)``.

    Raises
    ------
    InsufficientData
        If the data cannot even support a lag of 1.
    """
    if num_observations < 1 or num_variables < 1:
        raise InsufficientData(
            f"Observations ({num_observations}) and variables ({num_variables}) must both be positive.",
            num_observations=num_observations,
            num_variables=num_variables,
        )
    if num_observations - 1 < num_variables:
        raise InsufficientData(
            f"There is not enough data ({num_observations}) for a lag size of 1 "
            f"with {num_variables} variables.",
            num_observations=num_observations,
            num_variables=num_variables,
        )
    return num_observations // (num_variables + 1)


def check_feasible(data_size: int, num_variables: int, lag_size: int) -> bool:
    """Check that a Granger test can be fitted for the given sizes.

    ``data_size - lag_size`` rows remain after lagging; they must outnumber the
    ``num_variables * lag_size`` predictors, and ``lag_size`` must not exceed
    :func:`max_lag_size` for those rows.
    """
    observed = data_size - lag_size
    predictors = num_variables * lag_size
    if observed <= predictors:
        # "data" here is the lagged matrix row count, not the raw series length
        raise InsufficientData(
            f"There is not enough data available ({observed}) to satisfy all predictors "
            f"({predictors}) computed for the given lag size ({lag_size}).",
            observed=observed,
            predictors=predictors,
            lag_size=lag_size,
        )
    max_lag = max_lag_size(observed, num_variables)
    if lag_size > max_lag:
        raise InsufficientData(
            f"The lag size ({lag_size}) is too big for the given data size ({data_size}) "
            f"(max lag size = {max_lag}).",
            data_size=data_size,
            lag_size=lag_size,
            max_lag_size=max_lag,
        )
    return True


def resolve_lag_size(data_size: int, num_variables: int) -> int:
    """Largest lag that passes :func:`check_feasible` and leaves F-test degrees of freedom."""
    for lag in range(max_lag_size(data_size, num_variables), 0, -1):
        try:
            check_feasible(data_size, num_variables, lag)
        except InsufficientData:
            continue
        if data_size - 3 * lag - 1 >= 1:
            return lag
    raise InsufficientData(
        f"No feasible lag size for data size {data_size} and {num_variables} variables.",
        data_size=data_size,
        num_variables=num_variables,
    )


__all__ = ["max_lag_size", "check_feasible", "resolve_lag_size"]
