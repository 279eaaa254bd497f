# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
from typing import Iterable, Optional

import pandas as pd

from tsrecursive.enums import AggregateFunction
from tsrecursive.feature_engineering.lag_features import lag_feature_name


def rolling_feature_name(
    target: str, window: int, aggregate_func: AggregateFunction, lag: int = 1
) -> str:
    return f"{lag_feature_name(target, lag)}_roll{int(window)}_{aggregate_func.value}"


def add_rolling_aggregate_features(
    data: pd.DataFrame,
    target: str,
    windows: Iterable[int],
    aggregate_functions: Iterable[AggregateFunction] = (AggregateFunction.MEAN,),
    lag: int = 1,
    id_column: Optional[str] = None,
) -> pd.DataFrame:
    """
    Adds rolling aggregate features to the input dataframe.

    The aggregates are calculated over a rolling window of the target shifted by
    ``lag`` rows, so a feature for a row only uses values at least ``lag`` rows
    back. Windows only need a single observation to produce a value.

    Args:
        data: Input dataframe to which the rolling features will be added.
        target: Name of the target column.
        windows: Window sizes in rows.
        aggregate_functions: Aggregations to compute for every window.
        lag: Number of rows the target is shifted before aggregating.
        id_column: Optional name of the column identifying the series.

    Returns:
        Copy of the input with a column per window and aggregate.
    """
    if target not in data.columns:
        raise ValueError(f"The DataFrame must contain a '{target}' column.")
    if id_column is not None and id_column not in data.columns:
        raise ValueError(f"The id column '{id_column}' is missing.")
    if int(lag) < 1:
        raise ValueError(f"The rolling lag must be at least 1, got {lag}.")

    windows = [int(window) for window in windows]
    if any(window < 1 for window in windows):
        raise ValueError(f"Rolling windows must be positive integers, got {windows}.")

    data = data.copy()
    if id_column is None:
        shifted = data[target].shift(lag)
    else:
        shifted = data.groupby(id_column, sort=False)[target].shift(lag)

    for window in windows:
        for aggregate_func in aggregate_functions:
            aggregate_func = AggregateFunction(aggregate_func)

            def _aggregate(values, window=window, func=aggregate_func.value):
                return values.rolling(window=window, min_periods=1).aggregate(func)

            if id_column is None:
                rolled = _aggregate(shifted)
            else:
                # positional keys, the index may repeat across series
                rolled = shifted.groupby(
                    data[id_column].to_numpy(), sort=False
                ).transform(_aggregate)
            data[rolling_feature_name(target, window, aggregate_func, lag)] = rolled

    return data
