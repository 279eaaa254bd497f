# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
"""This module provides the feature transform used to train and run recursive models.

The ``AutoregressiveFeatureApplicator`` is a callable object so it can be passed as
the ``transform`` of a ``RecursiveRegressor``: it receives the trailing history of
the target concatenated with the rows to forecast and (re)computes every lag and
rolling feature from the target column.

Example:
    applicator = AutoregressiveFeatureApplicator(target="y", lags=[1, 2, 7])
    data_with_features = applicator(data)

"""
from typing import Iterable, List, Optional

import pandas as pd

from tsrecursive.enums import AggregateFunction
from tsrecursive.feature_engineering.lag_features import (
    add_lag_features,
    lag_feature_name,
    validate_lags,
)
from tsrecursive.feature_engineering.rolling_features import (
    add_rolling_aggregate_features,
    rolling_feature_name,
)


class AutoregressiveFeatureApplicator:
    """Adds lag and rolling aggregate features of a target column.

    Args:
        target: Name of the target column.
        lags: Lag orders in rows.
        rolling_windows: Window sizes in rows of the rolling aggregates.
        aggregate_functions: Aggregations computed for every rolling window.
        rolling_lag: Shift of the target before the rolling aggregation. Defaults
            to the smallest lag, so the rolling features are as available as the
            lag features during chunked recursive prediction.
        id_column: Name of the column identifying the series of panel data.

    """

    def __init__(
        self,
        target: str,
        lags: Iterable[int],
        rolling_windows: Iterable[int] = (),
        aggregate_functions: Iterable[AggregateFunction] = (AggregateFunction.MEAN,),
        rolling_lag: Optional[int] = None,
        id_column: Optional[str] = None,
    ) -> None:
        self.target = target
        self.lags = validate_lags(lags)
        self.rolling_windows = [int(window) for window in rolling_windows]
        self.aggregate_functions = [
            AggregateFunction(func) for func in aggregate_functions
        ]
        self.rolling_lag = min(self.lags) if rolling_lag is None else int(rolling_lag)
        self.id_column = id_column

    @property
    def feature_names(self) -> List[str]:
        """Names of the columns added by this applicator, in order."""
        names = [lag_feature_name(self.target, lag) for lag in self.lags]
        names += [
            rolling_feature_name(self.target, window, func, self.rolling_lag)
            for window in self.rolling_windows
            for func in self.aggregate_functions
        ]
        return names

    @property
    def max_lookback(self) -> int:
        """Number of trailing rows per series needed to compute every feature."""
        lookbacks = list(self.lags)
        lookbacks += [
            self.rolling_lag + window - 1 for window in self.rolling_windows
        ]
        return max(lookbacks)

    def add_features(self, data: pd.DataFrame) -> pd.DataFrame:
        """Adds the features to a copy of the input dataframe.

        Args:
            data: Input data holding the target (and id) column, ordered in time.

        Returns:
            Input data with an extra column for every feature.

        """
        data = add_lag_features(
            data, target=self.target, lags=self.lags, id_column=self.id_column
        )
        if self.rolling_windows:
            data = add_rolling_aggregate_features(
                data,
                target=self.target,
                windows=self.rolling_windows,
                aggregate_functions=self.aggregate_functions,
                lag=self.rolling_lag,
                id_column=self.id_column,
            )
        return data

    def __call__(self, data: pd.DataFrame) -> pd.DataFrame:
        return self.add_features(data)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(target={self.target!r}, lags={self.lags}, "
            f"rolling_windows={self.rolling_windows}, id_column={self.id_column!r})"
        )
