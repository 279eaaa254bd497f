# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
"""Lag features of the target, computed per series for panel data."""
import re
from typing import Iterable, List, Optional

import pandas as pd


def lag_feature_name(target: str, lag: int) -> str:
    return f"{target}_lag{int(lag)}"


def validate_lags(lags: Iterable[int]) -> List[int]:
    lags = [int(lag) for lag in lags]
    if len(lags) == 0:
        raise ValueError("At least one lag is required.")
    if min(lags) < 1:
        raise ValueError(f"Lags must be positive integers, got {lags}.")
    return sorted(set(lags))


def _shift_target(
    data: pd.DataFrame, target: str, periods: int, id_column: Optional[str]
) -> pd.Series:
    if id_column is None:
        return data[target].shift(periods)
    return data.groupby(id_column, sort=False)[target].shift(periods)


def add_lag_features(
    data: pd.DataFrame,
    target: str,
    lags: Iterable[int],
    id_column: Optional[str] = None,
) -> pd.DataFrame:
    """Adds lagged copies of the target column to the input dataframe.

    Lags are taken in rows, not in time. For panel data the shift is done within
    each series so values never leak from one series into another.

    Args:
        data: Input dataframe, ordered in time (within each series).
        target: Name of the target column.
        lags: Lag orders (positive integers).
        id_column: Optional name of the column identifying the series.

    Returns:
        Copy of the input with a ``<target>_lag<n>`` column per lag.

    Raises:
        ValueError: If no or non-positive lags are given, or a column is missing.

    """
    lags = validate_lags(lags)
    if target not in data.columns:
        raise ValueError(f"The DataFrame must contain a '{target}' column.")
    if id_column is not None and id_column not in data.columns:
        raise ValueError(f"The id column '{id_column}' is missing.")

    data = data.copy()
    for lag in lags:
        data[lag_feature_name(target, lag)] = _shift_target(
            data, target, lag, id_column
        )
    return data


def extract_lag_features(
    feature_names: List[str], target: Optional[str] = None
) -> List[int]:
    """Extracts the lag orders that are encoded in feature names.

    Rolling features (``<target>_lag<n>_roll...``) count as well since they are
    computed from the target shifted by ``n`` rows.

    Args:
        feature_names: Column names, e.g. the features a model was trained on.
        target: Only consider features derived from this target if given.

    Returns:
        Sorted unique lag orders.

    """
    prefix = re.escape(target) if target is not None else r".+"
    pattern = re.compile(rf"^{prefix}_lag(\d+)(?:_|$)")

    lags = set()
    for feature_name in feature_names:
        match = pattern.match(str(feature_name))
        if match is not None:
            lags.add(int(match[1]))
    return sorted(lags)
