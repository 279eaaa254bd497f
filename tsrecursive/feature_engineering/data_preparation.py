# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
"""Helpers to prepare single and panel time series for recursive forecasting."""
from typing import Optional, Tuple

import numpy as np
import pandas as pd


def _check_column(data: pd.DataFrame, column: Optional[str], kind: str) -> None:
    if column is not None and column not in data.columns:
        raise ValueError(f"The {kind} column '{column}' is missing.")


def panel_tail(data: pd.DataFrame, id_column: str, n: int) -> pd.DataFrame:
    """Returns the last ``n`` rows of every series in a panel dataset.

    The result is the training tail a recursive panel model needs to compute its
    lag features. Row order of the input is preserved.

    Args:
        data: Panel data ordered in time within each series.
        id_column: Column identifying the series.
        n: Number of rows to keep per series.

    Returns:
        The trailing rows of each series.

    Raises:
        ValueError: If the id column is missing or ``n`` is not positive.

    """
    if id_column is None:
        raise ValueError("An id column is required to take the tail of panel data.")
    _check_column(data, id_column, "id")
    if int(n) < 1:
        raise ValueError(f"The tail length must be at least 1, got {n}.")

    return data.groupby(id_column, sort=False).tail(int(n))


def _timestamps(data: pd.DataFrame, time_column: Optional[str]) -> pd.Series:
    if time_column is None:
        if not isinstance(data.index, pd.DatetimeIndex):
            raise ValueError(
                "The DataFrame index must be a DatetimeIndex when no time column is given."
            )
        return pd.Series(data.index, index=data.index)
    return pd.to_datetime(data[time_column])


def _future_timestamps(
    timestamps: pd.Series, horizon: int, freq: Optional[str]
) -> pd.DatetimeIndex:
    timestamps = pd.DatetimeIndex(timestamps.sort_values())
    if freq is None:
        freq = pd.infer_freq(timestamps) if len(timestamps) >= 3 else None
    if freq is None:
        raise ValueError(
            "Could not infer the frequency of the time series, please pass `freq`."
        )
    return pd.date_range(start=timestamps[-1], periods=horizon + 1, freq=freq)[1:]


def extend_timeseries(
    data: pd.DataFrame,
    horizon: int,
    freq: Optional[str] = None,
    time_column: Optional[str] = None,
    id_column: Optional[str] = None,
    target: str = "y",
) -> pd.DataFrame:
    """Appends ``horizon`` future rows to a single or panel time series.

    The new rows get the next timestamps after the last timestamp of their series
    and a missing target. All other columns are left empty, except the id column.
    Future rows are appended after the existing data, per series in order of first
    appearance.

    Args:
        data: Time series data. Timestamps come from the index or ``time_column``.
        horizon: Number of steps to add per series.
        freq: Frequency of the series, inferred from the timestamps if omitted.
        time_column: Column holding the timestamps, the index is used if omitted.
        id_column: Column identifying the series of panel data.
        target: Name of the target column.

    Returns:
        The input data followed by the future rows.

    Raises:
        ValueError: If the horizon is not positive, a column is missing or the
            frequency can not be inferred.

    """
    if int(horizon) < 1:
        raise ValueError(f"The horizon must be at least 1, got {horizon}.")
    _check_column(data, time_column, "time")
    _check_column(data, id_column, "id")

    timestamps = _timestamps(data, time_column)
    if id_column is None:
        groups = [(None, timestamps)]
    else:
        groups = timestamps.groupby(data[id_column].to_numpy(), sort=False)

    future_frames = []
    for group, group_timestamps in groups:
        future_index = _future_timestamps(group_timestamps, int(horizon), freq)
        future = pd.DataFrame(
            np.nan, index=range(len(future_index)), columns=data.columns
        )
        if target not in future.columns:
            future[target] = np.nan
        if id_column is not None:
            future[id_column] = group
        if time_column is None:
            future.index = future_index
            future.index.name = data.index.name
        else:
            future[time_column] = future_index
        future_frames.append(future)

    if time_column is not None:
        # keep the positional index of the input and continue it for the future rows
        future_data = pd.concat(future_frames, ignore_index=True)
        if isinstance(data.index, pd.RangeIndex):
            future_data.index = pd.RangeIndex(
                data.index.stop, data.index.stop + len(future_data)
            )
        return pd.concat([data, future_data])

    return pd.concat([data, *future_frames])


def split_train_future(
    data: pd.DataFrame, target: str, id_column: Optional[str] = None
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Splits data into observed rows and the future rows to forecast.

    Future rows are the rows after the last observed target of their series.
    Missing targets earlier in the history stay in the observed part.

    Args:
        data: Data as returned by ``extend_timeseries``.
        target: Name of the target column.
        id_column: Column identifying the series of panel data.

    Returns:
        Tuple of the observed data and the future data.

    """
    _check_column(data, target, "target")
    _check_column(data, id_column, "id")

    observed = data[target].notna().astype(int).iloc[::-1]
    if id_column is None:
        seen_later = observed.cummax()
    else:
        seen_later = observed.groupby(
            data[id_column].iloc[::-1].to_numpy(), sort=False
        ).cummax()
    is_future = (seen_later.iloc[::-1] == 0).to_numpy()

    return data[~is_future], data[is_future]
