# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
"""This module contains all metrics to assess forecast quality.

Every metric takes the realised and the forecasted values and returns a float.
Pairs where either value is missing are ignored.
"""
from typing import Callable, Tuple

import numpy as np
import pandas as pd

from tsrecursive.exceptions import UnknownMetricError


def get_eval_metric_function(metric_name: str) -> Callable:
    """Gets a metric if it is available.

    Args:
        metric_name: Name of the metric.

    Returns:
        Function to calculate the metric.

    Raises:
        UnknownMetricError: If the metric is not available (a ``KeyError``).

    """
    evaluation_function = {
        "mae": mae,
        "mape": mape,
        "mase": mase,
        "smape": smape,
        "maape": maape,
        "rmse": rmse,
        "rsq": rsq,
        "bias": bias,
    }.get(metric_name, None)

    if evaluation_function is None:
        raise UnknownMetricError(metric_name)

    return evaluation_function


def _drop_missing(realised, forecast) -> Tuple[np.ndarray, np.ndarray]:
    realised = np.asarray(realised, dtype=float)
    forecast = np.asarray(forecast, dtype=float)
    if realised.shape != forecast.shape:
        raise ValueError(
            "Error metric can only be calculated for arrays of equal length!"
        )
    valid = ~(np.isnan(realised) | np.isnan(forecast))
    return realised[valid], forecast[valid]


def mae(realised: pd.Series, forecast: pd.Series) -> float:
    """Function that calculates the mean absolute error based on the true and prediction."""
    realised, forecast = _drop_missing(realised, forecast)
    if len(realised) == 0:
        return np.nan
    return float(np.mean(np.abs(forecast - realised)))


def rmse(realised: pd.Series, forecast: pd.Series) -> float:
    """Function that calculates the Root Mean Square Error based on the true and prediciton.

    Args:
        realised: Realised values.
        forecast: Forecasted values.

    Returns:
        Root Mean Square Error

    """
    realised, forecast = _drop_missing(realised, forecast)
    if len(realised) == 0:
        return np.nan
    return float(np.sqrt(np.mean((realised - forecast) ** 2)))


def bias(realised: pd.Series, forecast: pd.Series) -> float:
    """Function that calculates the mean error (forecast minus realised).

    Positive values mean the forecast overestimates on average.

    """
    realised, forecast = _drop_missing(realised, forecast)
    if len(realised) == 0:
        return np.nan
    return float(np.mean(forecast - realised))


def mape(realised: pd.Series, forecast: pd.Series) -> float:
    """Function that calculates the mean absolute percentage error in %.

    Realised values of zero give an infinite error.

    """
    realised, forecast = _drop_missing(realised, forecast)
    if len(realised) == 0:
        return np.nan
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.mean(np.abs((realised - forecast) / realised)) * 100)


def smape(realised: pd.Series, forecast: pd.Series) -> float:
    """Function that calculates the symmetric mean absolute percentage error in %.

    The error of each pair is divided by the mean of the absolute realised and
    forecasted values. Pairs where both are zero count as a perfect forecast.

    """
    realised, forecast = _drop_missing(realised, forecast)
    if len(realised) == 0:
        return np.nan
    denominator = (np.abs(realised) + np.abs(forecast)) / 2
    errors = np.abs(forecast - realised)
    with np.errstate(divide="ignore", invalid="ignore"):
        ratios = np.where(denominator == 0, 0.0, errors / denominator)
    return float(np.mean(ratios) * 100)


def maape(realised: pd.Series, forecast: pd.Series) -> float:
    """Function that calculates the mean arctangent absolute percentage error.

    The arctangent bounds the error of each pair to [0, pi/2], so realised values
    close to zero do not dominate the result like they do for the MAPE. The result
    is in radians.

    """
    realised, forecast = _drop_missing(realised, forecast)
    if len(realised) == 0:
        return np.nan
    with np.errstate(divide="ignore", invalid="ignore"):
        ratios = np.abs((realised - forecast) / realised)
    # 0 / 0 is a perfect forecast, x / 0 an infinite error
    ratios = np.where(np.isnan(ratios), 0.0, ratios)
    return float(np.mean(np.arctan(ratios)))


def mase(realised: pd.Series, forecast: pd.Series, m: int = 1) -> float:
    """Function that calculates the mean absolute scaled error.

    The mean absolute error is scaled by the in-sample mean absolute error of the
    seasonal naive forecast of the realised values (the value ``m`` steps back).

    Args:
        realised: Realised values, in time order.
        forecast: Forecasted values.
        m: Seasonal period of the naive forecast.

    Returns:
        Mean absolute scaled error, nan if the naive forecast has no error or there
        are too few values to compute it.

    """
    if int(m) < 1:
        raise ValueError(f"The seasonal period m must be at least 1, got {m}.")
    realised, forecast = _drop_missing(realised, forecast)
    if len(realised) <= m:
        return np.nan

    scale = np.mean(np.abs(realised[m:] - realised[:-m]))
    if scale == 0:
        return np.nan
    return float(np.mean(np.abs(forecast - realised)) / scale)


def rsq(realised: pd.Series, forecast: pd.Series) -> float:
    """Function that calculates the coefficient of determination as the squared correlation.

    Returns nan when either series is constant.

    """
    realised, forecast = _drop_missing(realised, forecast)
    if len(realised) < 2 or np.std(realised) == 0 or np.std(forecast) == 0:
        return np.nan
    return float(np.corrcoef(realised, forecast)[0, 1] ** 2)
