# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
"""This module combines metric functions into metric sets and accuracy tables.

A metric set is applied to a dataframe with a truth and an estimate column, either
as a whole or per group:

.. code-block:: python

    metrics = extended_forecast_accuracy_metric_set(maape)
    accuracy = summarize_accuracy_metrics(
        predictions.groupby("model"), "truth", "estimate", metric_set=metrics
    )

"""
from typing import Callable, Iterator, List, Optional, Sequence, Union

import pandas as pd
from pandas.core.groupby.generic import DataFrameGroupBy

from tsrecursive.metrics.metrics import (
    bias,
    get_eval_metric_function,
    mae,
    mape,
    mase,
    rmse,
    rsq,
    smape,
)

METRIC_COLUMN = "metric"
ESTIMATOR_COLUMN = "estimator"
ESTIMATE_COLUMN = "estimate"


def get_metric_name(metric: Callable) -> str:
    """Name under which a metric is reported, also for ``functools.partial`` metrics."""
    name = getattr(metric, "metric_name", None) or getattr(metric, "__name__", None)
    if name is None and hasattr(metric, "func"):
        name = get_metric_name(metric.func)
    if name is None:
        raise ValueError(f"Can not determine the name of metric {metric!r}.")
    return name


class MetricSet:
    """Ordered collection of metric functions that are evaluated together.

    Calling the metric set returns a long table with one row per metric (per group).
    Metrics that occur more than once are evaluated and reported more than once.

    Args:
        metrics: Metric functions ``fn(realised, forecast) -> float`` or metric names.

    """

    def __init__(self, metrics: Sequence[Union[Callable, str]]):
        self.metrics = []
        for metric in metrics:
            if isinstance(metric, MetricSet):
                self.metrics.extend(metric.metrics)
            elif isinstance(metric, str):
                self.metrics.append(get_eval_metric_function(metric))
            elif callable(metric):
                self.metrics.append(metric)
            else:
                raise TypeError(f"Metrics must be callables or names, got {metric!r}")

    @property
    def names(self) -> List[str]:
        return [get_metric_name(metric) for metric in self.metrics]

    def __len__(self) -> int:
        return len(self.metrics)

    def __iter__(self) -> Iterator[Callable]:
        return iter(self.metrics)

    def __repr__(self) -> str:
        return f"MetricSet({self.names})"

    def evaluate(self, realised: pd.Series, forecast: pd.Series) -> List[tuple]:
        """Evaluates every metric, returns (name, value) pairs in set order."""
        return [
            (get_metric_name(metric), metric(realised, forecast))
            for metric in self.metrics
        ]

    def __call__(
        self,
        data: Union[pd.DataFrame, DataFrameGroupBy],
        truth: str,
        estimate: str,
        group_columns: Optional[Union[str, List[str]]] = None,
    ) -> pd.DataFrame:
        """Evaluates the metric set on a (grouped) dataframe.

        Args:
            data: Dataframe, or a dataframe grouped by columns, index levels or series.
            truth: Column holding the realised values.
            estimate: Column holding the forecasted values.
            group_columns: Columns to group by, if ``data`` is not grouped already.

        Returns:
            Long dataframe with the group columns followed by ``metric``,
            ``estimator`` and ``estimate``.

        """
        rows = []
        group_columns, groups = _iterate_groups(data, group_columns, truth, estimate)
        for key, group in groups:
            for name, value in self.evaluate(group[truth], group[estimate]):
                rows.append((*key, name, "standard", value))

        return pd.DataFrame(
            rows,
            columns=[*group_columns, METRIC_COLUMN, ESTIMATOR_COLUMN, ESTIMATE_COLUMN],
        )


def metric_set(*metrics: Union[Callable, str, MetricSet]) -> MetricSet:
    """Creates a metric set, metric sets passed in are flattened."""
    return MetricSet(metrics)


def default_forecast_accuracy_metric_set(
    *metrics: Union[Callable, str, MetricSet]
) -> MetricSet:
    """Metric set with the common forecast accuracy metrics.

    Contains mae, mape, mase, smape, rmse and rsq, followed by any extra metrics.
    """
    return metric_set(mae, mape, mase, smape, rmse, rsq, *metrics)


def extended_forecast_accuracy_metric_set(
    *metrics: Union[Callable, str, MetricSet]
) -> MetricSet:
    """Metric set with the default forecast accuracy metrics and the bias.

    Contains mae, mape, mase, smape, rmse, rsq and bias, followed by any extra
    metrics.
    """
    return default_forecast_accuracy_metric_set(bias, *metrics)


def _group_names(grouped: DataFrameGroupBy) -> List[str]:
    """Names of the grouping keys, whether columns, index levels or series."""
    sizes = grouped.size()
    # with as_index=False the keys are columns, followed by the size column
    names = sizes.columns[:-1] if isinstance(sizes, pd.DataFrame) else sizes.index.names
    return [
        f"group_{position}" if name is None else name
        for position, name in enumerate(names)
    ]


def _iterate_groups(data, group_columns, truth, estimate):
    if isinstance(data, DataFrameGroupBy):
        if group_columns is not None:
            raise ValueError("Pass either grouped data or group columns, not both.")
        grouped, frame = data, data.obj
    else:
        if isinstance(group_columns, str):
            group_columns = [group_columns]
        grouped, frame = None, data
        for column in group_columns or []:
            if column not in data.columns:
                raise ValueError(f"Column {column!r} is missing from the data.")
        if group_columns:
            grouped = data.groupby(list(group_columns), sort=False)

    for column in (truth, estimate):
        if not isinstance(column, str) or column not in frame.columns:
            raise ValueError(f"Column {column!r} is missing from the data.")

    if grouped is None:
        return [], [((), frame)]

    def _groups():
        for key, group in grouped:
            if not isinstance(key, tuple):
                key = (key,)
            yield key, group

    return _group_names(grouped), _groups()


def summarize_accuracy_metrics(
    data: Union[pd.DataFrame, DataFrameGroupBy],
    truth: str,
    estimate: str,
    metric_set: MetricSet = None,
    group_columns: Optional[Union[str, List[str]]] = None,
) -> pd.DataFrame:
    """Summarizes the accuracy of forecasts in a wide table.

    Args:
        data: Dataframe, or a dataframe grouped by columns, index levels or series.
        truth: Column holding the realised values.
        estimate: Column holding the forecasted values.
        metric_set: Metrics to compute, the default forecast accuracy metric set if
            omitted.
        group_columns: Columns to group by, if ``data`` is not grouped already.

    Returns:
        One row per group: the group columns followed by a column per metric.

    """
    if metric_set is None:
        metric_set = default_forecast_accuracy_metric_set()
    elif not isinstance(metric_set, MetricSet):
        metric_set = MetricSet(metric_set)

    group_columns, groups = _iterate_groups(data, group_columns, truth, estimate)
    rows = []
    for key, group in groups:
        row = dict(zip(group_columns, key))
        row.update(metric_set.evaluate(group[truth], group[estimate]))
        rows.append(row)

    columns = list(group_columns) + list(dict.fromkeys(metric_set.names))
    return pd.DataFrame(rows, columns=columns)
