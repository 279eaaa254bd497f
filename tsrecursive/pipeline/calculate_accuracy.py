# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
from typing import List, Optional, Union

import pandas as pd

from tsrecursive.logging.logger_factory import get_logger
from tsrecursive.metrics.metric_set import (
    MetricSet,
    extended_forecast_accuracy_metric_set,
    summarize_accuracy_metrics,
)


def calculate_accuracy_pipeline(
    data: pd.DataFrame,
    truth: str = "y",
    estimate: str = "forecast",
    group_columns: Optional[Union[str, List[str]]] = None,
    metric_set: Optional[MetricSet] = None,
) -> pd.DataFrame:
    """Calculate the accuracy of forecasts against realised values.

    Args:
        data: Realised and forecasted values, e.g. a backtest.
        truth: Column holding the realised values.
        estimate: Column holding the forecasted values.
        group_columns: Columns to report the accuracy for separately, e.g. the
            series id or the model name.
        metric_set: Metrics to compute, the extended forecast accuracy metric set
            if omitted.

    Returns:
        One row per group with a column per metric.

    """
    logger = get_logger(__name__)
    if metric_set is None:
        metric_set = extended_forecast_accuracy_metric_set()

    accuracy = summarize_accuracy_metrics(
        data,
        truth=truth,
        estimate=estimate,
        metric_set=metric_set,
        group_columns=group_columns,
    )
    logger.info(
        "Calculated forecast accuracy",
        n_groups=len(accuracy),
        metrics=metric_set.names,
    )
    return accuracy
