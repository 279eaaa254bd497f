# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
from typing import Optional

import pandas as pd

from tsrecursive.data_classes.forecast_job import RecursiveForecastJobDataClass
from tsrecursive.feature_engineering.data_preparation import (
    extend_timeseries,
    split_train_future,
)
from tsrecursive.logging.logger_factory import get_logger
from tsrecursive.model.metamodels.recursive import RecursiveRegressor
from tsrecursive.pipeline.train_recursive_model import (
    check_input_columns,
    train_recursive_model_pipeline,
)


def create_recursive_forecast_pipeline(
    job: RecursiveForecastJobDataClass,
    input_data: pd.DataFrame,
    model: Optional[RecursiveRegressor] = None,
) -> pd.DataFrame:
    """Create recursive forecast pipeline.

    Forecasts ``job.horizon`` steps after the last observation of every series.
    When the input data already holds future rows (a missing target after the last
    observation), those rows are forecasted instead, which is how known future
    values of ``job.feature_columns`` are passed in.

    Args:
        job: Forecast job.
        input_data: Single or panel time series, optionally with future rows.
        model: Fitted recursive model. A model is trained on the input data if
            omitted.

    Returns:
        The future rows (id and time columns, or the datetime index) with a
        ``forecast`` column.

    """
    logger = get_logger(__name__).bind(job_id=job.id)
    check_input_columns(job, input_data)

    observed, future = split_train_future(input_data, job.target, job.id_column)
    if len(future) == 0:
        extended = extend_timeseries(
            observed,
            horizon=job.horizon,
            freq=job.freq,
            time_column=job.time_column,
            id_column=job.id_column,
            target=job.target,
        )
        _, future = split_train_future(extended, job.target, job.id_column)

    if model is None:
        model = train_recursive_model_pipeline(job, observed)

    keep_columns = [c for c in (job.id_column, job.time_column) if c is not None]
    forecast = future[keep_columns].copy()
    forecast["forecast"] = model.predict(future)

    logger.info(
        "Created recursive forecast",
        n_rows=len(forecast),
        n_series=1 if job.id_column is None else forecast[job.id_column].nunique(),
    )
    return forecast
