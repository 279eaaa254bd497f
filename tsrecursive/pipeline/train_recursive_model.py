# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
from typing import Any, Optional

import pandas as pd

from tsrecursive.data_classes.forecast_job import RecursiveForecastJobDataClass
from tsrecursive.exceptions import InputDataInsufficientError, InputDataInvalidError
from tsrecursive.feature_engineering.data_preparation import (
    panel_tail,
    split_train_future,
)
from tsrecursive.logging.logger_factory import get_logger
from tsrecursive.model.metamodels.recursive import RecursiveRegressor
from tsrecursive.model.model_creator import ModelCreator
from tsrecursive.settings import Settings


def check_input_columns(
    job: RecursiveForecastJobDataClass, input_data: pd.DataFrame
) -> None:
    """Checks that every column the job refers to is present.

    Raises:
        InputDataInvalidError: If a column is missing.

    """
    required = [job.target, *job.feature_columns]
    required += [c for c in (job.id_column, job.time_column) if c is not None]
    missing = [c for c in required if c not in input_data.columns]
    if missing:
        raise InputDataInvalidError(f"Input data is missing the columns {missing}.")


def train_recursive_model_pipeline(
    job: RecursiveForecastJobDataClass,
    input_data: pd.DataFrame,
    base_estimator: Optional[Any] = None,
) -> RecursiveRegressor:
    """Train a recursive model for a forecast job.

    The lag and rolling features of the job are added to the observed part of the
    input data, rows with incomplete features are dropped, and the regressor is
    trained to predict one step ahead. The returned model forecasts any number of
    steps recursively.

    Args:
        job: Forecast job.
        input_data: Single or panel time series, ordered in time within each series.
            Rows after the last observation of a series are ignored.
        base_estimator: Regressor to use instead of the model type of the job, e.g.
            a scikit-learn pipeline.

    Returns:
        Fitted recursive model.

    Raises:
        InputDataInvalidError: If columns are missing.
        InputDataInsufficientError: If no row has a complete set of features.

    """
    logger = get_logger(__name__).bind(job_id=job.id)
    check_input_columns(job, input_data)

    observed, _ = split_train_future(input_data, job.target, job.id_column)
    applicator = job.get_feature_applicator()
    data_with_features = applicator(observed)

    feature_names = applicator.feature_names + list(job.feature_columns)
    train_data = data_with_features.dropna(subset=[job.target, *feature_names])
    if len(train_data) == 0:
        raise InputDataInsufficientError(
            f"No training rows left after adding lags up to {max(applicator.lags)}."
        )

    if base_estimator is None:
        base_estimator = ModelCreator.create_model(
            job.model, **(job.model_kwargs or {})
        )

    tail_length = applicator.max_lookback
    if job.id_column is None:
        train_tail = observed.tail(tail_length)
    else:
        train_tail = panel_tail(observed, job.id_column, tail_length)

    model = RecursiveRegressor(
        base_estimator=base_estimator,
        transform=applicator,
        train_tail=train_tail,
        target=job.target,
        id_column=job.id_column,
        chunk_size=job.chunk_size or Settings.default_chunk_size,
    )
    model.fit(train_data[feature_names], train_data[job.target])

    logger.info(
        "Trained recursive model",
        model_type=type(base_estimator).__name__,
        n_train_rows=len(train_data),
        n_dropped_rows=len(observed) - len(train_data),
        features=feature_names,
    )
    return model
