# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

"""Example demonstrating recursive multi-step forecasting.

A regressor trained on lag features can only predict one step ahead. Wrapped in a
RecursiveRegressor it forecasts any horizon: every prediction is written back into
the target column and the lag features are recomputed before the next step.

The example covers:
    1. A single series with a linear regression, wrapped after fitting.
    2. A panel of series with gradient boosted trees, trained by the pipeline.
    3. The accuracy of both forecasts with the extended metric set.
"""

import numpy as np
import pandas as pd

from tsrecursive.data_classes.forecast_job import RecursiveForecastJobDataClass
from tsrecursive.feature_engineering.apply_features import (
    AutoregressiveFeatureApplicator,
)
from tsrecursive.feature_engineering.data_preparation import (
    extend_timeseries,
    split_train_future,
)
from tsrecursive.metrics.metric_set import (
    extended_forecast_accuracy_metric_set,
    summarize_accuracy_metrics,
)
from tsrecursive.metrics.metrics import maape
from tsrecursive.model.metamodels.recursive import recursive
from tsrecursive.model.regressors.linear import LinearTsRegressor
from tsrecursive.pipeline.create_recursive_forecast import (
    create_recursive_forecast_pipeline,
)
from tsrecursive.plotting.forecast_plotter import ForecastPlotter

HORIZON = 24


def create_series(
    n: int = 24 * 21, seed: int = 0, level: float = 100.0
) -> pd.DataFrame:
    """Hourly series with a daily cycle and noise."""
    rng = np.random.default_rng(seed)
    index = pd.date_range("2025-01-01", periods=n, freq="1h", name="datetime")
    daily = 10 * np.sin(2 * np.pi * np.arange(n) / 24)
    return pd.DataFrame({"y": level + daily + rng.normal(0, 1, n)}, index=index)


def single_series_example() -> pd.DataFrame:
    data = create_series()
    train, test = data.iloc[:-HORIZON], data.iloc[-HORIZON:]

    # Lags 1..24 and a rolling mean of the last day
    applicator = AutoregressiveFeatureApplicator(
        target="y", lags=range(1, 25), rolling_windows=[24]
    )
    train_features = applicator(train).dropna()
    model = LinearTsRegressor().fit(
        train_features[applicator.feature_names], train_features["y"]
    )

    # Make the fitted model recursive, the tail holds enough rows for the largest lag
    recursive_model = recursive(
        model,
        transform=applicator,
        train_tail=train.tail(applicator.max_lookback),
        target="y",
    )

    future = extend_timeseries(train, horizon=HORIZON, target="y")
    _, future = split_train_future(future, target="y")
    forecast = test.assign(forecast=recursive_model.predict(future))
    forecast["model"] = "linear"
    return forecast


def panel_example() -> pd.DataFrame:
    panel = pd.concat(
        [
            create_series(seed=1, level=100.0).assign(id="a"),
            create_series(seed=2, level=50.0).assign(id="b"),
        ]
    )
    train = panel.groupby("id").head(len(panel) // 2 - HORIZON)
    test = panel.groupby("id").tail(HORIZON)

    job = RecursiveForecastJobDataClass(
        id="panel_example",
        model="xgb",
        model_kwargs={"n_estimators": 200, "max_depth": 3, "learning_rate": 0.1},
        target="y",
        id_column="id",
        lags=list(range(1, 25)),
        rolling_windows=[24],
        horizon=HORIZON,
    )
    forecast = create_recursive_forecast_pipeline(job, train)

    figure = ForecastPlotter(yaxis_title="y").plot(
        actual=panel, forecast=forecast, target="y", id_column="id"
    )
    figure.write_html("recursive_panel_forecast.html")

    forecast["y"] = test["y"].to_numpy()
    forecast["model"] = "xgb"
    return forecast


if __name__ == "__main__":
    forecasts = pd.concat([single_series_example(), panel_example()])

    accuracy = summarize_accuracy_metrics(
        forecasts.groupby("model"),
        "y",
        "forecast",
        metric_set=extended_forecast_accuracy_metric_set(maape),
    )
    print(accuracy.to_string(index=False))
