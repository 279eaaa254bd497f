# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from functools import partial
from test.unit.utils.base import BaseTestCase

import numpy as np
import pandas as pd

from tsrecursive.exceptions import UnknownMetricError
from tsrecursive.metrics.metric_set import (
    MetricSet,
    default_forecast_accuracy_metric_set,
    extended_forecast_accuracy_metric_set,
    get_metric_name,
    metric_set,
    summarize_accuracy_metrics,
)
from tsrecursive.metrics.metrics import bias, mae, maape, mase, rmse


def _predictions() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "group": ["model_1"] * 4 + ["model_2"] * 4,
            "truth": [1, 2, 3, 4, 1, 2, 3, 4],
            "estimate": [1.2, 2.0, 2.5, 2.9, 0.9, 1.9, 3.3, 3.9],
        }
    )


def _series() -> pd.DataFrame:
    rng = np.random.default_rng(1)
    return pd.DataFrame(
        {
            "time": pd.date_range("2020-01-01", periods=10, freq="s"),
            "y": np.arange(1, 11) + rng.normal(size=10),
            "y_hat": np.arange(1, 11) + rng.normal(size=10),
        }
    )


class TestMetricSet(BaseTestCase):
    def test_default_metric_set(self):
        self.assertEqual(
            default_forecast_accuracy_metric_set().names,
            ["mae", "mape", "mase", "smape", "rmse", "rsq"],
        )

    def test_extended_metric_set(self):
        self.assertEqual(
            extended_forecast_accuracy_metric_set().names,
            ["mae", "mape", "mase", "smape", "rmse", "rsq", "bias"],
        )

    def test_extended_metric_set_with_extra_metric(self):
        calc_metrics = extended_forecast_accuracy_metric_set(mae)

        result = calc_metrics(_series(), "y", "y_hat")

        # a duplicated metric is reported twice
        self.assertEqual(len(result), 8)
        self.assertEqual(list(result.columns), ["metric", "estimator", "estimate"])
        self.assertEqual(list(result["metric"]).count("mae"), 2)
        self.assertTrue((result["estimator"] == "standard").all())

    def test_metric_set_values(self):
        data = _predictions().query("group == 'model_1'")

        result = metric_set(mae, bias, rmse)(data, "truth", "estimate")

        self.assertEqual(list(result["metric"]), ["mae", "bias", "rmse"])
        self.assertAlmostEqual(result["estimate"].iloc[0], 0.45)
        self.assertAlmostEqual(result["estimate"].iloc[1], -0.35)

    def test_metric_set_grouped(self):
        result = metric_set(mae, bias)(_predictions(), "truth", "estimate", "group")

        self.assertEqual(
            list(result.columns), ["group", "metric", "estimator", "estimate"]
        )
        self.assertEqual(
            list(result["group"]), ["model_1", "model_1", "model_2", "model_2"]
        )

    def test_metric_set_accepts_names_and_sets(self):
        combined = metric_set(metric_set(mae, "rmse"), "maape")

        self.assertIsInstance(combined, MetricSet)
        self.assertEqual(combined.names, ["mae", "rmse", "maape"])
        self.assertEqual(len(combined), 3)

    def test_metric_set_invalid_metrics(self):
        with self.assertRaises(UnknownMetricError):
            metric_set("not_a_metric")
        with self.assertRaises(TypeError):
            metric_set(42)

    def test_partial_metric_name(self):
        seasonal_mase = partial(mase, m=2)
        self.assertEqual(get_metric_name(seasonal_mase), "mase")

    def test_missing_column(self):
        with self.assertRaises(ValueError):
            metric_set(mae)(_predictions(), "truth", "forecast")


class TestSummarizeAccuracyMetrics(BaseTestCase):
    def test_summarize_grouped(self):
        accuracy = summarize_accuracy_metrics(
            _predictions().groupby("group"),
            "truth",
            "estimate",
            metric_set=extended_forecast_accuracy_metric_set(),
        )

        self.assertEqual(accuracy.shape, (2, 8))
        self.assertEqual(list(accuracy["group"]), ["model_1", "model_2"])

        accuracy = summarize_accuracy_metrics(
            _predictions().groupby("group"),
            "truth",
            "estimate",
            metric_set=extended_forecast_accuracy_metric_set(maape),
        )

        self.assertEqual(accuracy.shape[1], 9)
        self.assertEqual(accuracy.columns[-1], "maape")

    def test_summarize_group_columns(self):
        accuracy = summarize_accuracy_metrics(
            _predictions(), "truth", "estimate", group_columns="group"
        )

        self.assertEqual(
            list(accuracy.columns),
            ["group", "mae", "mape", "mase", "smape", "rmse", "rsq"],
        )
        self.assertAlmostEqual(accuracy["mae"].iloc[0], 0.45)
        self.assertAlmostEqual(accuracy["mae"].iloc[1], 0.15)

    def test_summarize_ungrouped(self):
        accuracy = summarize_accuracy_metrics(
            _predictions(), "truth", "estimate", metric_set=[mae, "bias"]
        )

        self.assertEqual(list(accuracy.columns), ["mae", "bias"])
        self.assertEqual(len(accuracy), 1)
        self.assertAlmostEqual(accuracy["mae"].iloc[0], 0.3)

    def test_summarize_duplicate_metric_is_one_column(self):
        accuracy = summarize_accuracy_metrics(
            _predictions(),
            "truth",
            "estimate",
            metric_set=extended_forecast_accuracy_metric_set(mae),
        )

        self.assertEqual(accuracy.shape, (1, 7))

    def test_summarize_grouped_and_group_columns(self):
        with self.assertRaises(ValueError):
            summarize_accuracy_metrics(
                _predictions().groupby("group"),
                "truth",
                "estimate",
                group_columns="group",
            )

    def test_summarize_grouped_by_index_level(self):
        accuracy = summarize_accuracy_metrics(
            _predictions().set_index("group").groupby(level="group"),
            "truth",
            "estimate",
            metric_set=extended_forecast_accuracy_metric_set(),
        )

        self.assertEqual(accuracy.shape, (2, 8))
        self.assertEqual(list(accuracy["group"]), ["model_1", "model_2"])
        self.assertAlmostEqual(accuracy["mae"].iloc[1], 0.15)

    def test_summarize_grouped_by_series(self):
        predictions = _predictions()

        accuracy = summarize_accuracy_metrics(
            predictions.groupby(predictions["group"]),
            "truth",
            "estimate",
            metric_set=extended_forecast_accuracy_metric_set(),
        )

        self.assertEqual(accuracy.shape, (2, 8))
        self.assertEqual(list(accuracy["group"]), ["model_1", "model_2"])
        self.assertAlmostEqual(accuracy["mae"].iloc[0], 0.45)

    def test_metric_set_grouped_by_index_level(self):
        grouped = _predictions().set_index("group").groupby(level="group")

        result = metric_set(mae, bias)(grouped, "truth", "estimate")

        self.assertEqual(
            list(result.columns), ["group", "metric", "estimator", "estimate"]
        )
        self.assertEqual(len(result), 4)
