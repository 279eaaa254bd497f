# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from test.unit.utils.base import BaseTestCase
from test.unit.utils.data import TestData

import numpy as np
import pandas as pd
from sklearn.linear_model import Ridge
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from tsrecursive.data_classes.forecast_job import RecursiveForecastJobDataClass
from tsrecursive.exceptions import InputDataInsufficientError, InputDataInvalidError
from tsrecursive.model.metamodels.recursive import RecursiveRegressor
from tsrecursive.model.regressors.linear import LinearTsRegressor
from tsrecursive.model.regressors.xgb import XGBTsRegressor
from tsrecursive.pipeline.train_recursive_model import (
    check_input_columns,
    train_recursive_model_pipeline,
)


class TestTrainRecursiveModelPipeline(BaseTestCase):
    def setUp(self) -> None:
        self.job = RecursiveForecastJobDataClass(
            id=1, model="linear", lags=[1], horizon=5
        )

    def test_train_single_series(self):
        data = TestData.linear_series(20)

        model = train_recursive_model_pipeline(self.job, data)

        self.assertIsInstance(model, RecursiveRegressor)
        self.assertIsInstance(model.regressor_, LinearTsRegressor)
        self.assertEqual(model.feature_names_, ["y_lag1"])
        self.assertEqual(model.chunk_size, 1)
        self.assertEqual(model.train_tail["y"].tolist(), [20.0])

        future = pd.DataFrame({"y": [np.nan, np.nan]})
        self.assertArrayAlmostEqual(model.predict(future), [21.0, 22.0], 6)

    def test_train_panel(self):
        job = RecursiveForecastJobDataClass(
            id="panel",
            model="xgb",
            model_kwargs={"n_estimators": 10},
            id_column="id",
            lags=[1, 2],
            rolling_windows=[3],
            horizon=5,
            chunk_size=2,
        )
        data = TestData.panel(20)

        model = train_recursive_model_pipeline(job, data)

        self.assertIsInstance(model.regressor_, XGBTsRegressor)
        self.assertEqual(model.regressor_.n_estimators, 10)
        self.assertEqual(model.chunk_size, 2)
        # three rows of every series are needed for the rolling window
        self.assertEqual(len(model.train_tail), 6)
        self.assertEqual(model.id_column, "id")

    def test_train_ignores_future_rows(self):
        data = TestData.linear_series(20)
        data.iloc[-3:, 0] = np.nan

        model = train_recursive_model_pipeline(self.job, data)

        self.assertEqual(model.train_tail["y"].iloc[-1], 17.0)

    def test_train_with_feature_columns(self):
        data = TestData.linear_series(20)
        data["temperature"] = np.arange(20) % 2
        job = RecursiveForecastJobDataClass(
            id=1,
            model="linear",
            lags=[1],
            feature_columns=["temperature"],
            horizon=5,
        )

        model = train_recursive_model_pipeline(job, data)

        self.assertEqual(model.feature_names_, ["y_lag1", "temperature"])

    def test_train_with_base_estimator(self):
        data = TestData.linear_series(20)

        model = train_recursive_model_pipeline(
            self.job, data, base_estimator=make_pipeline(StandardScaler(), Ridge())
        )

        self.assertEqual(model.regressor_.steps[-1][0], "ridge")

    def test_train_insufficient_data(self):
        job = RecursiveForecastJobDataClass(
            id=1, model="linear", lags=[30], horizon=5
        )
        with self.assertRaises(InputDataInsufficientError):
            train_recursive_model_pipeline(job, TestData.linear_series(20))

    def test_check_input_columns(self):
        job = RecursiveForecastJobDataClass(
            id=1,
            model="linear",
            id_column="id",
            lags=[1],
            feature_columns=["temperature"],
            horizon=5,
        )
        with self.assertRaises(InputDataInvalidError):
            check_input_columns(job, TestData.panel(5))

        check_input_columns(job, TestData.panel(5).assign(temperature=1.0))
