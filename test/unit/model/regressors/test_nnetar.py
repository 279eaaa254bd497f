# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from test.unit.utils.base import BaseTestCase
from test.unit.utils.data import TestData

import numpy as np
import pandas as pd
from sklearn.exceptions import NotFittedError

from tsrecursive.exceptions import InputDataInsufficientError
from tsrecursive.model.regressors.nnetar import NNetARRegressor, nnetar_fit_impl

FAST = dict(repeats=2, maxit=50, random_state=0)


class TestNNetARRegressor(BaseTestCase):
    def setUp(self) -> None:
        self.y = TestData.seasonal_series(24 * 14)["y"]

    def test_fit_non_seasonal(self):
        model = NNetARRegressor(p=2, **FAST).fit(None, self.y)

        self.assertEqual(model.lags_, [1, 2])
        self.assertEqual(model.order_, (2, 0))
        # half of the inputs, rounded down
        self.assertEqual(model.size_, 1)
        self.assertEqual(len(model.networks_), 2)
        self.assertEqual(model.feature_names, ["lag1", "lag2"])
        self.assertIsNone(model.feature_importance())

    def test_fit_seasonal(self):
        model = NNetARRegressor(period=24, p=2, P=1, **FAST).fit(None, self.y)

        self.assertEqual(model.lags_, [1, 2, 24])
        self.assertEqual(model.order_, (2, 1))
        self.assertEqual(model.size_, 2)

    def test_fit_selects_order(self):
        model = NNetARRegressor(period=24, **FAST).fit(None, self.y)

        self.assertGreaterEqual(model.order_[0], 1)
        self.assertIn(24, model.lags_)

    def test_explicit_size(self):
        model = NNetARRegressor(p=1, size=4, **FAST).fit(None, self.y)
        self.assertEqual(model.size_, 4)
        self.assertEqual(model.networks_[0].hidden_layer_sizes, (4,))

    def test_forecast(self):
        model = NNetARRegressor(period=24, p=2, **FAST).fit(None, self.y)

        forecast = model.forecast(48)

        self.assertEqual(len(forecast), 48)
        self.assertTrue(np.isfinite(forecast).all())

    def test_forecast_is_reproducible(self):
        first = NNetARRegressor(p=3, **FAST).fit(None, self.y).forecast(5)
        second = NNetARRegressor(p=3, **FAST).fit(None, self.y).forecast(5)

        self.assertArrayEqual(first, second)

    def test_exogenous_regressors(self):
        x = pd.DataFrame({"temperature": np.cos(np.arange(len(self.y)))})
        model = NNetARRegressor(p=2, **FAST).fit(x, self.y)

        self.assertEqual(model.feature_names, ["lag1", "lag2", "temperature"])
        self.assertEqual(model.size_, 2)

        future_x = pd.DataFrame({"temperature": [0.5, 0.0, -0.5]})
        self.assertEqual(len(model.predict(future_x)), 3)

        with self.assertRaises(ValueError):
            model.forecast(3)
        with self.assertRaises(ValueError):
            model.forecast(2, future_x)

    def test_regressors_of_wrong_length(self):
        x = pd.DataFrame({"temperature": np.zeros(10)})
        with self.assertRaises(ValueError):
            NNetARRegressor(p=2, **FAST).fit(x, self.y)

    def test_series_too_short(self):
        with self.assertRaises(InputDataInsufficientError):
            NNetARRegressor(p=3, **FAST).fit(None, [1.0, 2.0, 3.0])

    def test_no_lags(self):
        with self.assertRaises(ValueError):
            NNetARRegressor(p=0, **FAST).fit(None, self.y)

    def test_not_fitted(self):
        with self.assertRaises(NotFittedError):
            NNetARRegressor().forecast(3)


class TestNNetARFitImpl(BaseTestCase):
    def test_nnetar_fit_impl(self):
        y = TestData.seasonal_series(24 * 7)["y"]

        model = nnetar_fit_impl(None, y, period=24, p=1, P=1, size=3, **FAST)

        self.assertIsInstance(model, NNetARRegressor)
        self.assertEqual(model.lags_, [1, 24])
        self.assertEqual(model.size_, 3)
        self.assertEqual(model.repeats, 2)
        self.assertEqual(len(model.forecast(24)), 24)
