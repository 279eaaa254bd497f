# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from test.unit.utils.base import BaseTestCase
from test.unit.utils.data import TestData

from tsrecursive.feature_engineering.apply_features import (
    AutoregressiveFeatureApplicator,
)
from tsrecursive.model.regressors.lgbm import LGBMTsRegressor


class TestLGBM(BaseTestCase):
    def setUp(self) -> None:
        self.model = LGBMTsRegressor(
            n_estimators=10, min_child_samples=5, verbose=-1
        )
        applicator = AutoregressiveFeatureApplicator(target="y", lags=[1, 24])
        self.data = applicator(TestData.seasonal_series(24 * 7))
        self.feature_names = applicator.feature_names

    def test_fit_predict(self):
        self.model.fit(self.data[self.feature_names], self.data["y"])

        self.assertEqual(self.model.feature_names, self.feature_names)
        self.assertEqual(
            len(self.model.predict(self.data[self.feature_names])), len(self.data)
        )

    def test_feature_importance(self):
        self.model.fit(self.data[self.feature_names], self.data["y"])

        importance = self.model.feature_importance()

        self.assertEqual(list(importance.columns), ["gain", "weight"])
        self.assertEqual(len(importance), 2)
