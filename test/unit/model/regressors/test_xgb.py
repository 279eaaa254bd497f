# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from test.unit.utils.base import BaseTestCase
from test.unit.utils.data import TestData

from tsrecursive.feature_engineering.apply_features import (
    AutoregressiveFeatureApplicator,
)
from tsrecursive.model.regressors.xgb import XGBTsRegressor


class TestXGB(BaseTestCase):
    def setUp(self) -> None:
        self.model = XGBTsRegressor(n_estimators=10, max_depth=2)
        applicator = AutoregressiveFeatureApplicator(
            target="y", lags=[1, 2], rolling_windows=[3]
        )
        # lag features of the first rows are missing, xgboost handles them
        self.data = applicator(TestData.seasonal_series(96))
        self.feature_names = applicator.feature_names

    def test_fit_with_missing_features(self):
        self.model.fit(self.data[self.feature_names], self.data["y"])

        self.assertEqual(self.model.feature_names, self.feature_names)
        self.assertEqual(len(self.model.predict(self.data[self.feature_names])), 96)

    def test_feature_importance(self):
        self.model.fit(self.data[self.feature_names], self.data["y"])

        importance = self.model.feature_importance()

        self.assertEqual(list(importance.columns), ["gain", "weight"])
        self.assertEqual(sorted(importance.index), sorted(self.feature_names))
