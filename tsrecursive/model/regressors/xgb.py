# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
from typing import List

import numpy as np
from xgboost import XGBRegressor

from tsrecursive.model.regressors.regressor import TsRegressor


class XGBTsRegressor(XGBRegressor, TsRegressor):
    """Gradient boosted trees of xgboost which implement the tsrecursive regressor API.

    Every split learns a default direction for missing values, so the missing lag
    features of the first rows of a series need no imputation, nor do the lags
    inside a chunk of a chunked recursive forecast.
    """

    @property
    def feature_names(self) -> List[str]:
        names = self.get_booster().feature_names
        if names is None:
            return [f"f{i}" for i in range(self.n_features_in_)]
        return list(names)

    def _raw_importances(self):
        booster = self.get_booster()
        importances = {}
        for kind, importance_type in (("gain", "total_gain"), ("weight", "weight")):
            scores = booster.get_score(importance_type=importance_type)
            importances[kind] = np.array(
                [scores.get(name, 0.0) for name in self.feature_names]
            )
        return importances
