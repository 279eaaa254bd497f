# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from lightgbm import LGBMRegressor

from tsrecursive.model.regressors.regressor import TsRegressor


class LGBMTsRegressor(LGBMRegressor, TsRegressor):
    """LightGBM regressor which implements the tsrecursive regressor API.

    Like xgboost it routes missing lag features down a learned branch.
    """

    @property
    def feature_names(self):
        return self.booster_.feature_name()

    def _raw_importances(self):
        return {
            "gain": self.booster_.feature_importance(importance_type="gain"),
            "weight": self.booster_.feature_importance(importance_type="split"),
        }
