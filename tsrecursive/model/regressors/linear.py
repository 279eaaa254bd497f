# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
from typing import List

import numpy as np
from sklearn.linear_model import LinearRegression
from sklearn.utils.validation import check_is_fitted

from tsrecursive.model.metamodels.missing_values_handler import MissingValuesHandler
from tsrecursive.model.regressors.regressor import TsRegressor


class LinearTsRegressor(MissingValuesHandler, TsRegressor):
    """Ordinary least squares on the lag features.

    Without an imputation strategy every training row must have complete features,
    the training pipeline drops the first rows of each series for that reason.
    See ``MissingValuesHandler`` for the arguments.

    """

    def __init__(self, missing_values=np.nan, imputation_strategy=None, fill_value=0):
        super().__init__(
            LinearRegression(),
            missing_values=missing_values,
            imputation_strategy=imputation_strategy,
            fill_value=fill_value,
        )

    @property
    def feature_names(self) -> List[str]:
        return [str(name) for name in self.feature_in_names_]

    def _raw_importances(self):
        check_is_fitted(self)
        coefficients = dict(zip(self.non_null_columns_, np.abs(self.regressor_.coef_)))
        gain = np.array([coefficients.get(c, 0.0) for c in self.feature_in_names_])
        # a feature counts once when the fit uses it
        return {"gain": gain, "weight": (gain > 0).astype(float)}
