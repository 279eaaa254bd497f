# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
"""This module defines the missing value handler."""
from typing import Union

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, MetaEstimatorMixin, RegressorMixin, clone
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.utils.validation import check_array, check_is_fitted, check_X_y

from tsrecursive.exceptions import InputDataInsufficientError, MissingFeatureError


class MissingValuesHandler(MetaEstimatorMixin, RegressorMixin, BaseEstimator):
    """Wraps a regressor that can not deal with missing features itself.

    Lag features are missing for the first rows of every series and, during a
    chunked recursive forecast, for the steps inside a chunk. The handler drops
    the features that are missing in every training row and optionally imputes
    the remaining gaps before the wrapped regressor sees them.

    Args:
        base_estimator: Regressor to wrap.
        missing_values: Placeholder of a missing value.
        imputation_strategy: Strategy of scikit-learn's ``SimpleImputer``
            ("mean", "median", "most_frequent" or "constant"). None passes missing
            values on to the regressor.
        fill_value: Value imputed by the "constant" strategy.

    Attributes:
        feature_in_names_: Names of all input features.
        non_null_columns_: Features passed on to the regressor.
        regressor_: The fitted regressor.
        pipeline_: The optional imputer followed by the regressor.

    """

    def __init__(
        self,
        base_estimator: RegressorMixin,
        missing_values: Union[int, float, str, None] = np.nan,
        imputation_strategy: str = None,
        fill_value: Union[str, int, float] = None,
    ):
        self.base_estimator = base_estimator
        self.missing_values = missing_values
        self.imputation_strategy = imputation_strategy
        self.fill_value = fill_value

    def __sklearn_tags__(self):
        tags = super().__sklearn_tags__()
        tags.target_tags.required = True
        tags.input_tags.allow_nan = self.imputation_strategy is not None
        return tags

    def _build_pipeline(self) -> Pipeline:
        steps = []
        if self.imputation_strategy is not None:
            imputer = SimpleImputer(
                missing_values=self.missing_values,
                strategy=self.imputation_strategy,
                fill_value=self.fill_value,
            )
            steps.append(("imputer", imputer))
        steps.append(("regressor", self.regressor_))
        return Pipeline(steps)

    def fit(self, x, y):
        """Fits the regressor on the features that are not always missing.

        Raises:
            InputDataInsufficientError: If every feature is missing.

        """
        check_X_y(x, y, ensure_all_finite="allow-nan", y_numeric=True)
        x = pd.DataFrame(x)
        self.feature_in_names_ = list(x.columns)
        self.n_features_in_ = x.shape[1]
        self.non_null_columns_ = list(x.columns[x.notna().any(axis="index")])
        if not self.non_null_columns_:
            raise InputDataInsufficientError("Every feature is missing.")

        self.regressor_ = clone(self.base_estimator)
        self.pipeline_ = self._build_pipeline()
        self.pipeline_.fit(x[self.non_null_columns_], y)
        return self

    def predict(self, x):
        """Make a prediction."""
        check_is_fitted(self)
        check_array(x, ensure_all_finite="allow-nan")
        x = pd.DataFrame(x)
        missing = [c for c in self.non_null_columns_ if c not in x.columns]
        if missing:
            raise MissingFeatureError(missing)
        return self.pipeline_.predict(x[self.non_null_columns_])
