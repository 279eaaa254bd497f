# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
from abc import abstractmethod
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, RegressorMixin


def _fractions(values) -> np.ndarray:
    values = np.asarray(values, dtype=float)
    total = values.sum()
    return values / total if total > 0 else values


class TsRegressor(BaseEstimator):
    """Interface of the regressors shipped with tsrecursive.

    The regressors are trained on a frame of lag and rolling features (and any
    exogenous columns) to predict one step ahead, and are turned into multi-step
    forecasters by ``RecursiveRegressor``. They report the features they were
    trained on, which the recursive model selects from the regenerated frame at
    every step.

    """

    def score(self, X, y):
        """Coefficient of determination of the one-step-ahead predictions."""
        return RegressorMixin.score(self, X, y)

    @property
    @abstractmethod
    def feature_names(self) -> List[str]:
        """Names of the features the regressor was trained on, in training order."""

    @abstractmethod
    def fit(self, x: pd.DataFrame, y: pd.Series, **kwargs) -> "TsRegressor":
        """Fits the regressor on a feature frame and the target."""

    @abstractmethod
    def predict(self, x: pd.DataFrame, **kwargs) -> np.ndarray:
        """Predicts one value per row of the feature frame."""

    def _raw_importances(self) -> Optional[Dict[str, np.ndarray]]:
        """Unnormalized ``gain`` and ``weight`` importances, None if unsupported."""
        return None

    def feature_importance(self) -> Optional[pd.DataFrame]:
        """Relative importance of every feature.

        Returns:
            DataFrame indexed by feature name with the columns ``gain`` and
            ``weight``, each summing to one, sorted by gain. None when the
            regressor has no notion of feature importance.

        """
        raw = self._raw_importances()
        if raw is None:
            return None

        importance = pd.DataFrame(
            {kind: _fractions(values) for kind, values in raw.items()},
            index=self.feature_names,
        )
        return importance.sort_values(by="gain", ascending=False)
