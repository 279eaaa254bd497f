# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
"""This module defines the recursive regressor.

A one-step-ahead regressor trained on lag features of the target can only predict
the first step of a forecast: from the second step on its lag features refer to
values that are not observed yet. The recursive regressor fills them in with its
own predictions.

Example:

.. code-block:: md

    train_tail =  | id | y   |        x =  | id | y   |
                  | a  | 1.0 |             | a  | NaN |  <- step 0
                  | a  | 2.0 |             | a  | NaN |  <- step 1
                  | b  | 5.0 |             | b  | NaN |  <- step 0
                  | b  | 6.0 |

    For every step the transform recomputes the lag features on
    concat(train_tail, x), step 0 of all series is predicted, the predictions are
    written into `y`, and the loop moves on to step 1.

"""
from numbers import Integral
from typing import Any, Callable, List, Optional

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, MetaEstimatorMixin, RegressorMixin, clone
from sklearn.exceptions import NotFittedError
from sklearn.utils.validation import check_is_fitted

from tsrecursive.exceptions import (
    InputDataInvalidError,
    MissingFeatureError,
    RecursiveTransformError,
)
from tsrecursive.feature_engineering.lag_features import extract_lag_features
from tsrecursive.logging.logger_factory import get_logger


def _get_feature_names(model: Any) -> List[str]:
    """Features a fitted model expects, in training order."""
    for attribute in ("feature_names_in_", "feature_names", "feature_in_names_"):
        try:
            feature_names = getattr(model, attribute, None)
        except (AttributeError, NotFittedError):
            feature_names = None
        if feature_names is not None:
            return [str(name) for name in feature_names]
    raise ValueError(
        f"Can not determine the features of {type(model).__name__}, "
        "fit it on a DataFrame with named columns."
    )


class RecursiveRegressor(MetaEstimatorMixin, RegressorMixin, BaseEstimator):
    """Meta-model that turns a one-step-ahead regressor into a multi-step forecaster.

    The base estimator is trained like any regressor on features that include lags of
    the target. At prediction time the forecast is built step by step: the transform
    recomputes the lag features from the training tail followed by the rows predicted
    so far, and the base estimator predicts the next step (or chunk of steps).

    Panel data is supported through ``id_column``: all series advance together, one
    call of the base estimator predicts the current step of every series.

    Args:
        base_estimator: Regressor, pipeline or any object with ``fit`` and ``predict``.
        transform: Callable that takes a dataframe with the target column and returns
            it with the lag (and other) features added, keeping its rows and order.
        train_tail: The last rows of the training data (per series for panel data),
            long enough for the largest lag of the transform.
        target: Name of the target column.
        id_column: Name of the column identifying the series of panel data.
        chunk_size: Number of steps predicted per iteration. Steps within a chunk do
            not see each other's predictions, so the smallest lag should be at least
            the chunk size.

    Attributes:
        regressor_: The fitted base estimator.
        feature_names_: Features the base estimator was trained on.

    """

    def __init__(
        self,
        base_estimator: Any,
        transform: Callable[[pd.DataFrame], pd.DataFrame],
        train_tail: pd.DataFrame,
        target: str = "y",
        id_column: Optional[str] = None,
        chunk_size: int = 1,
    ):
        self.base_estimator = base_estimator
        self.transform = transform
        self.train_tail = train_tail
        self.target = target
        self.id_column = id_column
        self.chunk_size = chunk_size

    def fit(self, x: pd.DataFrame, y, **kwargs):
        """Fits the base estimator on the features and the target."""
        x = pd.DataFrame(x)
        self.regressor_ = clone(self.base_estimator).fit(x, y, **kwargs)
        self.feature_names_ = [str(column) for column in x.columns]
        self.n_features_in_ = len(self.feature_names_)
        return self

    def _check_inputs(self, x: pd.DataFrame) -> None:
        if not isinstance(self.chunk_size, Integral) or self.chunk_size < 1:
            raise ValueError(
                f"chunk_size must be an integer of at least 1, got {self.chunk_size!r}."
            )
        if len(x) == 0:
            raise InputDataInvalidError("No rows to forecast.")
        if self.train_tail is None or len(self.train_tail) == 0:
            raise InputDataInvalidError("The training tail is empty.")
        if self.target not in self.train_tail.columns:
            raise InputDataInvalidError(
                f"The training tail must contain the target column '{self.target}'."
            )
        if self.id_column is None:
            return

        for name, frame in (("training tail", self.train_tail), ("input data", x)):
            if self.id_column not in frame.columns:
                raise InputDataInvalidError(
                    f"The {name} must contain the id column '{self.id_column}'."
                )
        unknown = set(x[self.id_column]) - set(self.train_tail[self.id_column])
        if unknown:
            raise InputDataInvalidError(
                f"No training tail for the series {sorted(map(str, unknown))}."
            )

    def _steps(self, x: pd.DataFrame) -> np.ndarray:
        """Position of every row in the forecast of its series."""
        if self.id_column is None:
            return np.arange(len(x))
        return x.groupby(self.id_column, sort=False).cumcount().to_numpy()

    def _check_chunk_size(self, logger, feature_names) -> None:
        lags = extract_lag_features(feature_names, target=self.target)
        if lags and self.chunk_size > min(lags):
            logger.warning(
                "Chunk size exceeds the smallest lag, lag features within a chunk "
                "will be missing",
                chunk_size=self.chunk_size,
                smallest_lag=min(lags),
            )

    def predict(self, x: pd.DataFrame) -> np.ndarray:
        """Forecasts the rows of ``x`` recursively.

        Args:
            x: The rows to forecast, ordered in time within each series. Needs the
                raw columns the transform uses. Feature and target columns may be
                missing or empty, they are recomputed.

        Returns:
            Forecast for every row of ``x``, in the order of ``x``.

        Raises:
            InputDataInvalidError: If the inputs can not be forecasted.
            RecursiveTransformError: If the transform changes the number of rows.
            MissingFeatureError: If the transform does not produce every feature.

        """
        check_is_fitted(self)
        x = pd.DataFrame(x)
        self._check_inputs(x)
        logger = get_logger(__name__).bind(
            target=self.target, chunk_size=self.chunk_size
        )
        self._check_chunk_size(logger, self.feature_names_)

        n_tail = len(self.train_tail)
        future = x.copy()
        future[self.target] = np.nan
        history = pd.concat([self.train_tail, future], ignore_index=True)
        target_position = history.columns.get_loc(self.target)

        steps = self._steps(x)
        predictions = np.full(len(x), np.nan)
        n_steps = int(steps.max()) + 1
        for start in range(0, n_steps, self.chunk_size):
            in_chunk = (steps >= start) & (steps < start + self.chunk_size)

            features = self.transform(history)
            if len(features) != len(history):
                raise RecursiveTransformError(
                    f"The transform returned {len(features)} rows, "
                    f"expected {len(history)}."
                )
            missing = [c for c in self.feature_names_ if c not in features.columns]
            if missing:
                raise MissingFeatureError(missing)

            chunk_features = features.iloc[n_tail:].loc[in_chunk, self.feature_names_]
            chunk_predictions = np.asarray(
                self.regressor_.predict(chunk_features), dtype=float
            ).ravel()
            predictions[in_chunk] = chunk_predictions
            history.iloc[np.flatnonzero(in_chunk) + n_tail, target_position] = (
                chunk_predictions
            )

        logger.info(
            "Recursive forecast finished",
            n_rows=len(x),
            n_steps=n_steps,
            n_series=1 if self.id_column is None else x[self.id_column].nunique(),
        )
        return predictions


def recursive(
    model: Any,
    transform: Callable[[pd.DataFrame], pd.DataFrame],
    train_tail: pd.DataFrame,
    target: str = "y",
    id_column: Optional[str] = None,
    chunk_size: int = 1,
) -> RecursiveRegressor:
    """Makes an already fitted model predict recursively.

    Args:
        model: A fitted regressor or pipeline, trained on a DataFrame so the names of
            its features are known.
        transform: See ``RecursiveRegressor``.
        train_tail: See ``RecursiveRegressor``.
        target: See ``RecursiveRegressor``.
        id_column: See ``RecursiveRegressor``.
        chunk_size: See ``RecursiveRegressor``.

    Returns:
        A fitted recursive regressor that uses ``model`` for every step.

    Raises:
        NotFittedError: If the model is not fitted.

    """
    check_is_fitted(model)
    recursive_model = RecursiveRegressor(
        base_estimator=model,
        transform=transform,
        train_tail=train_tail,
        target=target,
        id_column=id_column,
        chunk_size=chunk_size,
    )
    recursive_model.regressor_ = model
    recursive_model.feature_names_ = _get_feature_names(model)
    recursive_model.n_features_in_ = len(recursive_model.feature_names_)
    return recursive_model


def is_recursive(model: Any) -> bool:
    """Whether the model forecasts recursively."""
    return isinstance(model, RecursiveRegressor)
