# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
"""This module contains the neural network autoregression (NNAR) model.

An NNAR(p, P, k)[m] model is a feed forward network with a single hidden layer of
``k`` nodes. Its inputs are the lags ``1..p`` of the series, the seasonal lags
``m, 2m, .., Pm`` and optional exogenous regressors. ``repeats`` networks are
trained from different random starting weights and their predictions are averaged.
Multi-step forecasts are made recursively: each prediction is fed back as the most
recent lag of the next step.

The network training is delegated to scikit-learn's ``MLPRegressor`` and the
automatic selection of ``p`` to the AR order selection of statsmodels.
"""
import warnings
from typing import List, Optional

import joblib
import numpy as np
import pandas as pd
from sklearn.exceptions import ConvergenceWarning
from sklearn.neural_network import MLPRegressor
from sklearn.utils import check_random_state
from sklearn.utils.validation import check_is_fitted
from statsmodels.tsa.ar_model import ar_select_order
from statsmodels.tsa.seasonal import STL

from tsrecursive.exceptions import InputDataInsufficientError
from tsrecursive.logging.logger_factory import get_logger
from tsrecursive.model.regressors.regressor import TsRegressor
from tsrecursive.settings import Settings


def _fit_network(
    inputs: np.ndarray,
    target: np.ndarray,
    size: int,
    decay: float,
    maxit: int,
    seed: int,
) -> MLPRegressor:
    network = MLPRegressor(
        hidden_layer_sizes=(size,),
        activation="logistic",
        solver="lbfgs",
        alpha=decay,
        max_iter=maxit,
        random_state=seed,
    )
    # the iteration limit is part of the model definition
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", category=ConvergenceWarning)
        network.fit(inputs, target)
    return network


class NNetARRegressor(TsRegressor):
    """Neural network autoregression which implements the tsrecursive regressor API.

    ``fit`` takes the exogenous regressors as ``x`` (may have no columns) and the
    series as ``y``. ``predict`` forecasts ``len(x)`` steps after the end of the
    training data, ``x`` holding the future values of the exogenous regressors.

    Args:
        period: Seasonal period ``m`` of the series, 1 for non seasonal data.
        p: Number of non seasonal lags, selected by AIC on the seasonally adjusted
            series if omitted.
        P: Number of seasonal lags, only used when ``period > 1``.
        size: Number of hidden nodes, half the number of inputs (rounded down,
            at least 1) if omitted.
        repeats: Number of networks fitted with different random starting weights.
        decay: L2 penalty of the network weights.
        maxit: Maximum number of training iterations per network.
        scale_inputs: Standardize the series and the regressors before training.
        random_state: Seed of the starting weights.
        n_jobs: Number of networks trained in parallel, see ``Settings.n_jobs``.

    Attributes:
        lags_: Lags of the series used as inputs.
        size_: Number of hidden nodes.
        networks_: The fitted networks.

    """

    def __init__(
        self,
        period: int = 1,
        p: Optional[int] = None,
        P: int = 1,
        size: Optional[int] = None,
        repeats: int = 20,
        decay: float = 0.0,
        maxit: int = 100,
        scale_inputs: bool = True,
        random_state=None,
        n_jobs: Optional[int] = None,
    ):
        self.period = period
        self.p = p
        self.P = P
        self.size = size
        self.repeats = repeats
        self.decay = decay
        self.maxit = maxit
        self.scale_inputs = scale_inputs
        self.random_state = random_state
        self.n_jobs = n_jobs

    @property
    def feature_names(self) -> List[str]:
        check_is_fitted(self)
        return [f"lag{lag}" for lag in self.lags_] + list(self.exog_names_)

    def _select_order(self, y: np.ndarray) -> int:
        """Selects the number of non seasonal lags of a linear AR model by AIC."""
        adjusted = y
        if self.period > 1 and len(y) >= 2 * self.period + 1:
            adjusted = y - STL(y, period=self.period).fit().seasonal
        maxlag = int(
            min(len(adjusted) // 2 - 1, np.floor(10 * np.log10(len(adjusted))))
        )
        if maxlag < 1:
            return 1
        selection = ar_select_order(adjusted, maxlag=maxlag, ic="aic", trend="c")
        selected = selection.ar_lags
        return max(len(selected), 1) if selected is not None else 1

    def _exog(self, x) -> np.ndarray:
        if x is None:
            return np.empty((0, 0))
        x = pd.DataFrame(x)
        return x.to_numpy(dtype=float)

    def _design_matrix(self, y: np.ndarray, exog: np.ndarray):
        max_lag = max(self.lags_)
        rows = np.arange(max_lag, len(y))
        columns = [y[rows - lag] for lag in self.lags_]
        inputs = np.column_stack(columns)
        if exog.shape[1] > 0:
            inputs = np.column_stack([inputs, exog[rows]])
        target = y[rows]
        complete = ~(np.isnan(inputs).any(axis=1) | np.isnan(target))
        return inputs[complete], target[complete]

    def fit(self, x, y, **kwargs):
        """Fits the networks on the series ``y`` and the regressors ``x``.

        Raises:
            InputDataInsufficientError: If the series is too short for its lags.

        """
        logger = get_logger(__name__)

        y = np.asarray(y, dtype=float).ravel()
        exog = self._exog(x)
        if exog.shape[1] > 0 and exog.shape[0] != len(y):
            raise ValueError("The regressors and the series must have equal length.")
        self.exog_names_ = (
            [str(c) for c in x.columns] if isinstance(x, pd.DataFrame) else
            [f"x{i}" for i in range(exog.shape[1])]
        )
        if exog.shape[1] == 0:
            exog = np.empty((len(y), 0))

        if self.scale_inputs:
            self.y_mean_ = np.nanmean(y)
            self.y_scale_ = np.nanstd(y) or 1.0
            self.exog_mean_ = np.zeros(exog.shape[1])
            exog_scale = np.ones(exog.shape[1])
            if exog.shape[1] > 0:
                self.exog_mean_ = np.nanmean(exog, axis=0)
                exog_scale = np.nanstd(exog, axis=0)
            self.exog_scale_ = np.where(exog_scale == 0, 1.0, exog_scale)
        else:
            self.y_mean_, self.y_scale_ = 0.0, 1.0
            self.exog_mean_ = np.zeros(exog.shape[1])
            self.exog_scale_ = np.ones(exog.shape[1])
        y_scaled = (y - self.y_mean_) / self.y_scale_
        exog_scaled = (exog - self.exog_mean_) / self.exog_scale_

        P = self.P if self.period > 1 else 0
        p = self.p if self.p is not None else self._select_order(
            y[~np.isnan(y)] if np.isnan(y).any() else y
        )
        self.order_ = (int(p), int(P))
        self.lags_ = sorted(
            set(range(1, p + 1)) | {self.period * i for i in range(1, P + 1)}
        )
        if not self.lags_:
            raise ValueError("An NNAR model needs at least one lag, set p or P.")

        inputs, target = self._design_matrix(y_scaled, exog_scaled)
        if len(target) == 0:
            raise InputDataInsufficientError(
                f"At least {max(self.lags_) + 1} observations are needed to fit "
                f"an NNAR model with lags {self.lags_}, got {len(y)}."
            )

        n_inputs = inputs.shape[1]
        self.size_ = (
            int(self.size) if self.size is not None else max(int((n_inputs + 1) / 2), 1)
        )
        seeds = check_random_state(self.random_state).randint(
            np.iinfo(np.int32).max, size=self.repeats
        )
        n_jobs = self.n_jobs if self.n_jobs is not None else Settings.n_jobs
        self.networks_ = joblib.Parallel(n_jobs=n_jobs)(
            joblib.delayed(_fit_network)(
                inputs, target, self.size_, self.decay, self.maxit, seed
            )
            for seed in seeds
        )

        # keep the end of the series to start the recursive forecast from
        self.history_ = y_scaled[-max(self.lags_):]
        self.n_features_in_ = exog.shape[1]
        logger.debug(
            "Fitted NNAR model",
            p=self.order_[0],
            P=self.order_[1],
            period=self.period,
            size=self.size_,
            repeats=self.repeats,
            n_observations=len(target),
        )
        return self

    def _predict_scaled(self, inputs: np.ndarray) -> float:
        return float(
            np.mean([network.predict(inputs)[0] for network in self.networks_])
        )

    def predict(self, x, **kwargs) -> np.array:
        """Forecasts ``len(x)`` steps after the training data recursively.

        Args:
            x: Future values of the regressors, one row per step. May have no
                columns when the model has no regressors.

        Returns:
            Forecast for every row of ``x``.

        """
        check_is_fitted(self)
        horizon = len(x)
        exog = self._exog(x)
        if exog.shape[1] != self.n_features_in_:
            raise ValueError(
                f"Expected {self.n_features_in_} regressors, got {exog.shape[1]}."
            )
        exog = (exog - self.exog_mean_) / self.exog_scale_ if exog.shape[1] else exog

        history = list(self.history_)
        forecast = np.empty(horizon)
        for step in range(horizon):
            inputs = [history[-lag] for lag in self.lags_]
            if self.n_features_in_:
                inputs = np.concatenate([inputs, exog[step]])
            prediction = self._predict_scaled(np.asarray(inputs).reshape(1, -1))
            forecast[step] = prediction
            history.append(prediction)

        return forecast * self.y_scale_ + self.y_mean_

    def forecast(self, horizon: int, x=None) -> np.ndarray:
        """Forecasts ``horizon`` steps, with the future regressors ``x`` if any."""
        if x is None:
            x = pd.DataFrame(index=range(horizon))
        elif len(x) != horizon:
            raise ValueError("The future regressors must have one row per step.")
        return self.predict(x)


def nnetar_fit_impl(
    x,
    y,
    period: int = 1,
    p: Optional[int] = None,
    P: int = 1,
    size: Optional[int] = None,
    repeats: int = 20,
    decay: float = 0.0,
    maxit: int = 100,
    scale_inputs: bool = True,
    random_state=None,
    n_jobs: Optional[int] = None,
) -> NNetARRegressor:
    """Fits a neural network autoregression model.

    Low level fitting function, see ``NNetARRegressor`` for the meaning of the
    arguments.

    Args:
        x: Exogenous regressors indexed like ``y``, or None.
        y: The series to model.

    Returns:
        The fitted model.

    """
    model = NNetARRegressor(
        period=period,
        p=p,
        P=P,
        size=size,
        repeats=repeats,
        decay=decay,
        maxit=maxit,
        scale_inputs=scale_inputs,
        random_state=random_state,
        n_jobs=n_jobs,
    )
    return model.fit(x, y)
