# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
from typing import Set, Type, Union

from tsrecursive.enums import ModelType
from tsrecursive.logging.logger_factory import get_logger
from tsrecursive.model.regressors.lgbm import LGBMTsRegressor
from tsrecursive.model.regressors.linear import LinearTsRegressor
from tsrecursive.model.regressors.nnetar import NNetARRegressor
from tsrecursive.model.regressors.regressor import TsRegressor
from tsrecursive.model.regressors.xgb import XGBTsRegressor

logger = get_logger(__name__)


def valid_model_kwargs(model_class: Type[TsRegressor]) -> Set[str]:
    """Constructor arguments of a regressor, as reported by ``get_params``."""
    return set(model_class().get_params(deep=False))


class ModelCreator:
    """Factory object for creating machine learning models."""

    # Set object mapping
    MODEL_CONSTRUCTORS = {
        ModelType.XGB: XGBTsRegressor,
        ModelType.LGB: LGBMTsRegressor,
        ModelType.LINEAR: LinearTsRegressor,
        ModelType.NNETAR: NNetARRegressor,
    }

    @staticmethod
    def create_model(model_type: Union[ModelType, str], **kwargs) -> TsRegressor:
        """Create a machine learning model based on model type.

        Args:
            model_type: Model type to construct.
            kwargs: Optional keyword argument to pass to the model. Arguments the
                model does not accept are logged and ignored.

        Raises:
            NotImplementedError: When using an invalid model_type.

        Returns:
            tsrecursive model

        """
        try:
            model_type = ModelType(model_type)
        except ValueError as e:
            valid_types = [t.value for t in ModelType]
            raise NotImplementedError(
                f"No constructor for '{model_type}', "
                f"valid model_types are: {valid_types}"
            ) from e

        model_class = ModelCreator.MODEL_CONSTRUCTORS[model_type]
        valid_kwargs = valid_model_kwargs(model_class)

        model_kwargs = {
            key: value for key, value in kwargs.items() if key in valid_kwargs
        }
        ignored_kwargs = sorted(set(kwargs) - set(model_kwargs))
        if ignored_kwargs:
            logger.warning(
                "Ignoring invalid model arguments",
                model_type=model_type.value,
                ignored_kwargs=ignored_kwargs,
            )

        return model_class(**model_kwargs)
