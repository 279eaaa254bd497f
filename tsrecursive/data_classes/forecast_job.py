# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
"""Specifies the recursive forecast job dataclass."""
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from tsrecursive.enums import AggregateFunction, ModelType
from tsrecursive.feature_engineering.apply_features import (
    AutoregressiveFeatureApplicator,
)


class RecursiveForecastJobDataClass(BaseModel):
    """Holds all information about the specific recursive forecast that has to be made."""

    id: Union[int, str] = Field(..., description="The forecast job id.")
    model: ModelType = Field(
        ...,
        description="The model type that should be used. Options are: 'linear', 'xgb', 'lgb'.",
    )
    model_kwargs: Optional[dict] = Field(
        default=None, description="The model parameters that should be used."
    )
    target: str = Field("y", description="Name of the column to forecast.")
    id_column: Optional[str] = Field(
        None,
        description="Name of the column identifying the series of panel data. None for a single series.",
    )
    time_column: Optional[str] = Field(
        None,
        description="Name of the column holding the timestamps. The index is used when None.",
    )
    lags: list[int] = Field(
        ..., min_length=1, description="Lags of the target, in rows, used as features."
    )
    rolling_windows: list[int] = Field(
        default=[],
        description="Window sizes, in rows, of rolling aggregates of the target used as features.",
    )
    aggregate_functions: list[AggregateFunction] = Field(
        default=[AggregateFunction.MEAN],
        description="Aggregations computed for every rolling window.",
    )
    feature_columns: list[str] = Field(
        default=[],
        description="Additional columns used as features. Their values must be known for the whole forecast horizon.",
    )
    horizon: int = Field(
        ..., ge=1, description="Number of steps to forecast for every series."
    )
    chunk_size: Optional[int] = Field(
        None,
        ge=1,
        description="Number of steps predicted per iteration. Defaults to the setting `default_chunk_size`.",
    )
    freq: Optional[str] = Field(
        None,
        description="Frequency of the series, inferred from the timestamps when None.",
    )
    description: Optional[str] = Field(
        None,
        description="Optional description of the forecast job for human reference.",
    )

    @field_validator("lags", "rolling_windows")
    @classmethod
    def _positive(cls, values: list[int]) -> list[int]:
        if any(value < 1 for value in values):
            raise ValueError(f"Lags and windows must be positive, got {values}.")
        return values

    @model_validator(mode="after")
    def _recursive_model(self) -> "RecursiveForecastJobDataClass":
        if self.model == ModelType.NNETAR:
            raise ValueError(
                "NNAR models forecast recursively on their own, use `nnetar_fit_impl`."
            )
        return self

    def __getitem__(self, item: str) -> Any:
        """Allows us to use subscription to get the items from the object."""
        return getattr(self, item)

    def get_feature_applicator(self) -> AutoregressiveFeatureApplicator:
        """Feature transform of the job, used for training and for every forecast step."""
        return AutoregressiveFeatureApplicator(
            target=self.target,
            lags=self.lags,
            rolling_windows=self.rolling_windows,
            aggregate_functions=self.aggregate_functions,
            id_column=self.id_column,
        )
