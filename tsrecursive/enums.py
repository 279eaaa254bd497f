# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0
from enum import Enum


class ModelType(Enum):
    XGB = "xgb"
    LGB = "lgb"
    LINEAR = "linear"
    NNETAR = "nnetar"


class AggregateFunction(Enum):
    MEAN = "mean"
    MEDIAN = "median"
    MIN = "min"
    MAX = "max"
    STD = "std"
    SUM = "sum"
