# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

"""tsrecursive custom exceptions."""


class InputDataInvalidError(Exception):
    """Invalid input data."""


class InputDataInsufficientError(InputDataInvalidError):
    """Insufficient input data."""


class MissingFeatureError(InputDataInvalidError):
    """Features the model was trained on are missing from the input data."""

    def __init__(self, missing_features: list, message: str = None):
        self.missing_features = list(missing_features)
        if message is None:
            message = f"Missing features: {self.missing_features}"
        self.message = message
        super().__init__(self.message)


class RecursiveTransformError(Exception):
    """The feature transform of a recursive forecast returned unusable data."""


class UnknownMetricError(KeyError):
    """Requested metric is not available."""

    def __init__(self, metric_name: str):
        self.metric_name = metric_name
        super().__init__(f"Unknown evaluation metric function {metric_name}")
