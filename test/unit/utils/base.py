# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

import unittest

import numpy as np
import pandas as pd


class BaseTestCase(unittest.TestCase):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.addTypeEqualityFunc(pd.DataFrame, self.assertDataframeEqual)
        self.addTypeEqualityFunc(pd.Series, self.assertSeriesEqual)
        self.addTypeEqualityFunc(np.ndarray, self.assertArrayEqual)

    def assertDataframeEqual(self, *args, msg=None, **kwargs):
        try:
            pd.testing.assert_frame_equal(*args, **kwargs)
        except AssertionError as e:
            raise self.failureException(msg) from e

    def assertSeriesEqual(self, *args, msg=None, **kwargs):
        try:
            pd.testing.assert_series_equal(*args, **kwargs)
        except AssertionError as e:
            raise self.failureException(msg) from e

    def assertArrayEqual(self, *args, msg=None, **kwargs):
        try:
            np.testing.assert_array_equal(*args, **kwargs)
        except AssertionError as e:
            raise self.failureException(msg) from e

    def assertArrayAlmostEqual(self, actual, desired, decimal=7):
        try:
            np.testing.assert_array_almost_equal(actual, desired, decimal=decimal)
        except AssertionError as e:
            raise self.failureException from e

    def assertIsNAN(self, x):
        if not np.isnan(x):
            raise self.failureException(f"x is not nan but '{x}'")
