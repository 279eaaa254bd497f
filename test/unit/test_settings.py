# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

import os
from unittest import TestCase
from unittest.mock import patch

from pydantic import ValidationError

from tsrecursive.app_settings import AppSettings
from tsrecursive.logging.logger_types import LoggerType


class TestAppSettings(TestCase):
    def test_settings_from_env(self):
        """Test reading the settings from environment variables."""
        # Arrange
        env = {
            "TSRECURSIVE_LOGGER_TYPE": "logging",
            "TSRECURSIVE_DEFAULT_CHUNK_SIZE": "3",
            "TSRECURSIVE_N_JOBS": "2",
        }

        # Act
        with patch.dict(os.environ, env):
            settings = AppSettings()

        # Assert
        self.assertEqual(settings.logger_type, LoggerType.STANDARD)
        self.assertEqual(settings.default_chunk_size, 3)
        self.assertEqual(settings.n_jobs, 2)

    def test_invalid_chunk_size(self):
        with patch.dict(os.environ, {"TSRECURSIVE_DEFAULT_CHUNK_SIZE": "0"}):
            with self.assertRaises(ValidationError):
                AppSettings()
