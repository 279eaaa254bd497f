# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tsrecursive.logging.logger_types import LoggerType


class AppSettings(BaseSettings):
    """Global app settings."""

    model_config = SettingsConfigDict(
        env_prefix="tsrecursive_", env_file=".env", extra="ignore"
    )

    logger_type: LoggerType = Field(
        LoggerType.STRUCTLOG,
        description="The type of logger to use.",
    )

    # Logging settings.
    log_level: str = Field("INFO", description="Log level used for logging statements.")

    # Forecast settings.
    default_chunk_size: int = Field(
        1,
        ge=1,
        description="Number of steps predicted per iteration of a recursive forecast "
        "when the forecast job does not specify one.",
    )
    n_jobs: int = Field(
        1,
        description="Maximum number of concurrently running jobs when fitting the "
        "networks of an NNAR model.",
    )
