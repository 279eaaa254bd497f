# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from tsrecursive.logging.base_logger import BaseLogger
from tsrecursive.logging.logger_types import LoggerType
from tsrecursive.logging.standard_logger import StandardLogger
from tsrecursive.logging.structlog_logger import StructlogLogger
from tsrecursive.settings import Settings


def get_logger(name: str, logger_type: str = None) -> BaseLogger:
    if logger_type is None:
        logger_type = Settings.logger_type

    if logger_type == LoggerType.STANDARD:
        return StandardLogger(name)
    elif logger_type == LoggerType.STRUCTLOG:
        return StructlogLogger(name)
    else:
        raise ValueError(f"Unknown logger type: {logger_type}")
