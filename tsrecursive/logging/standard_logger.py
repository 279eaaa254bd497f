# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

import logging

from tsrecursive.logging.base_logger import BaseLogger
from tsrecursive.settings import Settings


class StandardLogger(BaseLogger):
    def __init__(self, name: str, context: dict = None):
        self.logger = logging.getLogger(name)
        self.context = dict(context or {})
        logging.basicConfig(level=Settings.log_level)

    def _extra(self, kwargs: dict) -> dict:
        return {**self.context, **kwargs}

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, extra=self._extra(kwargs))

    def info(self, message: str, **kwargs):
        self.logger.info(message, extra=self._extra(kwargs))

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, extra=self._extra(kwargs))

    def error(self, message: str, **kwargs):
        self.logger.error(message, extra=self._extra(kwargs))

    def exception(self, message: str, **kwargs):
        self.logger.exception(message, extra=self._extra(kwargs))

    def bind(self, **kwargs):
        """Return a logger that adds the given context to every record."""
        return StandardLogger(self.logger.name, context=self._extra(kwargs))
