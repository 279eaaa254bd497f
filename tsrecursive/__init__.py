# SPDX-FileCopyrightText: 2017-2025 Contributors to the tsrecursive project
#
# SPDX-License-Identifier: MPL-2.0

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tsrecursive")
except PackageNotFoundError:
    # package is not installed
    pass
