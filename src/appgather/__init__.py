# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""AppGather - Source tree classifier for app packaging pipelines."""

from appgather.__about__ import __version__

__all__ = ["__version__"]
