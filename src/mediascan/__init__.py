# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""MediaScan - Media File Inventory and Reporting."""

from mediascan.__about__ import __version__

__all__ = ["__version__"]
