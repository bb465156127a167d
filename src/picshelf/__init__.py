# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""Picshelf - local image discovery for folders and zip archives."""

from picshelf.__about__ import __version__

__all__ = ["__version__"]
