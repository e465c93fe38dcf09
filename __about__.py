# -*- coding: utf-8 -*-
# Tinta: Perceptual color appearance and tonal palettes.
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for Tinta.
"""

from typing import Final

# Metadata Definitions
__title__: Final[str] = "Tinta"
__description__: Final[str] = (
    "CAM16 color appearance, the HCT color model with its gamut solver, "
    "and tonal palettes and schemes for UI theming."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"

def metadata_summary() -> dict[str, str]:
    """Returns a dictionary of project metadata for introspection."""
    return {
        "title": __title__,
        "version": __version__,
        "author": __author__,
        "license": __license__,
        "description": __description__,
        "copyright": __copyright__,
    }
