# -*- coding: utf-8 -*-
"""
Tinta: Perceptual color appearance and tonal palettes
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tinta_scheme.py — Light and dark color schemes.

A ``Scheme`` assigns one color to each of the 33 roles of a Material
theme by reading a fixed tone from one of the core palettes.  Accent
roles come in groups of four (role, on-role, container, on-container)
whose tones guarantee legible contrast against each other.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict, Final, Iterator, Tuple

from tinta_colorutils import hex_from_argb
from tinta_palettes import CorePalette

__all__ = ["ROLES", "Scheme"]

# (role, core palette, tone) per theme, in role order.
_LIGHT_TONES: Final[Tuple[Tuple[str, str, int], ...]] = (
    ("primary",                   "a1",    40),
    ("on_primary",                "a1",    100),
    ("primary_container",         "a1",    90),
    ("on_primary_container",      "a1",    10),
    ("secondary",                 "a2",    40),
    ("on_secondary",              "a2",    100),
    ("secondary_container",       "a2",    90),
    ("on_secondary_container",    "a2",    10),
    ("tertiary",                  "a3",    40),
    ("on_tertiary",               "a3",    100),
    ("tertiary_container",        "a3",    90),
    ("on_tertiary_container",     "a3",    10),
    ("error",                     "error", 40),
    ("on_error",                  "error", 100),
    ("error_container",           "error", 90),
    ("on_error_container",        "error", 10),
    ("surface_dim",               "n1",    87),
    ("surface",                   "n1",    98),
    ("surface_bright",            "n1",    98),
    ("surface_container_lowest",  "n1",    100),
    ("surface_container_low",     "n1",    96),
    ("surface_container",         "n1",    94),
    ("surface_container_high",    "n1",    92),
    ("surface_container_highest", "n1",    90),
    ("on_surface",                "n1",    10),
    ("on_surface_variant",        "n2",    30),
    ("outline",                   "n2",    50),
    ("outline_variant",           "n2",    80),
    ("inverse_surface",           "n1",    20),
    ("inverse_on_surface",        "n1",    95),
    ("inverse_primary",           "a1",    80),
    ("scrim",                     "n1",    0),
    ("shadow",                    "n1",    0),
)

_DARK_TONES: Final[Tuple[Tuple[str, str, int], ...]] = (
    ("primary",                   "a1",    80),
    ("on_primary",                "a1",    20),
    ("primary_container",         "a1",    30),
    ("on_primary_container",      "a1",    90),
    ("secondary",                 "a2",    80),
    ("on_secondary",              "a2",    20),
    ("secondary_container",       "a2",    30),
    ("on_secondary_container",    "a2",    90),
    ("tertiary",                  "a3",    80),
    ("on_tertiary",               "a3",    20),
    ("tertiary_container",        "a3",    30),
    ("on_tertiary_container",     "a3",    90),
    ("error",                     "error", 80),
    ("on_error",                  "error", 20),
    ("error_container",           "error", 30),
    ("on_error_container",        "error", 90),
    ("surface_dim",               "n1",    6),
    ("surface",                   "n1",    6),
    ("surface_bright",            "n1",    24),
    ("surface_container_lowest",  "n1",    4),
    ("surface_container_low",     "n1",    10),
    ("surface_container",         "n1",    12),
    ("surface_container_high",    "n1",    17),
    ("surface_container_highest", "n1",    22),
    ("on_surface",                "n1",    90),
    ("on_surface_variant",        "n2",    80),
    ("outline",                   "n2",    60),
    ("outline_variant",           "n2",    30),
    ("inverse_surface",           "n1",    90),
    ("inverse_on_surface",        "n1",    20),
    ("inverse_primary",           "a1",    40),
    ("scrim",                     "n1",    0),
    ("shadow",                    "n1",    0),
)

ROLES: Final[Tuple[str, ...]] = tuple(role for role, _, _ in _LIGHT_TONES)


@dataclass(frozen=True, slots=True)
class Scheme:
    """Packed ARGB color of every theme role."""
    primary:                   int
    on_primary:                int
    primary_container:         int
    on_primary_container:      int
    secondary:                 int
    on_secondary:              int
    secondary_container:       int
    on_secondary_container:    int
    tertiary:                  int
    on_tertiary:               int
    tertiary_container:        int
    on_tertiary_container:     int
    error:                     int
    on_error:                  int
    error_container:           int
    on_error_container:        int
    surface_dim:               int
    surface:                   int
    surface_bright:            int
    surface_container_lowest:  int
    surface_container_low:     int
    surface_container:         int
    surface_container_high:    int
    surface_container_highest: int
    on_surface:                int
    on_surface_variant:        int
    outline:                   int
    outline_variant:           int
    inverse_surface:           int
    inverse_on_surface:        int
    inverse_primary:           int
    scrim:                     int
    shadow:                    int

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def _from_tones(cls, core: CorePalette, table: Tuple[Tuple[str, str, int], ...]) -> "Scheme":
        return cls(**{role: getattr(core, palette).tone(tone) for role, palette, tone in table})

    @classmethod
    def light_from_core_palette(cls, core: CorePalette) -> "Scheme":
        return cls._from_tones(core, _LIGHT_TONES)

    @classmethod
    def dark_from_core_palette(cls, core: CorePalette) -> "Scheme":
        return cls._from_tones(core, _DARK_TONES)

    @classmethod
    def light(cls, argb: int) -> "Scheme":
        """Light scheme of the standard core palette of *argb*."""
        return cls.light_from_core_palette(CorePalette.of(argb))

    @classmethod
    def dark(cls, argb: int) -> "Scheme":
        """Dark scheme of the standard core palette of *argb*."""
        return cls.dark_from_core_palette(CorePalette.of(argb))

    @classmethod
    def light_content(cls, argb: int) -> "Scheme":
        """Light scheme of the content core palette of *argb*."""
        return cls.light_from_core_palette(CorePalette.content_of(argb))

    @classmethod
    def dark_content(cls, argb: int) -> "Scheme":
        """Dark scheme of the content core palette of *argb*."""
        return cls.dark_from_core_palette(CorePalette.content_of(argb))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def items(self) -> Iterator[Tuple[str, int]]:
        """Yields ``(role, argb)`` in role order."""
        for field in fields(self):
            yield field.name, getattr(self, field.name)

    def to_hex_dict(self) -> Dict[str, str]:
        return {role: hex_from_argb(argb) for role, argb in self.items()}
