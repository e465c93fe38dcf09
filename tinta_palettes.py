# -*- coding: utf-8 -*-
"""
Tinta: Perceptual color appearance and tonal palettes
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tinta_palettes.py — Tonal palettes and the core palette.

A ``TonalPalette`` is one hue and one chroma swept through tone 0..100.
Each tone is solved through HCT on first request and memoised in the
palette's own ``ToneCache``.

A ``CorePalette`` is the set of six tonal palettes a UI theme is built
from, all derived from a single seed color:

    a1      primary accent
    a2      secondary accent (same hue, less chroma)
    a3      tertiary accent (hue rotated by 60 degrees)
    n1      neutral
    n2      neutral variant
    error   fixed red (hue 25, chroma 84)
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from tinta_colorutils import round_half_away
from tinta_hct import Hct
from tinta_viewing import ViewingConditions, resolve_viewing_conditions

__all__ = [
    "ToneCache",
    "TonalPalette",
    "CorePaletteColors",
    "CorePalette",
]

logger = logging.getLogger(__name__)

# Key-color search starts at mid tone and walks outwards.
_KEY_START_TONE = 50.0
_KEY_MAX_DELTA = 50

# Error palette is the same red for every seed.
_ERROR_HUE = 25.0
_ERROR_CHROMA = 84.0


# ═══════════════════════════════════════════════════════════════════════════════
# ToneCache
# ═══════════════════════════════════════════════════════════════════════════════
class ToneCache:
    """
    Tone -> ARGB memo owned by a single TonalPalette.

    Not synchronised: share a palette across threads only behind a lock.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: Dict[int, int] = {}

    def get_or_compute(self, tone: int, compute: Callable[[int], int]) -> int:
        argb = self._entries.get(tone)
        if argb is None:
            argb = compute(tone)
            self._entries[tone] = argb
        return argb

    def __contains__(self, tone: object) -> bool:
        return tone in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# ═══════════════════════════════════════════════════════════════════════════════
# TonalPalette
# ═══════════════════════════════════════════════════════════════════════════════
class TonalPalette:
    """
    A hue and chroma rendered at any tone.

    Attributes
    ----------
    hue : float
        Requested hue; every tone is solved at this hue.
    chroma : float
        Requested chroma; light and dark tones may carry less.
    key_color : Hct
        The tone of this hue whose chroma is closest to the request.
    """

    __slots__ = ("_hue", "_chroma", "_key_color", "_viewing_conditions", "_cache")

    def __init__(
        self,
        hue: float,
        chroma: float,
        key_color: Hct,
        viewing_conditions: Optional[ViewingConditions] = None,
    ) -> None:
        self._hue = hue
        self._chroma = chroma
        self._key_color = key_color
        self._viewing_conditions = resolve_viewing_conditions(viewing_conditions)
        self._cache = ToneCache()

    # -- constructors ------------------------------------------------------
    @classmethod
    def from_int(
        cls, argb: int, viewing_conditions: Optional[ViewingConditions] = None
    ) -> "TonalPalette":
        """Tones matching the hue and chroma of *argb*."""
        return cls.from_hct(Hct.from_int(argb, viewing_conditions))

    @classmethod
    def from_hct(cls, hct: Hct) -> "TonalPalette":
        """Tones matching the hue and chroma of *hct*, which becomes the key color."""
        return cls(hct.hue, hct.chroma, hct, hct.viewing_conditions)

    @classmethod
    def from_hue_and_chroma(
        cls,
        hue: float,
        chroma: float,
        viewing_conditions: Optional[ViewingConditions] = None,
    ) -> "TonalPalette":
        """
        Parameters
        ----------
        hue : float
            HCT hue.
        chroma : float
            HCT chroma.
        viewing_conditions : ViewingConditions, optional
            Conditions the tones are solved in; default conditions if None.
        """
        key_color = cls._create_key_color(hue, chroma, viewing_conditions)
        return cls(hue, chroma, key_color, viewing_conditions)

    @staticmethod
    def _create_key_color(
        hue: float, chroma: float, viewing_conditions: Optional[ViewingConditions]
    ) -> Hct:
        """
        Walks tone outwards from 50 (+delta before -delta) and keeps the
        Hct whose chroma is closest to *chroma*.  Only a strictly smaller
        error replaces the current best; the walk stops early once the
        best chroma rounds to the target.
        """
        best = Hct.from_hct(hue, chroma, _KEY_START_TONE, viewing_conditions)
        best_delta = abs(best.chroma - chroma)
        target = round_half_away(chroma)

        for delta in range(1, _KEY_MAX_DELTA):
            if round_half_away(best.chroma) == target:
                break
            for tone in (_KEY_START_TONE + delta, _KEY_START_TONE - delta):
                candidate = Hct.from_hct(hue, chroma, tone, viewing_conditions)
                candidate_delta = abs(candidate.chroma - chroma)
                if candidate_delta < best_delta:
                    best = candidate
                    best_delta = candidate_delta

        logger.debug(
            "Key color for hue=%.3f chroma=%.3f: %r", hue, chroma, best
        )
        return best

    # -- properties --------------------------------------------------------
    @property
    def hue(self) -> float:
        return self._hue

    @property
    def chroma(self) -> float:
        return self._chroma

    @property
    def key_color(self) -> Hct:
        return self._key_color

    @property
    def viewing_conditions(self) -> ViewingConditions:
        return self._viewing_conditions

    # -- tones -------------------------------------------------------------
    def tone(self, tone: int) -> int:
        """
        ARGB of this palette at *tone*.

        Raises
        ------
        ValueError
            If *tone* is not an integer in 0..100.
        """
        if isinstance(tone, bool):
            raise ValueError(f"tone must be an integer in 0..100, got {tone!r}")
        # numpy integers are accepted and normalised to int
        try:
            tone = operator.index(tone)
        except TypeError as exc:
            raise ValueError(f"tone must be an integer in 0..100, got {tone!r}") from exc
        if not 0 <= tone <= 100:
            raise ValueError(f"tone must be in 0..100, got {tone}")
        return self._cache.get_or_compute(tone, self._render)

    def _render(self, tone: int) -> int:
        return Hct.from_hct(self._hue, self._chroma, float(tone), self._viewing_conditions).to_int()

    def get_hct(self, tone: int) -> Hct:
        """HCT of this palette at *tone*."""
        return Hct.from_int(self.tone(tone), self._viewing_conditions)

    def __repr__(self) -> str:
        return (
            f"TonalPalette(hue={self._hue:.4f}, chroma={self._chroma:.4f}, "
            f"key_color={self._key_color!r}, cached_tones={len(self._cache)})"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# CorePalette
# ═══════════════════════════════════════════════════════════════════════════════
def _role_hue_and_chroma(role: str, hue: float, chroma: float, is_content: bool) -> Tuple[float, float]:
    """Hue and chroma of one core-palette role for a seed of (*hue*, *chroma*)."""
    if role == "error":
        return _ERROR_HUE, _ERROR_CHROMA
    if role == "a1":
        return hue, chroma if is_content else 48.0
    if role == "a2":
        return hue, chroma / 3.0 if is_content else 16.0
    if role == "a3":
        return hue + 60.0, chroma / 2.0 if is_content else 24.0
    # Content neutrals are capped at min(C/12, 4) and min(C/6, 8), not C / min(12, 4)
    # and C / min(6, 8), which would leave them at C/4 and C/6.
    if role == "n1":
        return hue, min(chroma / 12.0, 4.0) if is_content else 4.0
    if role == "n2":
        return hue, min(chroma / 6.0, 8.0) if is_content else 8.0
    raise ValueError(f"Unknown core palette role: {role!r}")


def _role_palette(
    role: str, seed: Hct, is_content: bool, viewing_conditions: Optional[ViewingConditions]
) -> TonalPalette:
    hue, chroma = _role_hue_and_chroma(role, seed.hue, seed.chroma, is_content)
    return TonalPalette.from_hue_and_chroma(hue, chroma, viewing_conditions)


@dataclass(frozen=True, slots=True)
class CorePaletteColors:
    """
    Seed colors for :meth:`CorePalette.from_colors`.

    Only *primary* is required; every other entry overrides the palette
    that would otherwise be derived from the primary color.
    """
    primary: int
    secondary: Optional[int] = None
    tertiary: Optional[int] = None
    neutral: Optional[int] = None
    neutral_variant: Optional[int] = None
    error: Optional[int] = None


class CorePalette:
    """
    The six tonal palettes of a theme.

    ``of`` keeps the seed's hue but uses fixed chromas, so any seed gives a
    balanced theme.  ``content_of`` scales the chromas from the seed's own
    chroma so the theme stays faithful to the seed (e.g. an album cover).
    """

    __slots__ = ("a1", "a2", "a3", "n1", "n2", "error")

    def __init__(
        self,
        a1: TonalPalette,
        a2: TonalPalette,
        a3: TonalPalette,
        n1: TonalPalette,
        n2: TonalPalette,
        error: TonalPalette,
    ) -> None:
        self.a1 = a1
        self.a2 = a2
        self.a3 = a3
        self.n1 = n1
        self.n2 = n2
        self.error = error

    @classmethod
    def of(cls, argb: int, viewing_conditions: Optional[ViewingConditions] = None) -> "CorePalette":
        return cls._from_seed(argb, False, viewing_conditions)

    @classmethod
    def content_of(cls, argb: int, viewing_conditions: Optional[ViewingConditions] = None) -> "CorePalette":
        return cls._from_seed(argb, True, viewing_conditions)

    @classmethod
    def from_colors(
        cls, colors: CorePaletteColors, viewing_conditions: Optional[ViewingConditions] = None
    ) -> "CorePalette":
        return cls._from_colors(colors, False, viewing_conditions)

    @classmethod
    def content_from_colors(
        cls, colors: CorePaletteColors, viewing_conditions: Optional[ViewingConditions] = None
    ) -> "CorePalette":
        return cls._from_colors(colors, True, viewing_conditions)

    @classmethod
    def _from_seed(
        cls, argb: int, is_content: bool, viewing_conditions: Optional[ViewingConditions]
    ) -> "CorePalette":
        seed = Hct.from_int(argb, viewing_conditions)
        palettes = {
            role: _role_palette(role, seed, is_content, viewing_conditions)
            for role in cls.__slots__
        }
        return cls(**palettes)

    @classmethod
    def _from_colors(
        cls, colors: CorePaletteColors, is_content: bool, viewing_conditions: Optional[ViewingConditions]
    ) -> "CorePalette":
        core = cls._from_seed(colors.primary, is_content, viewing_conditions)

        # (target role, override color, role of the override seed to take)
        overrides = (
            ("a2", colors.secondary, "a1"),
            ("a3", colors.tertiary, "a1"),
            ("error", colors.error, "a1"),
            ("n1", colors.neutral, "n1"),
            ("n2", colors.neutral_variant, "n2"),
        )
        for target, argb, source in overrides:
            if argb is None:
                continue
            seed = Hct.from_int(argb, viewing_conditions)
            setattr(core, target, _role_palette(source, seed, is_content, viewing_conditions))
        return core

    def __repr__(self) -> str:
        return (
            f"CorePalette(a1={self.a1!r}, a2={self.a2!r}, a3={self.a3!r}, "
            f"n1={self.n1!r}, n2={self.n2!r}, error={self.error!r})"
        )
