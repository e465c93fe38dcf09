# -*- coding: utf-8 -*-
"""
Tinta: Perceptual color appearance and tonal palettes
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tinta_cam16.py — CAM16 color appearance model.

A color is not fully described by its hex code; CAM16 describes how it
*appears* under given viewing conditions.  A ``Cam16`` carries the nine
appearance correlates of one color under one set of conditions:

    hue, chroma       perceptual hue angle and colorfulness relative to white
    j, q              lightness and brightness
    m, s              colorfulness and saturation
    j_star, a_star,   CAM16-UCS coordinates; use these (via ``distance``)
    b_star            to measure color differences

The conditions are not stored on the instance.  Re-deriving the
appearance under other conditions means running the transform again.

References:
    - Li, C. et al. (2017). "Comprehensive color solutions: CAM16, CAT16,
      and CAM16-UCS". Color Res. Appl. 42(6).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from tinta_colorutils import (
    ArrayFloat,
    argb_from_xyz,
    signum,
    xyz_from_argb,
)
from tinta_viewing import (
    M_CAM16RGB_TO_XYZ_T,
    M_XYZ_TO_CAM16RGB_T,
    ViewingConditions,
    resolve_viewing_conditions,
)

__all__ = ["Cam16"]

_DEG2RAD = math.pi / 180.0
_RAD2DEG = 180.0 / math.pi


def _adapt(component: float, fl: float) -> float:
    """Post-adaptation non-linear compression of one cone response."""
    af = math.pow(fl * abs(component) / 100.0, 0.42)
    return signum(component) * 400.0 * af / (af + 27.13)


def _unadapt(adapted: float, fl: float) -> float:
    """Inverse of :func:`_adapt`."""
    adapted_abs = abs(adapted)
    base = max(0.0, 27.13 * adapted_abs / (400.0 - adapted_abs)) if adapted_abs < 400.0 else math.inf
    return signum(adapted) * (100.0 / fl) * math.pow(base, 1.0 / 0.42)


def _ucs(j: float, m: float, hue: float) -> tuple[float, float, float]:
    j_star = (1.0 + 100.0 * 0.007) * j / (1.0 + 0.007 * j)
    m_star = math.log1p(0.0228 * m) / 0.0228
    hue_radians = hue * _DEG2RAD
    return j_star, m_star * math.cos(hue_radians), m_star * math.sin(hue_radians)


@dataclass(frozen=True, slots=True)
class Cam16:
    """CAM16 appearance correlates of one color under one viewing condition."""
    hue:    float
    chroma: float
    j:      float
    q:      float
    m:      float
    s:      float
    j_star: float
    a_star: float
    b_star: float

    # ------------------------------------------------------------------
    # Metric
    # ------------------------------------------------------------------
    def distance(self, other: "Cam16") -> float:
        """
        CAM16-UCS color difference.

        The Euclidean distance in (J*, a*, b*) is compressed as
        ``1.41 * dE'^0.63``.
        """
        d_j = self.j_star - other.j_star
        d_a = self.a_star - other.a_star
        d_b = self.b_star - other.b_star
        d_e_prime = math.sqrt(d_j * d_j + d_a * d_a + d_b * d_b)
        return 1.41 * math.pow(d_e_prime, 0.63)

    # ------------------------------------------------------------------
    # Forward transform
    # ------------------------------------------------------------------
    @classmethod
    def from_int(
        cls, argb: int, viewing_conditions: Optional[ViewingConditions] = None
    ) -> "Cam16":
        """Appearance of an ARGB color (alpha ignored)."""
        xyz = xyz_from_argb(argb)
        return cls.from_xyz(float(xyz[0]), float(xyz[1]), float(xyz[2]), viewing_conditions)

    @classmethod
    def from_xyz(
        cls,
        x: float,
        y: float,
        z: float,
        viewing_conditions: Optional[ViewingConditions] = None,
    ) -> "Cam16":
        """Appearance of an XYZ color (Y = 100 for white)."""
        vc = resolve_viewing_conditions(viewing_conditions)

        # Cone responses, then von Kries style discounting
        rgb_c = np.dot(np.array([x, y, z], dtype=np.float64), M_XYZ_TO_CAM16RGB_T)
        r_d = vc.rgb_d[0] * float(rgb_c[0])
        g_d = vc.rgb_d[1] * float(rgb_c[1])
        b_d = vc.rgb_d[2] * float(rgb_c[2])

        r_a = _adapt(r_d, vc.fl)
        g_a = _adapt(g_d, vc.fl)
        b_a = _adapt(b_d, vc.fl)

        # Redness-greenness, yellowness-blueness
        a = (11.0 * r_a - 12.0 * g_a + b_a) / 11.0
        b = (r_a + g_a - 2.0 * b_a) / 9.0

        u = (20.0 * r_a + 20.0 * g_a + 21.0 * b_a) / 20.0
        p2 = (40.0 * r_a + 20.0 * g_a + b_a) / 20.0

        atan_degrees = math.atan2(b, a) * _RAD2DEG
        if atan_degrees < 0.0:
            hue = atan_degrees + 360.0
        elif atan_degrees >= 360.0:
            hue = atan_degrees - 360.0
        else:
            hue = atan_degrees

        ac = p2 * vc.nbb
        j = 100.0 * math.pow(ac / vc.aw, vc.c * vc.z)
        q = (4.0 / vc.c) * math.sqrt(j / 100.0) * (vc.aw + 4.0) * vc.f_l_root

        hue_prime = hue + 360.0 if hue < 20.14 else hue
        e_hue = 0.25 * (math.cos(hue_prime * _DEG2RAD + 2.0) + 3.8)
        p1 = 50000.0 / 13.0 * e_hue * vc.nc * vc.ncb
        t = p1 * math.hypot(a, b) / (u + 0.305)
        alpha = math.pow(t, 0.9) * math.pow(1.64 - math.pow(0.29, vc.n), 0.73)

        chroma = alpha * math.sqrt(j / 100.0)
        m = chroma * vc.f_l_root
        s = 50.0 * math.sqrt((alpha * vc.c) / (vc.aw + 4.0))

        j_star, a_star, b_star = _ucs(j, m, hue)
        return cls(hue, chroma, j, q, m, s, j_star, a_star, b_star)

    @classmethod
    def from_jch(
        cls,
        j: float,
        chroma: float,
        hue: float,
        viewing_conditions: Optional[ViewingConditions] = None,
    ) -> "Cam16":
        """
        Builds a Cam16 from lightness J, chroma C and hue h (degrees).

        The remaining correlates are derived; no gamut check is made.
        """
        vc = resolve_viewing_conditions(viewing_conditions)
        q = (4.0 / vc.c) * math.sqrt(j / 100.0) * (vc.aw + 4.0) * vc.f_l_root
        m = chroma * vc.f_l_root
        alpha = chroma / math.sqrt(j / 100.0) if j > 0.0 else 0.0
        s = 50.0 * math.sqrt((alpha * vc.c) / (vc.aw + 4.0))
        j_star, a_star, b_star = _ucs(j, m, hue)
        return cls(hue, chroma, j, q, m, s, j_star, a_star, b_star)

    @classmethod
    def from_ucs(
        cls,
        j_star: float,
        a_star: float,
        b_star: float,
        viewing_conditions: Optional[ViewingConditions] = None,
    ) -> "Cam16":
        """Builds a Cam16 from CAM16-UCS coordinates."""
        vc = resolve_viewing_conditions(viewing_conditions)
        m_star = math.hypot(a_star, b_star)
        m = math.expm1(m_star * 0.0228) / 0.0228
        chroma = m / vc.f_l_root
        hue = math.atan2(b_star, a_star) * _RAD2DEG
        if hue < 0.0:
            hue += 360.0
        j = j_star / (1.0 - (j_star - 100.0) * 0.007)
        return cls.from_jch(j, chroma, hue, vc)

    # ------------------------------------------------------------------
    # Inverse transform
    # ------------------------------------------------------------------
    def xyz_in_viewing_conditions(
        self, viewing_conditions: Optional[ViewingConditions] = None
    ) -> ArrayFloat:
        """XYZ of a color with this appearance under *viewing_conditions*."""
        vc = resolve_viewing_conditions(viewing_conditions)

        if self.chroma == 0.0 or self.j == 0.0:
            alpha = 0.0
        else:
            alpha = self.chroma / math.sqrt(self.j / 100.0)

        t = math.pow(alpha / math.pow(1.64 - math.pow(0.29, vc.n), 0.73), 1.0 / 0.9)
        h_rad = self.hue * _DEG2RAD

        e_hue = 0.25 * (math.cos(h_rad + 2.0) + 3.8)
        ac = vc.aw * math.pow(self.j / 100.0, 1.0 / vc.c / vc.z)
        p1 = e_hue * (50000.0 / 13.0) * vc.nc * vc.ncb
        p2 = ac / vc.nbb

        h_sin = math.sin(h_rad)
        h_cos = math.cos(h_rad)

        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin
        r_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
        g_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
        b_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0

        rgb_c = np.array([
            _unadapt(r_a, vc.fl),
            _unadapt(g_a, vc.fl),
            _unadapt(b_a, vc.fl),
        ], dtype=np.float64)
        rgb_f = rgb_c / vc.rgb_d_array
        return np.dot(rgb_f, M_CAM16RGB_TO_XYZ_T)

    def viewed(self, viewing_conditions: Optional[ViewingConditions] = None) -> int:
        """ARGB of a color with this appearance under *viewing_conditions*."""
        xyz = self.xyz_in_viewing_conditions(viewing_conditions)
        return argb_from_xyz(float(xyz[0]), float(xyz[1]), float(xyz[2]))

    def to_int(self) -> int:
        """ARGB of this appearance under the default viewing conditions."""
        return self.viewed(None)
