# -*- coding: utf-8 -*-
"""
Tinta: Perceptual color appearance and tonal palettes
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tinta_hct.py — HCT color model and its gamut solver.

HCT is hue and chroma from CAM16 combined with tone, the L* of
L*a*b*.  Tone links the model to contrast: a tone difference of 40
guarantees a contrast ratio >= 3.0, a difference of 50 guarantees >= 4.5.

Gamut solver
------------
``solve_to_int(hue, chroma, tone)`` returns the sRGB color with exactly
the requested tone and hue and the requested chroma, or the largest
chroma the gamut allows at that hue and tone.

  1. Greys (chroma ~ 0) and the extreme tones short-circuit to
     ``argb_from_lstar``.
  2. Newton iteration on CAM16 lightness J: run the inverse CAM16
     transform into linear RGB and correct J until the luminance matches.
     Leaving the RGB cube means the chroma is out of gamut.
  3. Otherwise bisect to the gamut limit.  The plane of constant Y cuts
     the RGB cube in a polygon of up to 12 vertices; the edge straddling
     the target hue is located by a cyclic-order test, then bisected on
     the sRGB *critical planes* (linear values where the 8-bit encoding
     steps).

Steps 2 and 3 run in Numba kernels.  The linear-RGB <-> scaled cone
matrices they need depend on the viewing conditions and are cached per
``ViewingConditions``.
"""

from __future__ import annotations

import functools
import logging
import math
from typing import Final, Optional, Tuple

import numpy as np
from numba import njit

from tinta_cam16 import Cam16
from tinta_colorutils import (
    ArrayFloat,
    M_SRGB_TO_XYZ,
    argb_from_linrgb,
    argb_from_lstar,
    clamp_double,
    lstar_from_argb,
    lstar_from_y,
    sanitize_degrees_double,
    y_from_lstar,
)
from tinta_viewing import (
    M_XYZ_TO_CAM16RGB,
    ViewingConditions,
    resolve_viewing_conditions,
)

__all__ = [
    "CRITICAL_PLANES",
    "solve_to_int",
    "Hct",
]

logger = logging.getLogger(__name__)

# Linear sRGB value (0..100) at the midpoint of every 8-bit code step:
# 100 * EOTF((i + 0.5) / 255) for i in 0..254.
def _build_critical_planes() -> ArrayFloat:
    normalized = (np.arange(255, dtype=np.float64) + 0.5) / 255.0
    linear = np.where(
        normalized <= 0.040449936,
        normalized / 12.92,
        np.power((normalized + 0.055) / 1.055, 2.4),
    )
    planes = linear * 100.0
    planes.setflags(write=False)
    return planes

CRITICAL_PLANES: Final[ArrayFloat] = _build_critical_planes()

# Solver tolerances
_MIN_CHROMA: Final[float] = 0.0001
_MIN_TONE: Final[float] = 0.0001
_MAX_TONE: Final[float] = 99.9999


@functools.lru_cache(maxsize=16)
def _solver_matrices(viewing_conditions: ViewingConditions) -> Tuple[ArrayFloat, ArrayFloat]:
    """
    Cached worker for the solver's shortcut matrices.

    SCALED_DISCOUNT maps linear sRGB (0..100) straight to discounted cone
    responses pre-scaled by ``fl / 100``, so that the CAM16 compression
    reduces to ``|x|^0.42``.  The second matrix is its inverse.
    Both are in column-vector form (``M @ v``).
    """
    scale = np.diag(viewing_conditions.rgb_d_array * viewing_conditions.fl / 100.0)
    scaled_discount = scale @ M_XYZ_TO_CAM16RGB @ M_SRGB_TO_XYZ
    linrgb_from_scaled_discount = np.linalg.inv(scaled_discount)
    scaled_discount.setflags(write=False)
    linrgb_from_scaled_discount.setflags(write=False)
    return scaled_discount, linrgb_from_scaled_discount


# =============================================================================
# 1. SOLVER KERNELS (Numba)
# =============================================================================
# error_model="numpy": float division by zero yields inf/nan like the
# reference formulas instead of raising.

@njit(cache=True, error_model="numpy")
def _signum(num: float) -> float:
    if num < 0.0:
        return -1.0
    if num == 0.0:
        return 0.0
    return 1.0

@njit(cache=True, error_model="numpy")
def _sanitize_radians(angle: float) -> float:
    return (angle + math.pi * 8.0) % (math.pi * 2.0)

@njit(cache=True, error_model="numpy")
def _true_delinearized(rgb_component: float) -> float:
    """sRGB OETF without rounding, on the 0..255 scale."""
    normalized = rgb_component / 100.0
    if normalized <= 0.0031308:
        delinearized = normalized * 12.92
    else:
        delinearized = 1.055 * normalized ** (1.0 / 2.4) - 0.055
    return delinearized * 255.0

@njit(cache=True, error_model="numpy")
def _chromatic_adaptation(component: float) -> float:
    af = abs(component) ** 0.42
    return _signum(component) * 400.0 * af / (af + 27.13)

@njit(cache=True, error_model="numpy")
def _inverse_chromatic_adaptation(adapted: float) -> float:
    adapted_abs = abs(adapted)
    base = max(0.0, 27.13 * adapted_abs / (400.0 - adapted_abs))
    return _signum(adapted) * base ** (1.0 / 0.42)

@njit(cache=True, error_model="numpy")
def _hue_of(linrgb: ArrayFloat, scaled_discount: ArrayFloat) -> float:
    """CAM16 hue, in radians (-pi, pi], of a linear RGB color."""
    r_d = scaled_discount[0, 0] * linrgb[0] + scaled_discount[0, 1] * linrgb[1] + scaled_discount[0, 2] * linrgb[2]
    g_d = scaled_discount[1, 0] * linrgb[0] + scaled_discount[1, 1] * linrgb[1] + scaled_discount[1, 2] * linrgb[2]
    b_d = scaled_discount[2, 0] * linrgb[0] + scaled_discount[2, 1] * linrgb[1] + scaled_discount[2, 2] * linrgb[2]
    r_a = _chromatic_adaptation(r_d)
    g_a = _chromatic_adaptation(g_d)
    b_a = _chromatic_adaptation(b_d)
    # redness-greenness
    a = (11.0 * r_a + -12.0 * g_a + b_a) / 11.0
    # yellowness-blueness
    b = (r_a + g_a - 2.0 * b_a) / 9.0
    return math.atan2(b, a)

@njit(cache=True, error_model="numpy")
def _are_in_cyclic_order(a: float, b: float, c: float) -> bool:
    delta_a_b = _sanitize_radians(b - a)
    delta_a_c = _sanitize_radians(c - a)
    return delta_a_b < delta_a_c

@njit(cache=True, error_model="numpy")
def _set_coordinate(source: ArrayFloat, coordinate: float, target: ArrayFloat, axis: int) -> ArrayFloat:
    """Point on the segment source -> target whose *axis* equals *coordinate*."""
    t = (coordinate - source[axis]) / (target[axis] - source[axis])
    out = np.empty(3)
    for i in range(3):
        out[i] = source[i] + (target[i] - source[i]) * t
    return out

@njit(cache=True, error_model="numpy")
def _is_bounded(x: float) -> bool:
    return 0.0 <= x and x <= 100.0

@njit(cache=True, error_model="numpy")
def _nth_vertex(y: float, n: int) -> ArrayFloat:
    """
    The nth possible vertex of the polygon where the plane of luminance
    *y* meets the RGB cube.  Returns [-1, -1, -1] when that vertex lies
    outside the cube.
    """
    k_r = 0.2126
    k_g = 0.7152
    k_b = 0.0722
    coord_a = 0.0 if n % 4 <= 1 else 100.0
    coord_b = 0.0 if n % 2 == 0 else 100.0
    out = np.full(3, -1.0)
    if n < 4:
        g = coord_a
        b = coord_b
        r = (y - g * k_g - b * k_b) / k_r
        if _is_bounded(r):
            out[0] = r
            out[1] = g
            out[2] = b
    elif n < 8:
        b = coord_a
        r = coord_b
        g = (y - r * k_r - b * k_b) / k_g
        if _is_bounded(g):
            out[0] = r
            out[1] = g
            out[2] = b
    else:
        r = coord_a
        g = coord_b
        b = (y - r * k_r - g * k_g) / k_b
        if _is_bounded(b):
            out[0] = r
            out[1] = g
            out[2] = b
    return out

@njit(cache=True, error_model="numpy")
def _bisect_to_segment(y: float, target_hue: float, scaled_discount: ArrayFloat) -> Tuple[ArrayFloat, ArrayFloat]:
    """Polygon edge (two vertices) whose hue range contains *target_hue*."""
    left = np.full(3, -1.0)
    right = np.full(3, -1.0)
    left_hue = 0.0
    right_hue = 0.0
    initialized = False
    uncut = True
    for n in range(12):
        mid = _nth_vertex(y, n)
        if mid[0] < 0.0:
            continue
        mid_hue = _hue_of(mid, scaled_discount)
        if not initialized:
            left = mid
            right = mid
            left_hue = mid_hue
            right_hue = mid_hue
            initialized = True
            continue
        if uncut or _are_in_cyclic_order(left_hue, mid_hue, right_hue):
            uncut = False
            if _are_in_cyclic_order(left_hue, target_hue, mid_hue):
                right = mid
                right_hue = mid_hue
            else:
                left = mid
                left_hue = mid_hue
    return left, right

@njit(cache=True, error_model="numpy")
def _critical_plane_below(x: float) -> int:
    return int(math.floor(x - 0.5))

@njit(cache=True, error_model="numpy")
def _critical_plane_above(x: float) -> int:
    return int(math.ceil(x - 0.5))

@njit(cache=True, error_model="numpy")
def _bisect_to_limit(
    y: float, target_hue: float, scaled_discount: ArrayFloat, critical_planes: ArrayFloat
) -> ArrayFloat:
    """Linear RGB on the gamut boundary with luminance *y* and hue *target_hue*."""
    left, right = _bisect_to_segment(y, target_hue, scaled_discount)
    left_hue = _hue_of(left, scaled_discount)
    for axis in range(3):
        if left[axis] != right[axis]:
            if left[axis] < right[axis]:
                l_plane = _critical_plane_below(_true_delinearized(left[axis]))
                r_plane = _critical_plane_above(_true_delinearized(right[axis]))
            else:
                l_plane = _critical_plane_above(_true_delinearized(left[axis]))
                r_plane = _critical_plane_below(_true_delinearized(right[axis]))
            for _ in range(8):
                if abs(r_plane - l_plane) <= 1:
                    break
                m_plane = (l_plane + r_plane) // 2
                mid = _set_coordinate(left, critical_planes[m_plane], right, axis)
                mid_hue = _hue_of(mid, scaled_discount)
                if _are_in_cyclic_order(left_hue, target_hue, mid_hue):
                    right = mid
                    r_plane = m_plane
                else:
                    left = mid
                    left_hue = mid_hue
                    l_plane = m_plane
    out = np.empty(3)
    for i in range(3):
        out[i] = (left[i] + right[i]) / 2.0
    return out

@njit(cache=True, error_model="numpy")
def _find_result_by_j(
    hue_radians: float,
    chroma: float,
    y: float,
    n: float,
    aw: float,
    nbb: float,
    nc: float,
    ncb: float,
    c: float,
    z: float,
    linrgb_from_scaled_discount: ArrayFloat,
) -> Tuple[bool, ArrayFloat]:
    """
    Newton iteration on J for an in-gamut solution.

    Returns ``(True, linrgb)`` on success and ``(False, linrgb)`` when the
    requested chroma leaves the RGB cube at this hue and luminance.
    """
    # Initial estimate of J from luminance
    j = math.sqrt(y) * 11.0
    t_inner_coeff = 1.0 / math.pow(1.64 - math.pow(0.29, n), 0.73)
    e_hue = 0.25 * (math.cos(hue_radians + 2.0) + 3.8)
    p1 = e_hue * (50000.0 / 13.0) * nc * ncb
    h_sin = math.sin(hue_radians)
    h_cos = math.cos(hue_radians)
    linrgb = np.zeros(3)
    for iteration_round in range(5):
        j_normalized = j / 100.0
        if chroma == 0.0 or j == 0.0:
            alpha = 0.0
        else:
            alpha = chroma / math.sqrt(j_normalized)
        t = math.pow(alpha * t_inner_coeff, 1.0 / 0.9)
        ac = aw * math.pow(j_normalized, 1.0 / c / z)
        p2 = ac / nbb
        gamma = 23.0 * (p2 + 0.305) * t / (23.0 * p1 + 11.0 * t * h_cos + 108.0 * t * h_sin)
        a = gamma * h_cos
        b = gamma * h_sin
        r_a = (460.0 * p2 + 451.0 * a + 288.0 * b) / 1403.0
        g_a = (460.0 * p2 - 891.0 * a - 261.0 * b) / 1403.0
        b_a = (460.0 * p2 - 220.0 * a - 6300.0 * b) / 1403.0
        r_cs = _inverse_chromatic_adaptation(r_a)
        g_cs = _inverse_chromatic_adaptation(g_a)
        b_cs = _inverse_chromatic_adaptation(b_a)
        for i in range(3):
            linrgb[i] = (linrgb_from_scaled_discount[i, 0] * r_cs
                         + linrgb_from_scaled_discount[i, 1] * g_cs
                         + linrgb_from_scaled_discount[i, 2] * b_cs)
        if linrgb[0] < 0.0 or linrgb[1] < 0.0 or linrgb[2] < 0.0:
            return False, linrgb
        fnj = 0.2126 * linrgb[0] + 0.7152 * linrgb[1] + 0.0722 * linrgb[2]
        if fnj <= 0.0:
            return False, linrgb
        if iteration_round == 4 or abs(fnj - y) < 0.002:
            if linrgb[0] > 100.01 or linrgb[1] > 100.01 or linrgb[2] > 100.01:
                return False, linrgb
            return True, linrgb
        # Newton step on the approximation Y ~ J^2
        j = j - (fnj - y) * j / (2.0 * fnj)
    return False, linrgb


# =============================================================================
# 2. SOLVER ENTRY POINT
# =============================================================================

def solve_to_int(
    hue_degrees: float,
    chroma: float,
    lstar: float,
    viewing_conditions: Optional[ViewingConditions] = None,
) -> int:
    """
    Finds the sRGB color closest to the requested HCT coordinates.

    Args:
        hue_degrees: Hue; any value, reduced into [0, 360).
        chroma: Requested chroma; the result may carry less when the gamut
            does not reach it at this hue and tone.
        lstar: Tone (L*); clamped into [0, 100].
        viewing_conditions: Conditions hue and chroma are measured in.

    Returns:
        Opaque ARGB int with tone *lstar*, hue *hue_degrees* and chroma as
        close to *chroma* as the gamut allows.

    Raises:
        RuntimeError: If the solver produces a non-finite color.
    """
    lstar = clamp_double(0.0, 100.0, lstar)
    if chroma < _MIN_CHROMA or lstar < _MIN_TONE or lstar > _MAX_TONE:
        return argb_from_lstar(lstar)

    vc = resolve_viewing_conditions(viewing_conditions)
    hue_radians = math.radians(sanitize_degrees_double(hue_degrees))
    y = y_from_lstar(lstar)
    scaled_discount, linrgb_from_scaled_discount = _solver_matrices(vc)

    found, linrgb = _find_result_by_j(
        hue_radians, float(chroma), y,
        vc.n, vc.aw, vc.nbb, vc.nc, vc.ncb, vc.c, vc.z,
        linrgb_from_scaled_discount,
    )
    if not found:
        logger.debug(
            "Chroma %.3f out of gamut at hue %.3f, tone %.3f; bisecting to limit.",
            chroma, hue_degrees, lstar,
        )
        linrgb = _bisect_to_limit(y, hue_radians, scaled_discount, CRITICAL_PLANES)

    if not np.all(np.isfinite(linrgb)):
        raise RuntimeError(
            f"HCT solver produced non-finite RGB {linrgb} for "
            f"hue={hue_degrees}, chroma={chroma}, tone={lstar}"
        )
    return argb_from_linrgb(linrgb)


# =============================================================================
# 3. HCT
# =============================================================================

class Hct:
    """
    A color in hue, chroma and tone.

    The instance always holds the exact sRGB color for its coordinates:
    ``hue``, ``chroma`` and ``tone`` are measured back from that color,
    so they may differ slightly from what was requested (and chroma may
    be lower when the request is out of gamut).

    Setting any coordinate re-solves and replaces all four values in one
    assignment, so no reader ever sees a mix of old and new state.
    """

    __slots__ = ("_state", "_viewing_conditions")

    def __init__(self, argb: int, viewing_conditions: Optional[ViewingConditions] = None) -> None:
        self._viewing_conditions = resolve_viewing_conditions(viewing_conditions)
        self._set_from_int(argb)

    @classmethod
    def from_int(cls, argb: int, viewing_conditions: Optional[ViewingConditions] = None) -> "Hct":
        """HCT of an ARGB color; ``to_int()`` returns *argb* unchanged."""
        return cls(argb, viewing_conditions)

    @classmethod
    def from_hct(
        cls,
        hue: float,
        chroma: float,
        tone: float,
        viewing_conditions: Optional[ViewingConditions] = None,
    ) -> "Hct":
        """
        Args:
            hue: 0 <= hue < 360; other values are wrapped.
            chroma: Informally colorfulness.  The color returned may have
                lower chroma: the maximum differs for every hue and tone.
            tone: 0 <= tone <= 100; other values are clamped.
        """
        return cls(solve_to_int(hue, chroma, tone, viewing_conditions), viewing_conditions)

    def _set_from_int(self, argb: int) -> None:
        cam = Cam16.from_int(argb, self._viewing_conditions)
        self._state = (cam.hue, cam.chroma, lstar_from_argb(argb), argb)

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------
    @property
    def hue(self) -> float:
        return self._state[0]

    @hue.setter
    def hue(self, value: float) -> None:
        _, chroma, tone, _ = self._state
        self._set_from_int(solve_to_int(value, chroma, tone, self._viewing_conditions))

    @property
    def chroma(self) -> float:
        return self._state[1]

    @chroma.setter
    def chroma(self, value: float) -> None:
        hue, _, tone, _ = self._state
        self._set_from_int(solve_to_int(hue, value, tone, self._viewing_conditions))

    @property
    def tone(self) -> float:
        return self._state[2]

    @tone.setter
    def tone(self, value: float) -> None:
        hue, chroma, _, _ = self._state
        self._set_from_int(solve_to_int(hue, chroma, value, self._viewing_conditions))

    @property
    def viewing_conditions(self) -> ViewingConditions:
        return self._viewing_conditions

    def to_int(self) -> int:
        return self._state[3]

    # ------------------------------------------------------------------
    # Color relativity
    # ------------------------------------------------------------------
    def in_viewing_conditions(self, viewing_conditions: ViewingConditions) -> "Hct":
        """
        The HCT this color would be reported as under other conditions.

        The same stored color looks different with the lights on or off,
        or on white versus black.  CAM16 models this: find the XYZ that
        carries this appearance in *viewing_conditions*, then measure that
        XYZ back in this Hct's own conditions.
        """
        # 1. XYZ of this appearance in the target conditions
        cam = Cam16.from_int(self.to_int(), self._viewing_conditions)
        viewed = cam.xyz_in_viewing_conditions(viewing_conditions)

        # 2. Appearance of that XYZ in this Hct's own conditions
        recast = Cam16.from_xyz(
            float(viewed[0]), float(viewed[1]), float(viewed[2]), self._viewing_conditions
        )

        # 3. Tone comes straight from the recast Y
        return Hct.from_hct(
            recast.hue,
            recast.chroma,
            lstar_from_y(float(viewed[1])),
            self._viewing_conditions,
        )

    def __repr__(self) -> str:
        hue, chroma, tone, argb = self._state
        return f"Hct(hue={hue:.4f}, chroma={chroma:.4f}, tone={tone:.4f}, argb=0x{argb:08x})"
