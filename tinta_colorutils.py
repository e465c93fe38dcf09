# -*- coding: utf-8 -*-
"""
Tinta: Perceptual color appearance and tonal palettes
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tinta_colorutils.py — Color space primitives.

Scalar building blocks shared by the appearance model and the HCT solver:

  * sRGB transfer functions (8-bit channel <-> linear 0..100).
  * Linear sRGB <-> CIE XYZ (D65, Y = 100 for white).
  * CIE XYZ <-> L*a*b*, and the L* <-> Y pair used for tone.
  * Packed ARGB helpers and hex string parsing / formatting.
  * Small angle and interpolation helpers.

All functions are pure.  Matrices follow the row-vector convention used
throughout the project: ``xyz = np.dot(rgb, M_SRGB_TO_XYZ_T)``.

References:
    - IEC 61966-2-1:1999 (sRGB Standard)
    - CIE 15:2004 "Colorimetry"
"""

from __future__ import annotations

import math
from typing import Final, Sequence, Tuple, TypeAlias

import numpy as np

__all__ = [
    # --- Type Aliases ---
    "ArrayFloat",
    "Vec3",

    # --- Constants ---
    "WHITE_POINT_D65",
    "LAB_EPSILON",
    "LAB_KAPPA",
    "M_SRGB_TO_XYZ",
    "M_SRGB_TO_XYZ_T",
    "M_XYZ_TO_SRGB",
    "M_XYZ_TO_SRGB_T",

    # --- Math ---
    "signum",
    "lerp",
    "clamp_int",
    "clamp_double",
    "sanitize_degrees_int",
    "sanitize_degrees_double",
    "rotation_direction",
    "difference_degrees",
    "matrix_multiply",
    "round_half_away",

    # --- Transfer functions ---
    "linearized",
    "delinearized",

    # --- ARGB ---
    "argb_from_rgb",
    "argb_from_linrgb",
    "alpha_from_argb",
    "red_from_argb",
    "green_from_argb",
    "blue_from_argb",
    "is_opaque",
    "argb_from_xyz",
    "xyz_from_argb",
    "argb_from_lab",
    "lab_from_argb",
    "argb_from_lstar",
    "lstar_from_argb",
    "y_from_lstar",
    "lstar_from_y",
    "white_point_d65",

    # --- Hex ---
    "hex_from_argb",
    "argb_from_hex",
]

# --- Type Aliases ---
ArrayFloat: TypeAlias = np.typing.NDArray[np.floating]
Vec3: TypeAlias = Tuple[float, float, float]

# --- Constants & Pre-Transposed Matrices ---

# D65 white point, Y normalised to 100.
WHITE_POINT_D65: Final[ArrayFloat] = np.array([95.047, 100.0, 108.883], dtype=np.float64)

# Linear sRGB (0..100) -> XYZ.  Row 1 is the luminance weighting and is
# rounded to the Rec. 709 coefficients so that grey maps exactly to Y.
_M_SRGB_TO_XYZ_BASE = np.array([
    [0.41233895, 0.35762064, 0.18051042],
    [0.2126,     0.7152,     0.0722    ],
    [0.01932141, 0.11916382, 0.95034478]
], dtype=np.float64)
M_SRGB_TO_XYZ: Final[ArrayFloat] = _M_SRGB_TO_XYZ_BASE
M_SRGB_TO_XYZ_T: Final[ArrayFloat] = _M_SRGB_TO_XYZ_BASE.T.copy()

_M_XYZ_TO_SRGB_BASE = np.array([
    [ 3.2413774792388685, -1.5376652402851851, -0.49885366846268053],
    [-0.9691452513005321,  1.8758853451067872,  0.04156585616912061],
    [ 0.05562093689691305, -0.20395524564742123, 1.0571799111220335 ]
], dtype=np.float64)
M_XYZ_TO_SRGB: Final[ArrayFloat] = _M_XYZ_TO_SRGB_BASE
M_XYZ_TO_SRGB_T: Final[ArrayFloat] = _M_XYZ_TO_SRGB_BASE.T.copy()

# --- Exact Rational Math Constants ---
# CIE 1976 Lab: epsilon = (6/29)^3, kappa = (29/3)^3.
LAB_EPSILON: Final[float] = 216.0 / 24389.0
LAB_KAPPA: Final[float] = 24389.0 / 27.0

# sRGB transfer function breakpoints.  The decode threshold is the exact
# image of the encode threshold rather than the rounded 0.04045.
_SRGB_DECODE_THRESHOLD: Final[float] = 0.040449936
_SRGB_ENCODE_THRESHOLD: Final[float] = 0.0031308


# =============================================================================
# 1. MATH HELPERS
# =============================================================================

def signum(num: float) -> float:
    """Returns 1.0 for positive, -1.0 for negative and 0.0 for zero."""
    if num < 0.0:
        return -1.0
    if num == 0.0:
        return 0.0
    return 1.0


def lerp(start: float, stop: float, amount: float) -> float:
    """Linear interpolation; *start* at amount 0, *stop* at amount 1."""
    return (1.0 - amount) * start + amount * stop


def clamp_int(lo: int, hi: int, value: int) -> int:
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def clamp_double(lo: float, hi: float, value: float) -> float:
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def sanitize_degrees_int(degrees: int) -> int:
    """Maps an integer angle into [0, 360)."""
    return degrees % 360


def sanitize_degrees_double(degrees: float) -> float:
    """Maps an angle into [0.0, 360.0)."""
    degrees = math.fmod(degrees, 360.0)
    if degrees < 0.0:
        degrees += 360.0
    # fmod of a tiny negative angle can round up to exactly 360.0
    if degrees >= 360.0:
        degrees -= 360.0
    return degrees


def rotation_direction(from_deg: float, to_deg: float) -> float:
    """
    Sign of the shortest rotation from *from_deg* to *to_deg*.

    Returns 1.0 when increasing the angle is shortest (including the
    180-degree tie) and -1.0 otherwise.
    """
    increasing_difference = sanitize_degrees_double(to_deg - from_deg)
    return 1.0 if increasing_difference <= 180.0 else -1.0


def difference_degrees(a: float, b: float) -> float:
    """Distance of two angles on the circle, in [0, 180]."""
    return 180.0 - abs(abs(a - b) - 180.0)


def matrix_multiply(row: Sequence[float], matrix: ArrayFloat) -> ArrayFloat:
    """
    Applies a 3x3 matrix (stored in row-major, column-vector form) to a
    3-vector.  Equivalent to ``np.dot(row, matrix.T)``.
    """
    return np.dot(np.asarray(row, dtype=np.float64), np.asarray(matrix, dtype=np.float64).T)


def round_half_away(value: float) -> int:
    """Rounds half away from zero (Python's ``round`` rounds half to even)."""
    if value < 0.0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


# =============================================================================
# 2. TRANSFER FUNCTIONS
# =============================================================================

def linearized(rgb_component: int) -> float:
    """
    sRGB EOTF for one 8-bit channel.

    Args:
        rgb_component: 0 <= rgb_component <= 255.

    Returns:
        Linear channel value in [0, 100].
    """
    normalized = rgb_component / 255.0
    if normalized <= _SRGB_DECODE_THRESHOLD:
        return normalized / 12.92 * 100.0
    return ((normalized + 0.055) / 1.055) ** 2.4 * 100.0


def delinearized(rgb_component: float) -> int:
    """
    sRGB OETF for one linear channel.

    Args:
        rgb_component: Linear channel value, nominally in [0, 100].

    Returns:
        8-bit channel value, rounded and clamped to [0, 255].
    """
    normalized = rgb_component / 100.0
    if normalized <= _SRGB_ENCODE_THRESHOLD:
        encoded = normalized * 12.92
    else:
        encoded = 1.055 * normalized ** (1.0 / 2.4) - 0.055
    scaled = encoded * 255.0
    # NaN compares false and lands on 0
    if not scaled > 0.0:
        return 0
    if scaled >= 255.0:
        return 255
    return round_half_away(scaled)


def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return t ** (1.0 / 3.0)
    return (LAB_KAPPA * t + 16.0) / 116.0


def _lab_invf(ft: float) -> float:
    ft3 = ft * ft * ft
    if ft3 > LAB_EPSILON:
        return ft3
    return (116.0 * ft - 16.0) / LAB_KAPPA


# =============================================================================
# 3. PACKED ARGB
# =============================================================================

def argb_from_rgb(red: int, green: int, blue: int) -> int:
    """Packs 8-bit channels into an opaque ARGB int."""
    return (255 << 24) | ((red & 255) << 16) | ((green & 255) << 8) | (blue & 255)


def argb_from_linrgb(linrgb: Sequence[float]) -> int:
    """Packs linear channels (0..100) into an opaque ARGB int."""
    r = delinearized(linrgb[0])
    g = delinearized(linrgb[1])
    b = delinearized(linrgb[2])
    return argb_from_rgb(r, g, b)


def alpha_from_argb(argb: int) -> int:
    return (argb >> 24) & 255


def red_from_argb(argb: int) -> int:
    return (argb >> 16) & 255


def green_from_argb(argb: int) -> int:
    return (argb >> 8) & 255


def blue_from_argb(argb: int) -> int:
    return argb & 255


def is_opaque(argb: int) -> bool:
    return alpha_from_argb(argb) >= 255


def argb_from_xyz(x: float, y: float, z: float) -> int:
    """Converts XYZ (Y = 100 for white) to an opaque, gamut-clipped ARGB int."""
    linear = np.dot(np.array([x, y, z], dtype=np.float64), M_XYZ_TO_SRGB_T)
    return argb_from_linrgb(linear)


def xyz_from_argb(argb: int) -> ArrayFloat:
    """Converts an ARGB int to XYZ (Y = 100 for white); alpha is ignored."""
    linear = np.array([
        linearized(red_from_argb(argb)),
        linearized(green_from_argb(argb)),
        linearized(blue_from_argb(argb)),
    ], dtype=np.float64)
    return np.dot(linear, M_SRGB_TO_XYZ_T)


def argb_from_lab(l: float, a: float, b: float) -> int:
    """Converts CIE L*a*b* (D65) to an ARGB int."""
    fy = (l + 16.0) / 116.0
    fx = a / 500.0 + fy
    fz = fy - b / 200.0
    xyz = np.array([_lab_invf(fx), _lab_invf(fy), _lab_invf(fz)]) * WHITE_POINT_D65
    return argb_from_xyz(float(xyz[0]), float(xyz[1]), float(xyz[2]))


def lab_from_argb(argb: int) -> ArrayFloat:
    """Converts an ARGB int to CIE L*a*b* (D65) as ``[L, a, b]``."""
    xyz_norm = xyz_from_argb(argb) / WHITE_POINT_D65
    fx = _lab_f(float(xyz_norm[0]))
    fy = _lab_f(float(xyz_norm[1]))
    fz = _lab_f(float(xyz_norm[2]))
    return np.array([116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)], dtype=np.float64)


def argb_from_lstar(lstar: float) -> int:
    """Returns the neutral grey whose L* matches *lstar*."""
    component = delinearized(y_from_lstar(lstar))
    return argb_from_rgb(component, component, component)


def lstar_from_argb(argb: int) -> float:
    """L* of an ARGB color."""
    y = float(xyz_from_argb(argb)[1])
    return 116.0 * _lab_f(y / 100.0) - 16.0


def y_from_lstar(lstar: float) -> float:
    """
    Converts L* to relative luminance Y.

    L* is perceptually linear, Y is physically linear; both describe the
    same quantity.  L* = 0 maps to Y = 0 and L* = 100 to Y = 100.
    """
    return 100.0 * _lab_invf((lstar + 16.0) / 116.0)


def lstar_from_y(y: float) -> float:
    """Converts relative luminance Y (0..100) to L*."""
    return _lab_f(y / 100.0) * 116.0 - 16.0


def white_point_d65() -> Vec3:
    return (float(WHITE_POINT_D65[0]), float(WHITE_POINT_D65[1]), float(WHITE_POINT_D65[2]))


# =============================================================================
# 4. HEX STRINGS
# =============================================================================

_HEX_DIGITS: Final[frozenset] = frozenset("0123456789abcdefABCDEF")


def hex_from_argb(argb: int) -> str:
    """Formats an ARGB int as lower-case ``#rrggbb``; alpha is dropped."""
    return f"#{red_from_argb(argb):02x}{green_from_argb(argb):02x}{blue_from_argb(argb):02x}"


def argb_from_hex(hex_str: str) -> int:
    """
    Parses a hex color into an opaque ARGB int.

    Accepts 3, 6 or 8 hex digits, with or without a leading ``#``.  The
    3-digit form doubles each nibble; the 8-digit form is read as AARRGGBB
    and the alpha byte is discarded.

    Raises:
        ValueError: If the length is not 3, 6 or 8, or a character is not
            a hex digit.
    """
    digits = hex_str[1:] if hex_str.startswith("#") else hex_str
    if not digits or any(ch not in _HEX_DIGITS for ch in digits):
        raise ValueError(f"Invalid hex color {hex_str!r}: expected hex digits.")

    if len(digits) == 3:
        r, g, b = (int(ch * 2, 16) for ch in digits)
    elif len(digits) == 6:
        r, g, b = int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)
    elif len(digits) == 8:
        r, g, b = int(digits[2:4], 16), int(digits[4:6], 16), int(digits[6:8], 16)
    else:
        raise ValueError(
            f"Invalid hex color {hex_str!r}: expected 3, 6 or 8 digits, got {len(digits)}."
        )
    return argb_from_rgb(r, g, b)
