# -*- coding: utf-8 -*-
"""
Tinta: Perceptual color appearance and tonal palettes
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: tinta_viewing.py — CAM16 viewing conditions.

In traditional color spaces a color is identified by its measurement
alone.  Color appearance models such as CAM16 also take the environment
into account, summarised here as *viewing conditions*.  For example,
white under the traditional midday-sun white point is measured by CAM16
as a slightly chromatic blue (roughly hue 209, chroma 3, lightness 100).

``ViewingConditions`` caches every intermediate of the CAM16 transform
that depends only on the environment.  Instances are immutable and
hashable so they can key per-condition caches (see ``tinta_hct``).

Default conditions
------------------
``default_viewing_conditions()`` returns the process-wide default
(D65, ~200 lux, mid-grey background, average surround).  It is built at
most once, under a lock, and then shared read-only.  Every public entry
point in the project takes an optional ``viewing_conditions`` argument
that falls back to this provider when ``None``.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Final, Optional, Sequence, Tuple

import numpy as np

from tinta_colorutils import ArrayFloat, WHITE_POINT_D65, lerp, y_from_lstar

__all__ = [
    "M_XYZ_TO_CAM16RGB",
    "M_XYZ_TO_CAM16RGB_T",
    "M_CAM16RGB_TO_XYZ",
    "M_CAM16RGB_TO_XYZ_T",
    "ViewingConditions",
    "default_viewing_conditions",
    "resolve_viewing_conditions",
]

logger = logging.getLogger(__name__)

# CAM16 cone-space matrix (XYZ -> "RGB" cone responses) and its inverse.
_M_XYZ_TO_CAM16RGB_BASE = np.array([
    [ 0.401288, 0.650173, -0.051461],
    [-0.250268, 1.204414,  0.045854],
    [-0.002079, 0.048952,  0.953127]
], dtype=np.float64)
M_XYZ_TO_CAM16RGB: Final[ArrayFloat] = _M_XYZ_TO_CAM16RGB_BASE
M_XYZ_TO_CAM16RGB_T: Final[ArrayFloat] = _M_XYZ_TO_CAM16RGB_BASE.T.copy()

_M_CAM16RGB_TO_XYZ_BASE = np.array([
    [ 1.86206786, -1.01125463,  0.14918677],
    [ 0.38752654,  0.62144744, -0.00897398],
    [-0.01584150, -0.03412294,  1.04996444]
], dtype=np.float64)
M_CAM16RGB_TO_XYZ: Final[ArrayFloat] = _M_CAM16RGB_TO_XYZ_BASE
M_CAM16RGB_TO_XYZ_T: Final[ArrayFloat] = _M_CAM16RGB_TO_XYZ_BASE.T.copy()

# Default environment: ~200 lux (11.72 cd/m^2), mid-grey surround.
DEFAULT_BACKGROUND_LSTAR: Final[float] = 50.0
DEFAULT_SURROUND: Final[float] = 2.0


def _default_adapting_luminance() -> float:
    return (200.0 / math.pi) * y_from_lstar(50.0) / 100.0


@dataclass(frozen=True, slots=True)
class ViewingConditions:
    """
    Environment-dependent CAM16 intermediates.

    The field names are the usual shorthand of the CAM16 literature
    (see Fairchild, *Color Appearance Models*); they are not documented
    individually.  Build instances with :meth:`make`.
    """
    n:        float
    aw:       float
    nbb:      float
    ncb:      float
    c:        float
    nc:       float
    rgb_d:    Tuple[float, float, float]
    fl:       float
    f_l_root: float
    z:        float

    @classmethod
    def make(
        cls,
        white_point: Optional[Sequence[float]] = None,
        adapting_luminance: Optional[float] = None,
        background_lstar: float = DEFAULT_BACKGROUND_LSTAR,
        surround: float = DEFAULT_SURROUND,
        discounting_illuminant: bool = False,
    ) -> "ViewingConditions":
        """
        Derives viewing conditions from physically meaningful inputs.

        Args:
            white_point: White point XYZ.  Default D65 (sunny afternoon).
            adapting_luminance: Luminance of the adapting field in cd/m^2;
                lux * 0.0586.  Default ~11.72 (200 lux).
            background_lstar: L* of the area surrounding the color.
            surround: 0.0 dark (cinema), 1.0 dim (TV at night), 2.0 average
                (no difference between the color and its surroundings).
            discounting_illuminant: Whether the observer discounts the tint
                of the illuminant.  False for self-luminous displays.

        Raises:
            ValueError: If *surround* is outside [0, 2] or the white point
                luminance is not positive.
        """
        if white_point is None:
            white_point = WHITE_POINT_D65
        if adapting_luminance is None:
            adapting_luminance = _default_adapting_luminance()
        if not 0.0 <= surround <= 2.0:
            raise ValueError(f"surround must be in [0, 2], got {surround}")
        # n = 0 would make nbb infinite
        background_lstar = max(0.1, background_lstar)

        xyz = np.asarray(white_point, dtype=np.float64)
        if xyz.shape != (3,):
            raise ValueError(f"white_point must have 3 components, got shape {xyz.shape}")
        if xyz[1] <= 0.0:
            raise ValueError(f"white_point Y must be positive, got {xyz[1]}")

        rgb_w = np.dot(xyz, M_XYZ_TO_CAM16RGB_T)

        f = 0.8 + surround / 10.0
        if f >= 0.9:
            c = lerp(0.59, 0.69, (f - 0.9) * 10.0)
        else:
            c = lerp(0.525, 0.59, (f - 0.8) * 10.0)

        if discounting_illuminant:
            d = 1.0
        else:
            d = f * (1.0 - (1.0 / 3.6) * math.exp((-adapting_luminance - 42.0) / 92.0))
        d = min(1.0, max(0.0, d))
        nc = f

        rgb_d = d * (100.0 / rgb_w) + 1.0 - d

        k = 1.0 / (5.0 * adapting_luminance + 1.0)
        k4 = k * k * k * k
        k4f = 1.0 - k4
        fl = k4 * adapting_luminance + 0.1 * k4f * k4f * math.pow(5.0 * adapting_luminance, 1.0 / 3.0)

        n = y_from_lstar(background_lstar) / float(xyz[1])
        z = 1.48 + math.sqrt(n)
        nbb = 0.725 / math.pow(n, 0.2)
        ncb = nbb

        rgb_af = np.power(fl * rgb_d * rgb_w / 100.0, 0.42)
        rgb_a = 400.0 * rgb_af / (rgb_af + 27.13)
        aw = (2.0 * rgb_a[0] + rgb_a[1] + 0.05 * rgb_a[2]) * nbb

        return cls(
            n=n,
            aw=float(aw),
            nbb=nbb,
            ncb=ncb,
            c=c,
            nc=nc,
            rgb_d=(float(rgb_d[0]), float(rgb_d[1]), float(rgb_d[2])),
            fl=fl,
            f_l_root=math.pow(fl, 0.25),
            z=z,
        )

    @property
    def rgb_d_array(self) -> ArrayFloat:
        return np.array(self.rgb_d, dtype=np.float64)


# ---------------------------------------------------------------------------
# Default provider
# ---------------------------------------------------------------------------
_DEFAULT: Optional[ViewingConditions] = None
_DEFAULT_LOCK = threading.Lock()


def default_viewing_conditions() -> ViewingConditions:
    """
    Returns the shared default ViewingConditions, building it on first use.

    Safe under concurrent first access: the instance is constructed at
    most once and every caller receives the same object.
    """
    global _DEFAULT
    vc = _DEFAULT
    if vc is not None:
        return vc
    with _DEFAULT_LOCK:
        if _DEFAULT is None:
            _DEFAULT = ViewingConditions.make()
            logger.debug("Built default viewing conditions: %s", _DEFAULT)
        return _DEFAULT


def resolve_viewing_conditions(viewing_conditions: Optional[ViewingConditions]) -> ViewingConditions:
    """Returns *viewing_conditions*, or the shared default when it is None."""
    if viewing_conditions is None:
        return default_viewing_conditions()
    return viewing_conditions
