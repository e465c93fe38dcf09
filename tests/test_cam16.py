"""Tests for tinta_cam16 - forward/inverse appearance transform and distance."""
import pytest

from tinta_cam16 import Cam16
from tinta_colorutils import argb_from_rgb
from tinta_viewing import ViewingConditions

RED = 0xFFFF0000
GREEN = 0xFF00FF00
BLUE = 0xFF0000FF
WHITE = 0xFFFFFFFF
BLACK = 0xFF000000


class TestForward:
    """Known correlates under default conditions."""

    def test_red(self):
        cam = Cam16.from_int(RED)
        assert cam.hue == pytest.approx(27.408, abs=0.01)
        assert cam.chroma == pytest.approx(113.357, abs=0.01)
        assert cam.j == pytest.approx(46.445, abs=0.01)
        assert cam.m == pytest.approx(89.494, abs=0.01)
        assert cam.s == pytest.approx(91.889, abs=0.01)
        assert cam.q == pytest.approx(105.988, abs=0.01)

    def test_green(self):
        cam = Cam16.from_int(GREEN)
        assert cam.hue == pytest.approx(142.139, abs=0.01)
        assert cam.chroma == pytest.approx(108.410, abs=0.01)
        assert cam.j == pytest.approx(79.331, abs=0.01)

    def test_blue(self):
        cam = Cam16.from_int(BLUE)
        assert cam.hue == pytest.approx(282.788, abs=0.01)
        assert cam.chroma == pytest.approx(87.230, abs=0.01)
        assert cam.j == pytest.approx(25.465, abs=0.01)

    def test_white_is_slightly_blue(self):
        """D65 white reads as a faint blue under default conditions."""
        cam = Cam16.from_int(WHITE)
        assert 203.0 < cam.hue < 215.0
        assert cam.chroma == pytest.approx(2.869, abs=0.05)
        assert cam.j == pytest.approx(100.0, abs=1e-6)

    def test_black(self):
        cam = Cam16.from_int(BLACK)
        assert cam.j == 0.0
        assert cam.chroma == 0.0
        assert cam.q == 0.0

    def test_hue_always_in_range(self):
        levels = (0x00, 0x33, 0x80, 0xC4, 0xFF)
        for r in levels:
            for g in levels:
                for b in levels:
                    hue = Cam16.from_int(argb_from_rgb(r, g, b)).hue
                    assert 0.0 <= hue < 360.0

    def test_ucs_coordinates(self):
        cam = Cam16.from_int(RED)
        assert cam.j_star == pytest.approx(1.7 * cam.j / (1.0 + 0.007 * cam.j))


class TestInverse:
    """Appearance back to device color."""

    @pytest.mark.parametrize("argb", [RED, GREEN, BLUE, WHITE, BLACK, 0xFF6750A4, 0xFF7D5260])
    def test_round_trip(self, argb):
        assert Cam16.from_int(argb).to_int() == argb

    def test_from_jch_round_trip(self):
        cam = Cam16.from_int(0xFF6750A4)
        rebuilt = Cam16.from_jch(cam.j, cam.chroma, cam.hue)
        assert rebuilt.q == pytest.approx(cam.q)
        assert rebuilt.m == pytest.approx(cam.m)
        assert rebuilt.s == pytest.approx(cam.s)
        assert rebuilt.to_int() == 0xFF6750A4

    def test_from_ucs_round_trip(self):
        cam = Cam16.from_int(0xFF3A7BD5)
        rebuilt = Cam16.from_ucs(cam.j_star, cam.a_star, cam.b_star)
        assert rebuilt.j == pytest.approx(cam.j, abs=1e-9)
        assert rebuilt.chroma == pytest.approx(cam.chroma, abs=1e-9)
        assert rebuilt.hue == pytest.approx(cam.hue, abs=1e-9)

    def test_from_jch_zero_lightness(self):
        cam = Cam16.from_jch(0.0, 10.0, 120.0)
        assert cam.s == 0.0
        assert cam.to_int() == BLACK

    def test_other_conditions_round_trip(self):
        vc = ViewingConditions.make(background_lstar=20.0, surround=1.0)
        cam = Cam16.from_int(0xFF6750A4, vc)
        assert cam.viewed(vc) == 0xFF6750A4
        assert cam.hue != pytest.approx(Cam16.from_int(0xFF6750A4).hue, abs=1e-6)


class TestDistance:
    """CAM16-UCS color difference."""

    def test_identity(self):
        cam = Cam16.from_int(RED)
        assert cam.distance(cam) == 0.0

    def test_symmetric_and_positive(self):
        a = Cam16.from_int(RED)
        b = Cam16.from_int(0xFFFE0000)
        c = Cam16.from_int(BLUE)
        assert a.distance(b) == pytest.approx(b.distance(a))
        assert a.distance(b) > 0.0
        assert a.distance(c) > a.distance(b)
