"""Tests for tinta_colorutils - transfer functions, ARGB packing, Lab and hex."""
import math

import numpy as np
import pytest

from tinta_colorutils import (
    M_SRGB_TO_XYZ,
    WHITE_POINT_D65,
    alpha_from_argb,
    argb_from_hex,
    argb_from_lab,
    argb_from_lstar,
    argb_from_rgb,
    blue_from_argb,
    clamp_double,
    clamp_int,
    delinearized,
    difference_degrees,
    green_from_argb,
    hex_from_argb,
    is_opaque,
    lab_from_argb,
    lerp,
    linearized,
    lstar_from_argb,
    lstar_from_y,
    matrix_multiply,
    red_from_argb,
    rotation_direction,
    round_half_away,
    sanitize_degrees_double,
    sanitize_degrees_int,
    signum,
    white_point_d65,
    xyz_from_argb,
    y_from_lstar,
)


class TestMathHelpers:
    """Scalar helpers."""

    def test_signum(self):
        assert signum(-3.5) == -1.0
        assert signum(0.0) == 0.0
        assert signum(2.0) == 1.0

    def test_lerp(self):
        assert lerp(10.0, 20.0, 0.0) == 10.0
        assert lerp(10.0, 20.0, 1.0) == 20.0
        assert lerp(10.0, 20.0, 0.25) == pytest.approx(12.5)

    def test_clamp(self):
        assert clamp_int(0, 255, -4) == 0
        assert clamp_int(0, 255, 300) == 255
        assert clamp_int(0, 255, 17) == 17
        assert clamp_double(0.0, 100.0, 100.5) == 100.0
        assert clamp_double(0.0, 100.0, -0.1) == 0.0

    def test_sanitize_degrees(self):
        assert sanitize_degrees_int(-1) == 359
        assert sanitize_degrees_int(360) == 0
        assert sanitize_degrees_int(725) == 5
        assert sanitize_degrees_double(-0.5) == pytest.approx(359.5)
        assert sanitize_degrees_double(720.25) == pytest.approx(0.25)
        assert 0.0 <= sanitize_degrees_double(-1e-18) < 360.0

    def test_rotation_and_difference(self):
        assert rotation_direction(10.0, 20.0) == 1.0
        assert rotation_direction(20.0, 10.0) == -1.0
        assert rotation_direction(350.0, 10.0) == 1.0
        assert difference_degrees(350.0, 10.0) == pytest.approx(20.0)
        assert difference_degrees(0.0, 180.0) == pytest.approx(180.0)

    def test_round_half_away(self):
        """Halves round away from zero, unlike Python's round()."""
        assert round_half_away(2.5) == 3
        assert round_half_away(3.5) == 4
        assert round_half_away(-2.5) == -3
        assert round_half_away(2.4999) == 2

    def test_matrix_multiply_uses_rows(self):
        out = matrix_multiply([1.0, 0.0, 0.0], M_SRGB_TO_XYZ)
        assert np.allclose(out, M_SRGB_TO_XYZ[:, 0])


class TestTransferFunctions:
    """sRGB EOTF / OETF."""

    def test_endpoints(self):
        assert linearized(0) == 0.0
        assert linearized(255) == pytest.approx(100.0)
        assert delinearized(0.0) == 0
        assert delinearized(100.0) == 255

    def test_every_channel_round_trips(self):
        for channel in range(256):
            assert delinearized(linearized(channel)) == channel

    def test_delinearized_clamps(self):
        assert delinearized(-5.0) == 0
        assert delinearized(150.0) == 255
        assert delinearized(math.inf) == 255
        assert delinearized(math.nan) == 0


class TestArgb:
    """Packed ARGB helpers."""

    def test_pack_unpack(self):
        argb = argb_from_rgb(0x12, 0x34, 0x56)
        assert argb == 0xFF123456
        assert alpha_from_argb(argb) == 0xFF
        assert red_from_argb(argb) == 0x12
        assert green_from_argb(argb) == 0x34
        assert blue_from_argb(argb) == 0x56
        assert is_opaque(argb)
        assert not is_opaque(0x80123456)

    def test_xyz_of_white_is_d65(self):
        assert np.allclose(xyz_from_argb(0xFFFFFFFF), WHITE_POINT_D65, atol=1e-3)
        assert white_point_d65() == pytest.approx((95.047, 100.0, 108.883))

    def test_lab_round_trip(self):
        for argb in (0xFF000000, 0xFFFFFFFF, 0xFFFF0000, 0xFF6750A4, 0xFF00FF7F):
            lab = lab_from_argb(argb)
            assert argb_from_lab(lab[0], lab[1], lab[2]) == argb

    def test_lab_of_white(self):
        lab = lab_from_argb(0xFFFFFFFF)
        assert lab[0] == pytest.approx(100.0, abs=1e-4)
        assert lab[1] == pytest.approx(0.0, abs=1e-3)
        assert lab[2] == pytest.approx(0.0, abs=1e-3)


class TestLstar:
    """Tone (L*) helpers."""

    def test_black_and_white(self):
        assert lstar_from_argb(0xFF000000) == pytest.approx(0.0)
        assert lstar_from_argb(0xFFFFFFFF) == pytest.approx(100.0)

    def test_y_lstar_inverse(self):
        for lstar in (0.0, 5.0, 8.0, 18.0, 50.0, 73.3, 100.0):
            assert lstar_from_y(y_from_lstar(lstar)) == pytest.approx(lstar, abs=1e-9)

    def test_mid_grey(self):
        """L* 50 is Y ~18.42 and renders as #777777."""
        assert y_from_lstar(50.0) == pytest.approx(18.418651851244416)
        assert argb_from_lstar(50.0) == 0xFF777777


class TestHex:
    """Hex parsing and formatting."""

    def test_round_trip(self):
        assert hex_from_argb(argb_from_hex("#ff0000")) == "#ff0000"

    def test_short_form_matches_long_form(self):
        assert argb_from_hex("#fff") == argb_from_hex("#ffffff")
        assert argb_from_hex("abc") == 0xFFAABBCC

    def test_eight_digits_drop_alpha(self):
        assert argb_from_hex("#80ff0000") == 0xFFFF0000

    def test_output_is_lower_case(self):
        assert hex_from_argb(argb_from_hex("#ABCDEF")) == "#abcdef"

    def test_only_one_leading_hash_is_stripped(self):
        assert argb_from_hex("#fff") == 0xFFFFFFFF
        with pytest.raises(ValueError):
            argb_from_hex("##fff")

    @pytest.mark.parametrize("bad", ["", "#", "#12", "#12345", "#1234567", "#12345g", "##fff", "zzz"])
    def test_invalid_strings_raise(self, bad):
        with pytest.raises(ValueError) as excinfo:
            argb_from_hex(bad)
        assert repr(bad) in str(excinfo.value)
