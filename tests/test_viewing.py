"""Tests for tinta_viewing - viewing conditions and the default provider."""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from tinta_viewing import (
    ViewingConditions,
    default_viewing_conditions,
    resolve_viewing_conditions,
)


class TestDefaultConditions:
    """Values of the default environment."""

    def test_derived_values(self):
        vc = default_viewing_conditions()
        assert vc.n == pytest.approx(0.18418652, abs=1e-6)
        assert vc.z == pytest.approx(1.909169, abs=1e-5)
        assert vc.nbb == pytest.approx(1.016919, abs=1e-4)
        assert vc.ncb == vc.nbb
        assert vc.c == pytest.approx(0.69)
        assert vc.nc == pytest.approx(1.0)
        assert vc.fl == pytest.approx(0.3884, abs=1e-3)
        assert vc.f_l_root == pytest.approx(vc.fl ** 0.25)
        assert vc.aw == pytest.approx(29.98, abs=0.05)

    def test_rgb_d_near_unity(self):
        vc = default_viewing_conditions()
        assert len(vc.rgb_d) == 3
        for value in vc.rgb_d:
            assert 0.9 < value < 1.1

    def test_make_matches_default(self):
        assert ViewingConditions.make() == default_viewing_conditions()


class TestProvider:
    """Compute-once default provider."""

    def test_same_instance(self):
        assert default_viewing_conditions() is default_viewing_conditions()

    def test_same_instance_across_threads(self):
        barrier = threading.Barrier(8)

        def fetch(_):
            barrier.wait()
            return default_viewing_conditions()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(fetch, range(8)))
        assert all(vc is results[0] for vc in results)

    def test_resolve(self):
        custom = ViewingConditions.make(surround=0.0)
        assert resolve_viewing_conditions(None) is default_viewing_conditions()
        assert resolve_viewing_conditions(custom) is custom


class TestMake:
    """Construction and validation."""

    def test_hashable_and_immutable(self):
        vc = ViewingConditions.make(background_lstar=20.0)
        assert hash(vc) == hash(ViewingConditions.make(background_lstar=20.0))
        with pytest.raises(AttributeError):
            vc.n = 1.0

    def test_dark_surround(self):
        vc = ViewingConditions.make(surround=0.0)
        assert vc.c == pytest.approx(0.525)
        assert vc.nc == pytest.approx(0.8)

    def test_discounting_illuminant_gives_full_adaptation(self):
        vc = ViewingConditions.make(discounting_illuminant=True)
        assert vc.rgb_d != default_viewing_conditions().rgb_d

    def test_black_background_is_finite(self):
        vc = ViewingConditions.make(background_lstar=0.0)
        assert vc.n > 0.0
        assert vc.nbb < float("inf")

    @pytest.mark.parametrize("surround", [-0.1, 2.5])
    def test_invalid_surround(self, surround):
        with pytest.raises(ValueError):
            ViewingConditions.make(surround=surround)

    def test_invalid_white_point(self):
        with pytest.raises(ValueError):
            ViewingConditions.make(white_point=(95.0, 0.0, 108.0))
        with pytest.raises(ValueError):
            ViewingConditions.make(white_point=(95.0, 100.0))
