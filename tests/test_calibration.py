"""
Tests for depth calibration and the golden-section search.
"""

import pytest

from vsa_calculator.core.calibration import calibrate_depth_for_target_vsa, golden_section_min
from vsa_calculator.core.results import compute_vsa_m3_at_depth


class TestGoldenSection:

    def test_parabola(self):
        x = golden_section_min(lambda x: (x - 2.0) ** 2, 0.0, 5.0, iters=60, tol=1e-6)
        assert x == pytest.approx(2.0, abs=1e-4)

    def test_minimum_at_bound(self):
        x = golden_section_min(lambda x: x, 1.0, 3.0, iters=60, tol=1e-6)
        assert x == pytest.approx(1.0, abs=1e-4)


class TestCalibration:

    @pytest.mark.parametrize("h0", [20.0, 40.0, 60.0, 70.0])
    def test_round_trip_moc(self, hasanoglu, h0):
        """The Vsa computed at a depth calibrates back to that depth."""
        layers = hasanoglu["layers"]
        target = compute_vsa_m3_at_depth(layers, 1900, h0, "MOC")
        depth = calibrate_depth_for_target_vsa(layers, 1900, target, formula="MOC")
        assert depth == pytest.approx(h0, abs=0.01)

    def test_round_trip_exact(self, hasanoglu):
        layers = hasanoglu["layers"]
        target = compute_vsa_m3_at_depth(layers, 1900, 40.0, "EXACT")
        depth = calibrate_depth_for_target_vsa(layers, 1900, target)
        assert depth == pytest.approx(40.0, abs=1.0)

    def test_seed_depth(self, hasanoglu):
        layers = hasanoglu["layers"]
        target = compute_vsa_m3_at_depth(layers, 1900, 40.0, "MOC")
        depth = calibrate_depth_for_target_vsa(layers, 1900, target, seed_depth=40.0, formula="MOC")
        assert depth == pytest.approx(40.0, abs=0.01)

    def test_rounded_to_centimetres(self, hasanoglu):
        depth = calibrate_depth_for_target_vsa(hasanoglu["layers"], 1900, 250.0, formula="MOC")
        assert depth == round(depth, 2)

    def test_unreachable_target_returns_bound(self, hasanoglu):
        """A target above every attainable Vsa ends at the profile depth."""
        depth = calibrate_depth_for_target_vsa(hasanoglu["layers"], 1900, 10000.0, formula="MOC")
        assert depth == pytest.approx(85.0, abs=0.01)

    def test_h_max_capped_at_profile_depth(self, three_layers):
        depth = calibrate_depth_for_target_vsa(three_layers, 1900, 10000.0, h_max=500.0, formula="MOC")
        assert depth <= 30.0

    def test_empty_profile(self):
        assert calibrate_depth_for_target_vsa([], 1900, 300.0) is None

    def test_unknown_formula(self, three_layers):
        with pytest.raises(ValueError):
            calibrate_depth_for_target_vsa(three_layers, 1900, 300.0, formula="M9")
