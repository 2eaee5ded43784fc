"""Tests for the atmosphere and gravity models."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from launchsim.environment import (
    EARTH_RADIUS,
    GM_EARTH,
    Atmosphere,
    Gravity,
    density_at_altitude,
)

# =============================================================================
# Atmosphere Tests
# =============================================================================


class TestAtmosphere:
    """Test the troposphere model and its vacuum band."""

    @pytest.fixture
    def atm(self):
        return Atmosphere()

    def test_near_sea_level(self, atm):
        """Just above the pad the model is close to ISA sea level."""
        result = atm.at_altitude(1.0)
        assert result.temperature == pytest.approx(288.15, abs=0.01)
        assert result.pressure == pytest.approx(101.325, rel=1e-3)
        assert result.density == pytest.approx(1.225, rel=1e-2)

    def test_ten_kilometres(self, atm):
        """Troposphere values at 10 km (ISA: 223 K, 26.5 kPa, 0.41 kg/m^3)."""
        result = atm.at_altitude(10000.0)
        assert result.temperature == pytest.approx(223.15, abs=0.01)
        assert result.pressure == pytest.approx(26.5, rel=0.01)
        assert result.density == pytest.approx(0.414, rel=0.01)

    def test_density_decreases(self, atm):
        altitudes = [100.0, 1000.0, 5000.0, 20000.0, 40000.0]
        densities = [atm.density(h) for h in altitudes]
        assert all(a > b for a, b in zip(densities, densities[1:]))

    def test_zero_at_and_below_ground(self, atm):
        for h in (0.0, -10.0, -5000.0):
            result = atm.at_altitude(h)
            assert result.temperature == 0.0
            assert result.pressure == 0.0
            assert result.density == 0.0
            assert result.is_vacuum

    def test_zero_at_and_above_ceiling(self, atm):
        for h in (43000.0, 43000.1, 100000.0):
            assert atm.density(h) == 0.0
            assert atm.pressure(h) == 0.0
            assert atm.temperature(h) == 0.0

    def test_positive_inside_band(self, atm):
        assert atm.density(42999.0) > 0.0
        assert not atm.at_altitude(42999.0).is_vacuum

    def test_custom_ceiling(self):
        atm = Atmosphere(ceiling=10000.0)
        assert atm.density(9999.0) > 0.0
        assert atm.density(10000.0) == 0.0

    def test_invalid_ceiling(self):
        with pytest.raises(ValueError, match="ceiling must be positive"):
            Atmosphere(ceiling=0.0)

    def test_profile(self, atm):
        altitudes = np.array([0.0, 5000.0, 50000.0])
        profile = atm.profile(altitudes)
        assert set(profile) == {"altitude", "temperature", "pressure", "density"}
        assert profile["density"].shape == (3,)
        assert profile["density"][0] == 0.0
        assert profile["density"][1] == pytest.approx(atm.density(5000.0))
        assert profile["density"][2] == 0.0

    def test_density_shortcut(self, atm):
        assert density_at_altitude(3000.0) == pytest.approx(atm.density(3000.0))


# =============================================================================
# Gravity Tests
# =============================================================================


class TestGravity:
    """Test point-mass gravity in the launch frame."""

    @pytest.fixture
    def grav(self):
        return Gravity()

    def test_surface_gravity(self, grav):
        """About 9.82 m/s^2 straight down at the pad."""
        g = grav.acceleration(np.array([0.0, 0.0]))
        assert g[0] == pytest.approx(0.0, abs=1e-12)
        assert g[1] == pytest.approx(-GM_EARTH / EARTH_RADIUS**2, rel=1e-9)
        assert grav.magnitude(np.zeros(2)) == pytest.approx(9.82, abs=0.01)

    def test_points_to_center(self, grav):
        """Downrange, gravity tilts back toward the Earth's center."""
        g = grav.acceleration(np.array([100000.0, 0.0]))
        assert g[0] < 0.0
        assert g[1] < 0.0
        direction = grav.center - np.array([100000.0, 0.0])
        cross = g[0] * direction[1] - g[1] * direction[0]
        assert cross == pytest.approx(0.0, abs=1e-6)

    def test_inverse_square(self, grav):
        g0 = grav.magnitude(np.array([0.0, 0.0]))
        g1 = grav.magnitude(np.array([0.0, EARTH_RADIUS]))
        assert g1 == pytest.approx(g0 / 4.0, rel=1e-9)

    def test_force_scales_with_mass(self, grav):
        pos = np.array([0.0, 1000.0])
        assert_allclose(grav.force(pos, 10.0), 10.0 * grav.acceleration(pos))

    def test_altitude(self, grav):
        assert grav.altitude(np.array([0.0, 100.0])) == pytest.approx(100.0)
        assert grav.altitude(np.array([0.0, -5.0])) == pytest.approx(-5.0)

    def test_altitude_downrange_drops(self, grav):
        """Points at y = 0 away from the pad sit above the curved surface."""
        assert grav.altitude(np.array([100000.0, 0.0])) > 0.0

    def test_invalid_parameters(self):
        with pytest.raises(ValueError, match="gm must be positive"):
            Gravity(gm=0.0)
        with pytest.raises(ValueError, match="radius must be positive"):
            Gravity(radius=-1.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
