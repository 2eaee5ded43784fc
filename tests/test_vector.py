"""Tests for the planar vector primitives."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from launchsim.vector import (
    EPSILON,
    left_normal,
    magnitude,
    projected_magnitude,
    safe_normalize,
    unit_vector,
)


class TestMagnitude:
    """Test vector length and normalization."""

    def test_magnitude(self):
        assert magnitude(np.array([3.0, 4.0])) == pytest.approx(5.0)

    def test_normalize(self):
        assert_allclose(safe_normalize(np.array([0.0, 2.0])), [0.0, 1.0])

    def test_normalize_tiny_vector_is_zero(self):
        """Vectors at or below epsilon have no direction."""
        v = np.array([EPSILON / 2, 0.0])
        assert_allclose(safe_normalize(v), [0.0, 0.0])

    def test_normalize_zero_vector(self):
        assert_allclose(safe_normalize(np.zeros(2)), [0.0, 0.0])


class TestProjectedMagnitude:
    """Test the perpendicular projection used for torques."""

    def test_perpendicular(self):
        """A force square to the axis projects at full strength."""
        result = projected_magnitude(np.array([10.0, 0.0]), np.array([0.0, 5.0]))
        assert result == pytest.approx(10.0)

    def test_parallel_is_zero(self):
        assert projected_magnitude(np.array([0.0, 10.0]), np.array([0.0, 1.0])) == 0.0

    def test_antiparallel_is_zero(self):
        assert projected_magnitude(np.array([0.0, -10.0]), np.array([0.0, 1.0])) == 0.0

    def test_oblique(self):
        """|v| * |sin(angle)| for a 30 degree offset."""
        v = 100.0 * unit_vector(np.pi / 2 + np.pi / 6)
        result = projected_magnitude(v, np.array([0.0, 1.0]))
        assert result == pytest.approx(50.0, rel=1e-9)

    def test_degenerate_inputs(self):
        assert projected_magnitude(np.zeros(2), np.array([1.0, 0.0])) == 0.0
        assert projected_magnitude(np.array([1.0, 0.0]), np.zeros(2)) == 0.0

    def test_never_negative(self):
        for angle in np.linspace(0.0, 2 * np.pi, 37):
            v = 5.0 * unit_vector(float(angle))
            assert projected_magnitude(v, np.array([1.0, 1.0])) >= 0.0


class TestDirections:
    """Test rotations and unit vectors."""

    def test_left_normal(self):
        assert_allclose(left_normal(np.array([1.0, 0.0])), [0.0, 1.0])
        assert_allclose(left_normal(np.array([0.0, 1.0])), [-1.0, 0.0])

    def test_unit_vector_upright(self):
        assert_allclose(unit_vector(np.pi / 2), [0.0, 1.0], atol=1e-12)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
