"""Tests for vectorsweep.cumulative — trapezoidal definite integral."""
import numpy as np
import pytest

from vectorsweep.cumulative import definite_integral
from vectorsweep.errors import ShapeError


class TestDefiniteIntegral:
    def test_constant_is_exact(self):
        assert definite_integral([0, 1, 2], [1, 1, 1]) == 2.0

    def test_line_is_exact(self):
        assert definite_integral([0, 2], [0, 4]) == 4.0

    def test_piecewise_linear_is_exact(self):
        # tent: 0 -> 2 over [0, 1], back to 0 over [1, 3]
        assert definite_integral([0, 1, 3], [0, 2, 0]) == pytest.approx(3.0)

    def test_uneven_spacing(self):
        x = [0.0, 0.5, 2.0, 2.25]
        y = [1.0, 3.0, -1.0, 0.0]
        expected = 0.5 * (1 + 3) / 2 + 1.5 * (3 - 1) / 2 + 0.25 * (-1 + 0) / 2
        assert definite_integral(x, y) == pytest.approx(expected)

    def test_coarse_grid_is_approximate(self):
        # chords lie above a convex curve: x^2 on [0, 1] gives 0.5, not 1/3
        assert definite_integral([0, 1], [0, 1]) == 0.5

    def test_converges_on_fine_grid(self):
        x = np.linspace(0, np.pi, 2001)
        assert definite_integral(x, np.sin(x)) == pytest.approx(2.0, abs=1e-6)

    def test_returns_python_float(self):
        assert isinstance(definite_integral(np.arange(3.0), np.ones(3)), float)

    def test_too_short(self):
        with pytest.raises(ShapeError, match="at least 2"):
            definite_integral([0], [5])

    def test_empty(self):
        with pytest.raises(ShapeError):
            definite_integral([], [])

    def test_length_mismatch(self):
        with pytest.raises(ShapeError, match="same length"):
            definite_integral([0, 1, 2], [1, 1])

    def test_not_increasing(self):
        with pytest.raises(ShapeError, match="strictly increasing"):
            definite_integral([0, 2, 1], [1, 1, 1])

    def test_two_dimensional_rejected(self):
        with pytest.raises(ShapeError, match="one-dimensional"):
            definite_integral(np.zeros((2, 2)), np.zeros((2, 2)))
