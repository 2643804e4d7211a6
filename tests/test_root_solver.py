"""
Test suite for the hybrid root solver and conic helper math.

Tests cover:
- Damped Newton-Raphson convergence and failure reporting
- Bisection fallback when Newton cannot proceed
- Bracket expansion and iteration ceilings
- Hyperbolic helper functions and their domain checks
"""

import pytest
import numpy as np

from trochia import temp_config
from trochia.root_solver import (
    newton_raphson, bracketed_bisection, find_root,
    SolverError, RootNotBracketedError, SolverConvergenceError,
)
from trochia.conic_math import sinh, cosh, asinh, atanh, rotate, wrap_angle


class TestNewtonRaphson:
    """Test the damped Newton iteration on its own."""

    def test_converges_to_sqrt2(self):
        """x^2 - 2 from a nearby seed converges to sqrt(2)."""
        root = newton_raphson(lambda x: x**2 - 2, lambda x: 2 * x, 1.0)
        assert root is not None
        assert np.isclose(root, np.sqrt(2), rtol=0, atol=1e-9)

    def test_returns_seed_when_already_root(self):
        """A seed that already satisfies the tolerance is returned as-is."""
        root = newton_raphson(lambda x: x - 3.0, lambda x: 1.0, 3.0)
        assert root == 3.0

    def test_zero_derivative_reports_failure(self):
        """f'(seed) = 0 cannot produce a Newton step."""
        root = newton_raphson(lambda x: x**3 - 5, lambda x: 3 * x**2, 0.0)
        assert root is None

    def test_nan_seed_reports_failure(self):
        """A NaN seed is rejected immediately."""
        root = newton_raphson(lambda x: x - 1, lambda x: 1.0, np.nan)
        assert root is None

    def test_divergent_iteration_reports_failure(self):
        """Newton on arctan diverges from far seeds."""
        root = newton_raphson(np.arctan, lambda x: 1 / (1 + x**2), 3.0)
        assert root is None

    def test_iteration_budget(self):
        """An exhausted iteration budget reports failure."""
        root = newton_raphson(lambda x: x**2 - 2, lambda x: 2 * x, 100.0,
                              max_iter=2)
        assert root is None


class TestBracketedBisection:
    """Test the bracketing bisection/secant solver."""

    def test_cubic_root(self):
        """Finds the real cube root of 5."""
        root = bracketed_bisection(lambda x: x**3 - 5)
        assert np.isclose(root, 5**(1 / 3), rtol=0, atol=1e-8)

    def test_decreasing_function(self):
        """Sign-based updates work for decreasing functions."""
        root = bracketed_bisection(lambda x: 0.25 - x)
        assert np.isclose(root, 0.25, rtol=0, atol=1e-10)

    def test_far_root_with_seed(self):
        """Bracket is centered on the seed and expanded as needed."""
        root = bracketed_bisection(lambda x: x - 1000.5, x0=990.0)
        assert np.isclose(root, 1000.5, rtol=0, atol=1e-8)

    def test_far_root_without_seed(self):
        """Without a seed the bracket grows from [-1, 1]."""
        root = bracketed_bisection(lambda x: np.tanh(x - 300.0))
        assert np.isclose(root, 300.0, rtol=0, atol=1e-8)

    def test_exact_root_on_bracket_edge(self):
        """A root exactly on the initial bracket edge is returned."""
        root = bracketed_bisection(lambda x: x - 1.0)
        assert root == 1.0

    def test_no_sign_change_raises(self):
        """A function without a root exhausts the expansion budget."""
        with pytest.raises(RootNotBracketedError):
            bracketed_bisection(lambda x: x**2 + 1)

    def test_expansion_budget_from_config(self):
        """BRACKET_MAX_EXPANSIONS limits how far the bracket grows."""
        with temp_config(BRACKET_MAX_EXPANSIONS=3):
            with pytest.raises(RootNotBracketedError):
                bracketed_bisection(lambda x: x - 100.0)

    def test_iteration_ceiling_raises(self):
        """Exceeding BISECTION_MAX_ITER is surfaced as an error."""
        with temp_config(BISECTION_MAX_ITER=1):
            with pytest.raises(SolverConvergenceError):
                bracketed_bisection(lambda x: x**3 - 0.5)

    def test_errors_are_solver_errors(self):
        """Both failure modes share a common base class."""
        assert issubclass(RootNotBracketedError, SolverError)
        assert issubclass(SolverConvergenceError, SolverError)
        assert issubclass(SolverError, RuntimeError)


class TestFindRoot:
    """Test the hybrid solver entry point."""

    def test_falls_back_when_derivative_zero_at_seed(self):
        """f'(seed) = 0 makes Newton impossible; bisection still finds root."""
        root = find_root(lambda x: x**3 - 5, lambda x: 3 * x**2, x0=0.0)
        assert np.isclose(root, 5**(1 / 3), rtol=0, atol=1e-8)

    def test_falls_back_on_divergence(self):
        """Divergent Newton falls back to bisection."""
        root = find_root(np.arctan, lambda x: 1 / (1 + x**2), x0=3.0)
        assert np.isclose(root, 0.0, rtol=0, atol=1e-9)

    def test_nan_seed_uses_bisection(self):
        """A NaN seed behaves like a cold start."""
        root = find_root(lambda x: x - 0.7, lambda x: 1.0, x0=np.nan)
        assert np.isclose(root, 0.7, rtol=0, atol=1e-10)

    def test_no_derivative_uses_bisection(self):
        """Without f' the seed only centers the bracket."""
        root = find_root(lambda x: x**3 - 5, x0=1.5)
        assert np.isclose(root, 5**(1 / 3), rtol=0, atol=1e-8)

    @pytest.mark.parametrize("e,M", [(0.0, 1.0), (0.3, 2.5), (0.9, 0.1),
                                     (0.5, 40.0)])
    def test_warm_and_cold_start_agree(self, e, M):
        """Kepler's equation gives the same root from either path."""
        f = lambda E: E - e * np.sin(E) - M
        fp = lambda E: 1 - e * np.cos(E)
        cold = find_root(f, fp)
        warm = find_root(f, fp, x0=cold + 0.2)
        assert np.isclose(cold, warm, rtol=0, atol=1e-9)
        assert abs(f(cold)) < 1e-9


class TestConicMath:
    """Test hyperbolic helpers and frame rotation."""

    def test_hyperbolic_identity(self):
        for x in (-3.0, -0.5, 0.0, 1.2, 7.0):
            assert np.isclose(cosh(x)**2 - sinh(x)**2, 1.0, rtol=1e-9)

    def test_asinh_inverts_sinh(self):
        for x in (-20.0, -0.3, 0.0, 2.5, 18.0):
            assert np.isclose(asinh(sinh(x)), x, rtol=1e-14, atol=1e-15)

    def test_atanh_inverts_tanh(self):
        for x in (-2.0, -0.1, 0.0, 0.4, 3.0):
            assert np.isclose(atanh(np.tanh(x)), x, rtol=0, atol=1e-12)

    @pytest.mark.parametrize("x", [1.0, -1.0, 1.5, np.nan, np.inf])
    def test_atanh_domain(self, x):
        """Arguments outside (-1, 1) are precondition violations."""
        with pytest.raises(ValueError):
            atanh(x)

    def test_rotate_quarter_turn(self):
        x, y = rotate(1.0, 0.0, np.pi / 2)
        assert np.allclose([x, y], [0.0, 1.0], atol=1e-15)

    def test_rotate_round_trip(self):
        x, y = rotate(*rotate(3.0, -4.0, 0.7), -0.7)
        assert np.allclose([x, y], [3.0, -4.0], atol=1e-14)

    def test_wrap_angle(self):
        assert np.isclose(wrap_angle(3 * np.pi / 2), -np.pi / 2)
        assert np.isclose(wrap_angle(-np.pi), np.pi)
        assert np.isclose(wrap_angle(0.25), 0.25)
