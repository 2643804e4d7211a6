"""
Test suite for analytic Kepler propagation.

Tests cover:
- Periapsis states for each conic regime and both directions of motion
- Conservation of energy and angular momentum along the orbit
- Periodicity of elliptic orbits
- Continuity of the three regimes across e = 1
- Warm-start vs cold-start agreement
- Surfacing of solver failures
"""

import pytest
import numpy as np

from trochia import OE, temp_config, propagate, position
from trochia.propagator import solve_anomaly, time_of_anomaly
from trochia.root_solver import RootNotBracketedError


# Representative orbits: (name, l, e, theta0, T)
ORBITS = [
    ("circle", 5.0, 0.0, 0.3, 0.0),
    ("ellipse", 6.0, 0.5, 0.0, 0.0),
    ("eccentric_ellipse", 4.0, 0.95, -1.2, 35.0),
    ("retrograde_ellipse", -6.0, 0.1, np.pi, 0.0),
    ("parabola", 6.0, 1.0, 0.5, 10.0),
    ("retrograde_parabola", -5.0, 1.0, 2.0, -20.0),
    ("hyperbola", 6.0, 2.0, 0.0, 0.0),
    ("retrograde_hyperbola", -3.0, 1.4, -0.7, 100.0),
]
TIMES = [-300.0, -50.0, 0.0, 75.0, 400.0, 2500.0]


def energy(state):
    x, y, vx, vy = state
    return 0.5 * (vx**2 + vy**2) - 1 / np.hypot(x, y)


def angular_momentum(state):
    x, y, vx, vy = state
    return x * vy - y * vx


class TestPeriapsis:
    """At t = T every regime sits at periapsis on the theta0 axis."""

    def test_ellipse(self):
        state = position(OE(6.0, 0.5), 0.0)
        assert np.allclose(state, [24.0, 0.0, 0.0, 0.25], atol=1e-12)

    def test_parabola(self):
        state = position(OE(6.0, 1.0), 0.0)
        assert np.allclose(state, [18.0, 0.0, 0.0, 1 / 3], atol=1e-12)

    def test_hyperbola(self):
        state = position(OE(6.0, 2.0), 0.0)
        assert np.allclose(state, [12.0, 0.0, 0.0, 0.5], atol=1e-12)

    def test_retrograde_moves_clockwise(self):
        state = position(OE(-6.0, 0.5), 0.0)
        assert np.allclose(state, [24.0, 0.0, 0.0, -0.25], atol=1e-12)

    def test_rotation_by_theta0(self):
        state = position(OE(6.0, 0.5, theta0=np.pi / 2), 0.0)
        assert np.allclose(state, [0.0, 24.0, -0.25, 0.0], atol=1e-12)

    def test_periapsis_epoch_offsets_time(self):
        a = position(OE(6.0, 0.5, T=0.0), 123.0)
        b = position(OE(6.0, 0.5, T=100.0), 223.0)
        assert np.allclose(a, b, atol=1e-10)


class TestConservation:
    """Thrust-free propagation conserves energy and angular momentum."""

    @pytest.mark.parametrize("name,l,e,theta0,T", ORBITS,
                             ids=[o[0] for o in ORBITS])
    @pytest.mark.parametrize("t", TIMES)
    def test_invariants(self, name, l, e, theta0, T, t):
        el = OE(l, e, theta0, T)
        state = position(el, t)
        assert np.isclose(angular_momentum(state), l, rtol=1e-9)
        assert np.isclose(energy(state), el.specific_energy(),
                          rtol=1e-8, atol=1e-12)

    @pytest.mark.parametrize("name,l,e,theta0,T", ORBITS,
                             ids=[o[0] for o in ORBITS])
    def test_radius_on_conic(self, name, l, e, theta0, T):
        """r = l^2 / (1 + e cos(true anomaly)) holds along the orbit."""
        el = OE(l, e, theta0, T)
        for t in TIMES:
            x, y, _, _ = position(el, t)
            nu = np.arctan2(y, x) - theta0
            r_expected = l**2 / (1 + e * np.cos(nu))
            assert np.isclose(np.hypot(x, y), r_expected, rtol=1e-9)


class TestPeriodicity:
    """Elliptic orbits repeat after one period."""

    @pytest.mark.parametrize("l,e", [(5.0, 0.0), (6.0, 0.5), (4.0, 0.95),
                                     (-6.0, 0.1)])
    def test_one_period(self, l, e):
        el = OE(l, e, theta0=0.4, T=12.0)
        P = el.period()
        assert np.allclose(position(el, el.T), position(el, el.T + P),
                           atol=1e-8)

    def test_several_periods_from_arbitrary_time(self):
        el = OE(6.0, 0.5)
        t = 321.0
        assert np.allclose(position(el, t), position(el, t + 3 * el.period()),
                           atol=1e-7)


class TestRegimeContinuity:
    """Ellipse and hyperbola branches approach the parabola as e -> 1."""

    def test_converges_to_parabola(self):
        l, theta0, T, t = 6.0, 0.3, 0.0, 100.0
        parabola = position(OE(l, 1.0, theta0, T), t)

        def gap(e):
            return np.max(np.abs(position(OE(l, e, theta0, T), t) - parabola))

        for sign in (-1.0, 1.0):
            near = gap(1 + sign * 1e-5)
            far = gap(1 + sign * 1e-3)
            assert near < far
            assert near < 1e-2


class TestWarmStart:
    """Warm-started solves agree with cold starts."""

    @pytest.mark.parametrize("name,l,e,theta0,T", ORBITS,
                             ids=[o[0] for o in ORBITS])
    def test_seed_does_not_change_result(self, name, l, e, theta0, T):
        el = OE(l, e, theta0, T)
        for t in TIMES:
            cold, anomaly = propagate(el, t)
            warm, warm_anomaly = propagate(el, t, seed=anomaly + 0.05)
            assert np.allclose(cold, warm, rtol=1e-8, atol=1e-7)
            assert np.isclose(anomaly, warm_anomaly, rtol=0, atol=1e-8)

    def test_state_is_read_only(self):
        state, _ = propagate(OE(6.0, 0.5), 10.0)
        with pytest.raises(ValueError):
            state[0] = 0.0


class TestAnomalyTime:
    """time_of_anomaly is the forward map of solve_anomaly."""

    @pytest.mark.parametrize("name,l,e,theta0,T", ORBITS,
                             ids=[o[0] for o in ORBITS])
    def test_inverse(self, name, l, e, theta0, T):
        el = OE(l, e, theta0, T)
        for anomaly in (-1.5, -0.2, 0.0, 0.7, 2.0):
            t = time_of_anomaly(el, anomaly)
            assert np.isclose(solve_anomaly(el, t), anomaly, rtol=0, atol=1e-8)


class TestSolverFailure:
    """Solver failures propagate instead of yielding a wrong position."""

    def test_unbracketed_anomaly_raises(self):
        el = OE(6.0, 0.5)
        with temp_config(BRACKET_MAX_EXPANSIONS=0):
            with pytest.raises(RootNotBracketedError):
                propagate(el, 50 * el.period())
