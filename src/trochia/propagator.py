'''Analytic two-body propagation of OrbitalElements to an arbitrary time.

Each conic regime inverts its own time-anomaly relation with the hybrid
root finder and evaluates position/velocity in the periapsis-aligned frame
(periapsis on +x). A common final rotation by theta0 maps the result into
the reference frame. Units assume GM = 1.'''

import numpy as np
from typing import Callable, Dict, Optional, Tuple

from .orbital_elements import OrbitalElements, ConicType
from .root_solver import find_root
from .conic_math import sinh, cosh, rotate

# (x, y, vx, vy, anomaly) in the periapsis-aligned frame
_AlignedState = Tuple[float, float, float, float, float]


def _solve_ellipse(elements: OrbitalElements, dt: float,
                   seed: Optional[float]) -> _AlignedState:
    """Kepler's equation a^1.5 (E - e sin E) = t - T"""
    geo = elements.geometry
    a, b, e, s = geo.a, geo.b, elements.e, elements.sense
    k = a**1.5
    E = find_root(
        lambda E: k * (E - e * np.sin(E)) - dt,
        lambda E: k * (1 - e * np.cos(E)),
        x0=seed)
    Edot = 1 / (k * (1 - e * np.cos(E)))
    x = a * (np.cos(E) - e)
    y = s * b * np.sin(E)
    vx = -a * np.sin(E) * Edot
    vy = s * b * np.cos(E) * Edot
    return x, y, vx, vy, E


def _solve_hyperbola(elements: OrbitalElements, dt: float,
                     seed: Optional[float]) -> _AlignedState:
    """Hyperbolic Kepler equation a^1.5 (e sinh E - E) = t - T"""
    geo = elements.geometry
    a, b, e, s = geo.a, geo.b, elements.e, elements.sense
    k = a**1.5
    E = find_root(
        lambda E: k * (e * sinh(E) - E) - dt,
        lambda E: k * (e * cosh(E) - 1),
        x0=seed)
    Edot = 1 / (k * (e * cosh(E) - 1))
    x = a * (e - cosh(E))
    y = s * b * sinh(E)
    vx = -a * sinh(E) * Edot
    vy = s * b * cosh(E) * Edot
    return x, y, vx, vy, E


def _solve_parabola(elements: OrbitalElements, dt: float,
                    seed: Optional[float]) -> _AlignedState:
    """Barker's equation l^3/2 (D + D^3/3) = t - T, with D = tan(nu/2)"""
    l = elements.l
    k = l**3 / 2
    D = find_root(
        lambda D: k * (D + D**3 / 3) - dt,
        lambda D: k * (1 + D**2),
        x0=seed)
    x = l**2 / 2 * (1 - D**2)
    y = l**2 * D
    vy = 2 / (l * (1 + D**2))
    vx = -D * vy
    return x, y, vx, vy, D


_SOLVERS: Dict[ConicType, Callable[..., _AlignedState]] = {
    ConicType.ELLIPSE: _solve_ellipse,
    ConicType.PARABOLA: _solve_parabola,
    ConicType.HYPERBOLA: _solve_hyperbola,
}


def propagate(elements: OrbitalElements, t: float,
              seed: Optional[float] = None) -> Tuple[np.ndarray, float]:
    """
    Propagate orbital elements to simulated time t.

    Parameters
    ----------
    elements : OrbitalElements
        Orbit to evaluate
    t : float
        Simulated time
    seed : float, optional
        Anomaly from a previous solve on the same orbit, used to warm-start
        Newton-Raphson. Without it the solve starts from bisection.

    Returns
    -------
    state : np.ndarray
        Read-only array [x, y, vx, vy]
    anomaly : float
        Solved eccentric anomaly (ellipse), hyperbolic anomaly (hyperbola)
        or Barker parameter D = tan(nu/2) (parabola)

    Raises
    ------
    SolverError
        If the anomaly equation could not be solved
    """
    solver = _SOLVERS[elements.conic_type]
    x, y, vx, vy, anomaly = solver(elements, float(t) - elements.T, seed)

    # rotate from the periapsis-aligned frame by theta0
    X, Y = rotate(x, y, elements.theta0)
    VX, VY = rotate(vx, vy, elements.theta0)
    state = np.array([X, Y, VX, VY])
    state.flags.writeable = False
    return state, float(anomaly)


def position(elements: OrbitalElements, t: float) -> np.ndarray:
    """Cartesian state [x, y, vx, vy] at time t, solved from a cold start."""
    return propagate(elements, t)[0]


def solve_anomaly(elements: OrbitalElements, t: float,
                  seed: Optional[float] = None) -> float:
    """Regime-appropriate anomaly at time t."""
    return propagate(elements, t, seed=seed)[1]


def time_of_anomaly(elements: OrbitalElements, anomaly: float) -> float:
    """
    Simulated time at which the orbit reaches the given anomaly.

    This is the closed-form forward direction of the relations inverted by
    propagate(), so propagate(el, time_of_anomaly(el, E))[1] == E.
    """
    e = elements.e
    if elements.conic_type == ConicType.ELLIPSE:
        dt = elements.geometry.a**1.5 * (anomaly - e * np.sin(anomaly))
    elif elements.conic_type == ConicType.HYPERBOLA:
        dt = elements.geometry.a**1.5 * (e * sinh(anomaly) - anomaly)
    else:
        dt = elements.l**3 / 2 * (anomaly + anomaly**3 / 3)
    return float(elements.T + dt)
