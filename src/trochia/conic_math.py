'''Stateless helper math shared by the anomaly solvers and orbit determination.

Hyperbolic functions are thin wrappers that always return Python floats so
that callers can mix them freely with scalar arithmetic.'''

import numpy as np
from typing import Tuple


def sinh(x: float) -> float:
    """Hyperbolic sine"""
    return float(np.sinh(x))


def cosh(x: float) -> float:
    """Hyperbolic cosine"""
    return float(np.cosh(x))


def asinh(x: float) -> float:
    """Inverse hyperbolic sine, defined for every finite x"""
    return float(np.arcsinh(x))


def atanh(x: float) -> float:
    """
    Inverse hyperbolic tangent.

    Parameters
    ----------
    x : float
        Argument, must satisfy |x| < 1

    Raises
    ------
    ValueError
        If |x| >= 1 or x is not finite.

    Notes
    -----
    Loses precision as |x| -> 1, so the hyperbolic anomaly of a state is
    recovered with asinh of the aligned y coordinate instead.
    """
    if not np.isfinite(x) or abs(x) >= 1.0:
        raise ValueError(f"atanh argument must satisfy |x| < 1, got {x}")
    return float(np.arctanh(x))


def rotate(x: float, y: float, angle: float) -> Tuple[float, float]:
    """Rotate the vector (x, y) counterclockwise by angle [rad]."""
    R = np.array([
        [np.cos(angle), -np.sin(angle)],
        [np.sin(angle),  np.cos(angle)]
    ])
    xr, yr = R @ np.array([x, y], dtype=float)
    return float(xr), float(yr)


def wrap_angle(angle: float) -> float:
    """Wrap an angle [rad] into the interval (-pi, pi]."""
    wrapped = float(np.arctan2(np.sin(angle), np.cos(angle)))
    if wrapped == -np.pi:
        return float(np.pi)
    return wrapped
