'''Hybrid scalar root finder used to invert the time-anomaly relations.

A damped Newton-Raphson iteration is tried first when a derivative and a
warm-start seed are available. If it fails to converge within its budget
the solve falls back to a bracketed bisection that alternates plain
bisection steps with secant steps.'''

import numpy as np
from typing import Callable, Optional

from .config import config

ScalarFunction = Callable[[float], float]


class SolverError(RuntimeError):
    """Base class for root solver failures."""


class RootNotBracketedError(SolverError):
    """No sign change found after the allowed number of bracket expansions."""


class SolverConvergenceError(SolverError):
    """Bisection exceeded its hard iteration ceiling."""


def newton_raphson(f: ScalarFunction, fprime: ScalarFunction, x0: float,
                   tol: Optional[float] = None,
                   max_iter: Optional[int] = None) -> Optional[float]:
    """
    Damped Newton-Raphson iteration with successive over-relaxation.

    Each step blends the current iterate with the full Newton update:
    x_next = (1 - w) * x + w * (x - f(x)/f'(x)), w = config.NEWTON_RELAXATION

    Parameters
    ----------
    f, fprime : callable
        Function and its derivative
    x0 : float
        Starting point
    tol : float, optional
        Converged when |f(x)| <= tol or the step is <= tol
        (default config.SOLVER_TOL)
    max_iter : int, optional
        Iteration budget (default config.NEWTON_MAX_ITER)

    Returns
    -------
    float or None
        Root estimate, or None if the iteration did not converge or hit a
        zero/non-finite derivative.
    """
    tol = config.SOLVER_TOL if tol is None else tol
    max_iter = config.NEWTON_MAX_ITER if max_iter is None else max_iter
    w = config.NEWTON_RELAXATION

    x = float(x0)
    if not np.isfinite(x):
        return None
    for _ in range(max_iter):
        y = f(x)
        if not np.isfinite(y):
            return None
        if abs(y) <= tol:
            return x
        yp = fprime(x)
        if yp == 0 or not np.isfinite(yp):
            return None
        x_next = (1 - w) * x + w * (x - y / yp)
        if not np.isfinite(x_next):
            return None
        if abs(x_next - x) <= tol:
            return x_next
        x = x_next
    return None


def bracketed_bisection(f: ScalarFunction, x0: Optional[float] = None,
                        tol: Optional[float] = None) -> float:
    """
    Find a root of f by bracketing followed by bisection/secant refinement.

    The bracket starts at [x0 - 1, x0 + 1] (or [-1, 1] without a seed) and its
    half-width doubles until f changes sign across it. The bracket is then
    shrunk by alternating a bisection step and a secant step, each replacing
    whichever endpoint shares the sign of the new point.

    Parameters
    ----------
    f : callable
        Continuous function with a single root in the search domain
    x0 : float, optional
        Center of the initial bracket
    tol : float, optional
        Stop once |f| <= tol or the bracket width <= tol
        (default config.SOLVER_TOL)

    Returns
    -------
    float
        Root estimate

    Raises
    ------
    RootNotBracketedError
        If no sign change is found within config.BRACKET_MAX_EXPANSIONS
    SolverConvergenceError
        If refinement exceeds config.BISECTION_MAX_ITER iterations
    """
    tol = config.SOLVER_TOL if tol is None else tol
    center = 0.0 if x0 is None or not np.isfinite(x0) else float(x0)

    half_width = 1.0
    lo, hi = center - half_width, center + half_width
    y_lo, y_hi = f(lo), f(hi)
    expansions = 0
    while not y_lo * y_hi <= 0:
        if expansions >= config.BRACKET_MAX_EXPANSIONS:
            raise RootNotBracketedError(
                f"No sign change found in [{lo}, {hi}] after {expansions} "
                f"expansions (f = {y_lo}, {y_hi})"
            )
        half_width *= 2
        lo, hi = center - half_width, center + half_width
        y_lo, y_hi = f(lo), f(hi)
        expansions += 1

    if y_lo == 0:
        return lo
    if y_hi == 0:
        return hi

    xm, ym = lo, y_lo
    for _ in range(config.BISECTION_MAX_ITER):
        # plain bisection step
        xm = 0.5 * (lo + hi)
        if xm <= lo or xm >= hi:
            # bracket cannot be split any further in floating point
            return xm
        ym = f(xm)
        if ym * y_lo > 0:
            lo, y_lo = xm, ym
        else:
            hi, y_hi = xm, ym

        # weighted (secant) step
        if np.isfinite(y_lo) and np.isfinite(y_hi) and y_hi != y_lo:
            xs = lo - y_lo / (y_hi - y_lo) * (hi - lo)
            if lo < xs < hi:
                xm = xs
                ym = f(xm)
                if ym * y_lo > 0:
                    lo, y_lo = xm, ym
                else:
                    hi, y_hi = xm, ym

        if abs(ym) <= tol or (hi - lo) <= tol:
            return xm

    raise SolverConvergenceError(
        f"Bisection did not converge within {config.BISECTION_MAX_ITER} "
        f"iterations (bracket [{lo}, {hi}], residual {ym})"
    )


def find_root(f: ScalarFunction, fprime: Optional[ScalarFunction] = None,
              tol: Optional[float] = None, x0: Optional[float] = None) -> float:
    """
    Solve f(x) = 0.

    Damped Newton-Raphson is attempted when both fprime and a finite seed x0
    are given; otherwise, or if Newton does not converge, bracketed
    bisection is used.

    Parameters
    ----------
    f : callable
        Function monotonic in the region of interest
    fprime : callable, optional
        Derivative of f
    tol : float, optional
        Solver tolerance (default config.SOLVER_TOL)
    x0 : float, optional
        Warm-start seed (e.g. the previous frame's anomaly)

    Returns
    -------
    float
        Root estimate

    Raises
    ------
    SolverError
        If the bisection fallback fails
    """
    if fprime is not None and x0 is not None and np.isfinite(x0):
        root = newton_raphson(f, fprime, x0, tol=tol)
        if root is not None:
            return root
    return bracketed_bisection(f, x0, tol=tol)
