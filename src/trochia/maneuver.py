'''Orbit determination from Cartesian state and impulsive maneuvers.

determine_orbit() is the inverse of propagate(): it maps a position and
velocity at simulated time t to the element set (l, e, theta0, T) whose
propagation reproduces that state at t. Thrust is modelled as an
instantaneous velocity change followed by a fresh orbit determination.'''

import numpy as np
from typing import Optional, Tuple

from .config import config
from .orbital_elements import OrbitalElements, ConicType
from .propagator import time_of_anomaly
from .conic_math import asinh, rotate, wrap_angle


def determine_orbit(t: float, x: float, y: float, vx: float,
                    vy: float) -> Optional[Tuple[OrbitalElements, float]]:
    """
    Compute orbital elements from a Cartesian state at simulated time t.

    Parameters
    ----------
    t : float
        Simulated time of the state
    x, y : float
        Position relative to the gravitational center
    vx, vy : float
        Velocity

    Returns
    -------
    (OrbitalElements, float) or None
        The elements and the closed-form anomaly of the state (usable as a
        warm-start seed). None when the state is degenerate: r = 0 has no
        defined direction and zero angular momentum is a radial fall.

    Notes
    -----
    For circular orbits (e = 0) there is no periapsis; theta0 is taken as the
    current polar angle, which puts the body at periapsis with T = t.
    """
    r = np.sqrt(x**2 + y**2)
    if r == 0:
        return None
    theta = np.arctan2(y, x)
    # rotate the velocity by -theta into the radial frame
    ct, st = x / r, y / r
    vr = vx * ct + vy * st
    vt = (vy * ct - vx * st) / r  # angular rate dtheta/dt
    l = r**2 * vt
    if l == 0:
        return None

    # eccentricity vector expressed relative to the current radius vector
    ex = l * r * vt - 1
    ey = l * vr
    e = np.sqrt(ex**2 + ey**2)
    if e < config.SNAP_TO_CIRCULAR:
        e = 0.0
    elif abs(e - 1) < config.SNAP_TO_PARABOLIC:
        e = 1.0

    if e == 0:
        elements = OrbitalElements(l, 0.0, theta, t)
        return elements, 0.0

    theta1 = np.arctan2(ey, ex)  # true anomaly, theta - theta0
    theta0 = wrap_angle(theta - theta1)
    shape = OrbitalElements(l, e, theta0, 0.0)
    s = shape.sense

    if shape.conic_type == ConicType.PARABOLA:
        anomaly = np.tan(theta1 / 2)
    else:
        # (x0, y0) are the coordinates in the periapsis-aligned frame
        x0, y0 = rotate(x, y, -theta0)
        a, b = shape.geometry.a, shape.geometry.b
        if shape.conic_type == ConicType.ELLIPSE:
            anomaly = np.arctan2(s * y0 / b, x0 / a + e)
        else:
            # y0 = s b sinh(E) stays well conditioned far out on the branch
            anomaly = asinh(s * y0 / b)

    time_since_periapsis = time_of_anomaly(shape, float(anomaly))
    elements = OrbitalElements(l, e, theta0, t - time_since_periapsis)
    return elements, float(anomaly)


def thrust_direction(vx: float, vy: float, heading_deg: float) -> float:
    """Direction [rad] of a burn offset by heading_deg from the velocity."""
    return float(np.arctan2(vy, vx) + np.radians(heading_deg))


def apply_thrust(vx: float, vy: float, speed_change: float,
                 heading_deg: float = 0.0) -> Tuple[float, float]:
    """
    Instantaneous (zero-duration) velocity change.

    Parameters
    ----------
    vx, vy : float
        Velocity before the burn
    speed_change : float
        Delta-v magnitude, negative values burn opposite the heading
    heading_deg : float, optional
        Offset of the burn from the current velocity direction [deg]

    Returns
    -------
    (float, float)
        Velocity after the burn
    """
    direction = thrust_direction(vx, vy, heading_deg)
    return (float(vx + speed_change * np.cos(direction)),
            float(vy + speed_change * np.sin(direction)))


def random_state(rng: np.random.Generator) -> Tuple[float, float, float, float]:
    """
    Sample a random Cartesian state.

    Radius is drawn from config.RANDOM_RADIUS_RANGE, the polar angle
    uniformly, and radial/tangential speeds from symmetric intervals set by
    config.RANDOM_RADIAL_SPEED and config.RANDOM_TANGENTIAL_SPEED.

    Returns
    -------
    (x, y, vx, vy)
    """
    r_min, r_max = config.RANDOM_RADIUS_RANGE
    r = rng.uniform(r_min, r_max)
    theta = rng.uniform(0, 2 * np.pi)
    vr = rng.uniform(-config.RANDOM_RADIAL_SPEED, config.RANDOM_RADIAL_SPEED)
    vt = rng.uniform(-config.RANDOM_TANGENTIAL_SPEED,
                     config.RANDOM_TANGENTIAL_SPEED)
    x, y = r * np.cos(theta), r * np.sin(theta)
    vx, vy = rotate(vr, vt, theta)
    return float(x), float(y), vx, vy
