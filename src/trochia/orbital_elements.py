'''Planar orbital element set for two-body motion about a unit-GM center
OrbitalElements class definition and regime-specific conic geometry'''

import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .config import config


# define an enumerated list of conic regimes
class ConicType(Enum):
    ELLIPSE = 'ellipse'         # 0 <= e < 1, circles included
    PARABOLA = 'parabola'       # e == 1
    HYPERBOLA = 'hyperbola'     # e > 1


"""
Regime-specific derived geometry.
Computed once from (l, e, theta0) when an OrbitalElements is constructed and
never stored independently of it.
"""
@dataclass(frozen=True)
class EllipseGeometry:
    """
    Derived ellipse (or circle) parameters.

    Attributes
    ----------
    a : float
        Semi-major axis, l^2 / (1 - e^2)
    b : float
        Semi-minor axis, a * sqrt(1 - e^2)
    cx, cy : float
        Offset of the ellipse center from the gravitational center
    """
    a: float
    b: float
    cx: float
    cy: float


@dataclass(frozen=True)
class ParabolaGeometry:
    """
    Derived parabola parameters.

    Attributes
    ----------
    p : float
        Semi-latus rectum, l^2
    q : float
        Periapsis distance, l^2 / 2
    """
    p: float
    q: float


@dataclass(frozen=True)
class HyperbolaGeometry:
    """
    Derived hyperbola parameters.

    Attributes
    ----------
    a : float
        Semi-major axis magnitude, l^2 / (e^2 - 1)
    b : float
        Semi-minor axis, a * sqrt(e^2 - 1)
    """
    a: float
    b: float


ConicGeometry = Union[EllipseGeometry, ParabolaGeometry, HyperbolaGeometry]


class OrbitalElements:
    """
    Represents a planar Keplerian orbit about a center with GM = 1.

    The element set is (l, e, theta0, T):
    angular momentum l = r^2 * dtheta/dt (signed, negative is retrograde),
    eccentricity e, periapsis angle theta0 measured from the +x axis, and
    periapsis epoch T, the simulated time of a periapsis passage. For
    ellipses T is one representative epoch, all others differ by whole
    periods.

    OrbitalElements is immutable, create a new instance to change it.
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, l, e, theta0=0.0, T=0.0, validate=True):
        """
        Create orbital elements.

        Parameters
        ----------
        l : float
            Signed angular momentum, must be nonzero
        e : float
            Eccentricity, must be >= 0
        theta0 : float, optional
            Periapsis angle [rad] (default 0)
        T : float, optional
            Periapsis epoch in simulated time (default 0)
        validate : bool, optional
            Whether to validate elements (default True)
        """
        self._l = float(l)
        self._e = float(e)
        self._theta0 = float(theta0)
        self._T = float(T)
        if validate:
            self._validate()

        # select the regime once; propagation dispatches on it
        if self._e < 1:
            self._conic_type = ConicType.ELLIPSE
        elif self._e == 1:
            self._conic_type = ConicType.PARABOLA
        else:
            self._conic_type = ConicType.HYPERBOLA
        self._geometry = self._compute_geometry()

    # ========== VALIDATION ==========
    def _validate(self):
        """Check that elements describe a supported orbit"""
        if not np.all(np.isfinite([self._l, self._e, self._theta0, self._T])):
            raise ValueError("Elements contain NaN or Inf")
        if self._l == 0:
            raise ValueError(
                "Zero angular momentum (radial fall) is not supported")
        if self._e < 0:
            raise ValueError(f"Eccentricity must be non-negative, got {self._e}")

    def _compute_geometry(self) -> ConicGeometry:
        l2 = self._l**2
        e = self._e
        if self._conic_type == ConicType.ELLIPSE:
            a = l2 / (1 - e**2)
            b = a * np.sqrt(1 - e**2)
            return EllipseGeometry(
                a=float(a),
                b=float(b),
                cx=float(-a * e * np.cos(self._theta0)),
                cy=float(-a * e * np.sin(self._theta0)))
        elif self._conic_type == ConicType.PARABOLA:
            return ParabolaGeometry(p=l2, q=l2 / 2)
        else:
            a = l2 / (e**2 - 1)
            return HyperbolaGeometry(a=float(a), b=float(a * np.sqrt(e**2 - 1)))

    # ========== ALTERNATE CONSTRUCTORS ==========
    @classmethod
    def from_cartesian(cls, t, x, y, vx, vy):
        """
        Determine the orbit through a Cartesian state at simulated time t.

        Returns
        -------
        OrbitalElements

        Raises
        ------
        ValueError
            If the state is degenerate (r = 0 or zero angular momentum)
        """
        from .maneuver import determine_orbit
        result = determine_orbit(t, x, y, vx, vy)
        if result is None:
            raise ValueError(
                f"Cannot determine an orbit from degenerate state "
                f"({x}, {y}, {vx}, {vy})")
        return result[0]

    # ========== PROPERTY ACCESS ==========
    @property
    def l(self) -> float:
        """Signed angular momentum"""
        return self._l

    @property
    def angular_momentum(self) -> float:
        """Signed angular momentum (alias of l)"""
        return self._l

    @property
    def e(self) -> float:
        """Eccentricity"""
        return self._e

    @property
    def eccentricity(self) -> float:
        """Eccentricity (alias of e)"""
        return self._e

    @property
    def theta0(self) -> float:
        """Periapsis angle [rad]"""
        return self._theta0

    @property
    def periapsis_angle(self) -> float:
        """Periapsis angle [rad] (alias of theta0)"""
        return self._theta0

    @property
    def T(self) -> float:
        """Periapsis epoch"""
        return self._T

    @property
    def periapsis_epoch(self) -> float:
        """Periapsis epoch (alias of T)"""
        return self._T

    @property
    def conic_type(self) -> ConicType:
        return self._conic_type

    @property
    def geometry(self) -> ConicGeometry:
        """Regime-specific derived geometry"""
        return self._geometry

    @property
    def sense(self) -> int:
        """+1 for prograde (counterclockwise) motion, -1 for retrograde"""
        return 1 if self._l > 0 else -1

    @property
    def a(self) -> float:
        """Semi-major axis (magnitude, undefined for parabolas)"""
        if self._conic_type == ConicType.PARABOLA:
            raise AttributeError("Semi-major axis undefined for parabolic orbits")
        return self._geometry.a

    @property
    def b(self) -> float:
        """Semi-minor axis (undefined for parabolas)"""
        if self._conic_type == ConicType.PARABOLA:
            raise AttributeError("Semi-minor axis undefined for parabolic orbits")
        return self._geometry.b

    @property
    def center(self):
        """Center of the ellipse relative to the gravitational center"""
        if self._conic_type != ConicType.ELLIPSE:
            raise AttributeError("Center only defined for elliptic orbits")
        return (self._geometry.cx, self._geometry.cy)

    # ========== ORBITAL PROPERTIES ==========
    def period(self) -> float:
        """
        Calculate orbital period 2*pi*a^1.5

        Raises
        ------
        ValueError
            For parabolic/hyperbolic orbits
        """
        if self._conic_type != ConicType.ELLIPSE:
            raise ValueError("Orbital period undefined for parabolic/hyperbolic orbits")
        return float(2 * np.pi * self._geometry.a**1.5)

    def mean_motion(self) -> float:
        """Mean motion a^-1.5 [rad per time unit] (elliptic orbits only)"""
        if self._conic_type != ConicType.ELLIPSE:
            raise ValueError("Mean motion undefined for parabolic/hyperbolic orbits")
        return float(self._geometry.a**-1.5)

    def specific_energy(self) -> float:
        """Specific orbital energy (e^2 - 1) / (2 l^2)"""
        return (self._e**2 - 1) / (2 * self._l**2)

    def periapsis_distance(self) -> float:
        """Closest approach distance l^2 / (1 + e)"""
        return self._l**2 / (1 + self._e)

    def state_at(self, t, seed=None):
        """
        Cartesian state [x, y, vx, vy] at simulated time t.

        Parameters
        ----------
        t : float
            Simulated time
        seed : float, optional
            Warm-start anomaly for the root solve
        """
        from .propagator import propagate
        state, _ = propagate(self, t, seed=seed)
        return state

    # ========== UTILITY METHODS ==========
    def copy(self):
        """Create a copy of the orbital elements"""
        return OrbitalElements(self._l, self._e, self._theta0, self._T,
                               validate=False)

    def to_numpy(self) -> np.ndarray:
        """Element vector [l, e, theta0, T] as a read-only array"""
        arr = np.array([self._l, self._e, self._theta0, self._T])
        arr.flags.writeable = False
        return arr

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return 4

    def __getitem__(self, key):
        return self.to_numpy()[key]

    def __iter__(self):
        return iter((self._l, self._e, self._theta0, self._T))

    def __repr__(self):
        return (f"OrbitalElements(l={self._l!r}, e={self._e!r}, "
                f"theta0={self._theta0!r}, T={self._T!r})")

    def __str__(self):
        lines = [f"{self._conic_type.value.capitalize()} Orbit:",
                 f"  l      = {self._l:12.6f}",
                 f"  e      = {self._e:12.6f}",
                 f"  theta0 = {np.degrees(self._theta0):12.4f}°",
                 f"  T      = {self._T:12.4f}"]
        if self._conic_type != ConicType.PARABOLA:
            lines.append(f"  a      = {self._geometry.a:12.4f}")
        return "\n".join(lines)

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, OrbitalElements):
            return False
        return (self._conic_type == other._conic_type and
                np.allclose(self.to_numpy(), other.to_numpy(),
                            rtol=config.EQUALITY_RTOL,
                            atol=config.EQUALITY_ATOL))

    def __hash__(self):
        #Hash with rounding to match equality
        rounded = tuple(round(x, config.HASH_DECIMALS) for x in self)
        return hash((self._conic_type, rounded))
