'''Maneuverable orbiting body
Orbit class definition, the object external collaborators drive'''

import numpy as np
from dataclasses import dataclass
from typing import Optional, Union, Sequence

from .config import config
from .orbital_elements import OrbitalElements, ConicType
from .propagator import propagate
from .maneuver import determine_orbit, apply_thrust, random_state
from .utils import validation_error, all_finite


@dataclass(frozen=True)
class StateVector:
    """
    Snapshot of a body's Cartesian state.

    Attributes
    ----------
    x, y : float
        Position
    vx, vy : float
        Velocity
    angle : float
        Facing offset from the velocity direction [deg]
    """
    x: float
    y: float
    vx: float
    vy: float
    angle: float = 0.0

    @property
    def heading(self) -> float:
        """Absolute facing direction [deg]: velocity direction plus offset"""
        return float(np.degrees(np.arctan2(self.vy, self.vx)) + self.angle)

    def to_numpy(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy])


@dataclass(frozen=True)
class OrbitStats:
    """Orbit summary for heads-up displays"""
    l: float
    e: float
    theta0: float
    theta: float


@dataclass
class SimulationState:
    """
    Transient per-body state, updated in place by Orbit.advance().

    anomaly holds the last solved anomaly and seeds the next solve;
    NaN means no usable seed.
    """
    t: float = 0.0
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    anomaly: float = float('nan')
    facing_offset: float = 0.0


class Orbit:
    """
    A body moving on a Keplerian orbit about a fixed center with GM = 1.

    The orbit owns its OrbitalElements (replaced by reset/thrust/randomize)
    and its SimulationState (updated by advance). Register `advance` with a
    SimulationClock to animate it.

    Parameters
    ----------
    name : str, optional
        Identifier for the body
    seed : int or np.random.Generator, optional
        Randomness source for randomize()
    """
    def __init__(self, name: Optional[str] = None,
                 seed: Union[int, np.random.Generator, None] = None):
        self._name = name
        self._elements: Optional[OrbitalElements] = None
        self._state = SimulationState()
        self._rng = np.random.default_rng(seed)

    # ========== PROPERTY ACCESS ==========
    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def elements(self) -> Optional[OrbitalElements]:
        """Current orbital elements (None before the first reset)"""
        return self._elements

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def time(self) -> float:
        """Simulated time of the current state"""
        return self._state.t

    # ========== MANEUVERS ==========
    def reset(self, t: float, x: float, y: float, vx: float, vy: float) -> bool:
        """
        Put the body on the orbit through (x, y, vx, vy) at simulated time t.

        Returns
        -------
        bool
            False if the state is degenerate (at the center, or zero angular
            momentum); the orbit is then left unchanged.
        """
        if not all_finite(t, x, y, vx, vy):
            validation_error(
                f"State must be finite, got t={t}, ({x}, {y}, {vx}, {vy})")
            return False
        result = determine_orbit(t, x, y, vx, vy)
        if result is None:
            return False
        self._elements, anomaly = result
        st = self._state
        st.t, st.x, st.y, st.vx, st.vy = (float(t), float(x), float(y),
                                          float(vx), float(vy))
        st.anomaly = anomaly
        return True

    def turn(self, delta_deg: float):
        """Rotate the facing offset; the trajectory is unaffected."""
        self._state.facing_offset += delta_deg

    def thrust(self, delta_v: float, extra_angle_deg: float = 0.0) -> bool:
        """
        Impulsive burn of delta_v along the facing direction.

        The facing direction is the velocity direction rotated by the facing
        offset and extra_angle_deg (e.g. 90/270 for strafing).

        Returns
        -------
        bool
            Whether the burn produced a new orbit
        """
        if self._elements is None:
            return False
        st = self._state
        vx, vy = apply_thrust(st.vx, st.vy, delta_v,
                              st.facing_offset + extra_angle_deg)
        return self.reset(st.t, st.x, st.y, vx, vy)

    def randomize(self, max_eccentricity: float = 1.0) -> OrbitalElements:
        """
        Place the body on a random orbit with e < max_eccentricity.

        Random states are drawn and rejected until the eccentricity bound
        holds, at the body's current simulated time.

        Raises
        ------
        RuntimeError
            If no acceptable orbit is found within
            config.RANDOMIZE_MAX_ATTEMPTS draws
        """
        if not max_eccentricity > 0:
            validation_error(
                f"max_eccentricity must be positive, got {max_eccentricity}")
        for _ in range(config.RANDOMIZE_MAX_ATTEMPTS):
            x, y, vx, vy = random_state(self._rng)
            result = determine_orbit(self._state.t, x, y, vx, vy)
            if result is not None and result[0].e < max_eccentricity:
                self.reset(self._state.t, x, y, vx, vy)
                return self._elements
        raise RuntimeError(
            f"No orbit with e < {max_eccentricity} found in "
            f"{config.RANDOMIZE_MAX_ATTEMPTS} attempts")

    # ========== PROPAGATION ==========
    def advance(self, t: float):
        """
        Move the body along its orbit to simulated time t.

        Raises
        ------
        SolverError
            If the anomaly could not be solved. Time and state are left as
            they were.
        """
        st = self._state
        if self._elements is None:
            st.t = float(t)
            return
        seed = None if np.isnan(st.anomaly) else st.anomaly
        state, anomaly = propagate(self._elements, float(t), seed=seed)
        st.t = float(t)
        st.x, st.y, st.vx, st.vy = (float(v) for v in state)
        st.anomaly = anomaly

    def position(self) -> StateVector:
        """Current Cartesian state and facing offset"""
        st = self._state
        return StateVector(st.x, st.y, st.vx, st.vy, st.facing_offset)

    def stats(self) -> OrbitStats:
        """
        Current (l, e, theta0) and polar angle theta of the body.

        Raises
        ------
        AttributeError
            Before the first successful reset
        """
        if self._elements is None:
            raise AttributeError("Orbit has not been reset yet")
        el = self._elements
        theta = float(np.arctan2(self._state.y, self._state.x))
        return OrbitStats(el.l, el.e, el.theta0, theta)

    def sample(self, times: Sequence[float]):
        """
        Evaluate the orbit at several times without changing its state.

        Parameters
        ----------
        times : array-like
            Simulated times, evaluated in order with warm-started solves

        Returns
        -------
        pd.DataFrame
            Columns ['x', 'y', 'vx', 'vy'] indexed by time
        """
        # pandas isn't needed unless this function is used
        try:
            import pandas as pd
        except ImportError:
            raise ImportError("pandas required for sample()")
        if self._elements is None:
            raise AttributeError("Orbit has not been reset yet")

        times = np.atleast_1d(np.asarray(times, dtype=float))
        rows = []
        seed = None
        for t in times:
            state, seed = propagate(self._elements, t, seed=seed)
            rows.append(state)
        data = np.array(rows).reshape(len(times), 4)
        return pd.DataFrame(data, columns=['x', 'y', 'vx', 'vy'],
                            index=pd.Index(times, name='t'))

    # ========== VIEW EXTENT ==========
    def radius(self) -> float:
        """Chebyshev distance max(|x|, |y|) of the body from the center"""
        return max(abs(self._state.x), abs(self._state.y))

    def extent(self, body_radius: float = 0.0) -> float:
        """
        Size of the region a view must show for this orbit.

        Full major axis for bound orbits, current radius otherwise, padded by
        the body's own radius.
        """
        el = self._elements
        if el is not None and el.conic_type == ConicType.ELLIPSE:
            return 2 * el.geometry.a + body_radius
        return self.radius() + body_radius

    # ========== SPECIAL METHODS ==========
    def __repr__(self):
        name_str = f"'{self._name}'" if self._name else "unnamed"
        return f"Orbit({name_str}, t={self._state.t}, elements={self._elements!r})"
